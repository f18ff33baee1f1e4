"""
Type definitions for rest_client.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Literal, Optional, Protocol, runtime_checkable


# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# String-equality rule used to match parameter names
NameComparer = Callable[[str, str], bool]


class ParameterType(str, Enum):
    """Where a parameter ends up on the wire."""

    URL_SEGMENT = "url_segment"
    QUERY_STRING = "query_string"
    REQUEST_BODY = "request_body"
    HTTP_HEADER = "http_header"


@dataclass(frozen=True)
class Parameter:
    """A single request parameter.

    For REQUEST_BODY parameters the name carries the body content type.
    """

    name: str
    value: Any
    kind: ParameterType = ParameterType.QUERY_STRING
    validate_on_add: bool = False


class CapabilityKind(str, Enum):
    """Declared kind of a content or encoding handler.

    Used by replace_handler/replace_encoding to rebind every entry of a
    kind in one go.
    """

    # Content handlers
    JSON = "json"
    # No stock XML handler; kind for caller-registered XML deserializers
    XML = "xml"
    TEXT = "text"
    # Encoding handlers
    GZIP = "gzip"
    DEFLATE = "deflate"


@runtime_checkable
class Deserializer(Protocol):
    """Content handler protocol, looked up by content type."""

    kind: CapabilityKind

    def deserialize(
        self,
        content: bytes,
        content_type: Optional[str] = None,
        target_type: Optional[Any] = None,
    ) -> Any:
        """Turn raw response bytes into a structured value."""
        ...


@runtime_checkable
class Encoding(Protocol):
    """Content-encoding handler protocol, looked up by encoding token."""

    kind: CapabilityKind

    def decode(self, content: bytes, content_encoding: Optional[str] = None) -> bytes:
        """Decode raw response bytes."""
        ...


class Serializer(Protocol):
    """Serializer protocol for custom JSON handling."""

    def serialize(self, data: Any) -> str:
        """Serialize data to string."""
        ...

    def deserialize(self, text: str) -> Any:
        """Deserialize string to data."""
        ...
