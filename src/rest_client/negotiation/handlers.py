"""
Stock content and encoding handlers.
"""
import gzip
import zlib
from typing import Any, Optional

from pydantic import TypeAdapter

from ..config import default_serializer
from ..types import CapabilityKind, Serializer


def charset_from_content_type(content_type: Optional[str], default: str = "utf-8") -> str:
    """Extract the charset parameter of a Content-Type value."""
    if not content_type:
        return default
    for part in content_type.split(";")[1:]:
        key, _, value = part.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            return value.strip().strip('"')
    return default


def decode_text(content: bytes, content_type: Optional[str] = None) -> str:
    try:
        return content.decode(charset_from_content_type(content_type))
    except LookupError:
        return content.decode("utf-8", errors="replace")


class JsonDeserializer:
    """JSON content handler; typed targets are validated with pydantic."""

    kind = CapabilityKind.JSON

    def __init__(self, serializer: Optional[Serializer] = None):
        self._serializer = serializer or default_serializer

    def deserialize(
        self,
        content: bytes,
        content_type: Optional[str] = None,
        target_type: Optional[Any] = None,
    ) -> Any:
        text = decode_text(content, content_type)
        if not text.strip():
            return None
        data = self._serializer.deserialize(text)
        if target_type is None:
            return data
        return TypeAdapter(target_type).validate_python(data)


class TextDeserializer:
    """Plain text content handler."""

    kind = CapabilityKind.TEXT

    def deserialize(
        self,
        content: bytes,
        content_type: Optional[str] = None,
        target_type: Optional[Any] = None,
    ) -> Any:
        text = decode_text(content, content_type)
        if target_type is None or target_type is str:
            return text
        return TypeAdapter(target_type).validate_python(text)


class GzipEncoding:
    """gzip content-encoding decoder."""

    kind = CapabilityKind.GZIP

    def decode(self, content: bytes, content_encoding: Optional[str] = None) -> bytes:
        return gzip.decompress(content)


class DeflateEncoding:
    """deflate content-encoding decoder (zlib-wrapped or raw)."""

    kind = CapabilityKind.DEFLATE

    def decode(self, content: bytes, content_encoding: Optional[str] = None) -> bytes:
        try:
            return zlib.decompress(content)
        except zlib.error:
            # Some servers send raw deflate without the zlib header
            return zlib.decompress(content, -zlib.MAX_WBITS)
