"""
Registry of content-type and content-encoding handlers.
"""
import logging
from typing import Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from ..types import CapabilityKind, Parameter
from .accept_header import project_accept_header

logger = logging.getLogger("rest_client.handler_registry")

WILDCARD = "*"

H = TypeVar("H")


def media_type(content_type: Optional[str]) -> str:
    """Strip parameters such as charset from a Content-Type value."""
    if content_type is None:
        return ""
    semicolon_index = content_type.find(";")
    if semicolon_index != -1:
        content_type = content_type[:semicolon_index].rstrip()
    return content_type


def split_content_encoding(value: Optional[str]) -> List[str]:
    """Split a Content-Encoding header into tokens, in server order."""
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


class HandlerRegistry(Generic[H]):
    """Identifier to handler mapping plus the advertised identifier list.

    Lookups ignore case. The advertised list keeps insertion order and
    duplicates; removal drops only the first entry equal to the identifier.
    The wildcard "*" is a lookup fallback and never advertised. Every change
    to the advertised list is projected into ``header_name`` on the shared
    default parameter list.
    """

    def __init__(self, header_name: str, default_parameters: List[Parameter]):
        self._header_name = header_name
        self._default_parameters = default_parameters
        self._handlers: Dict[str, Tuple[str, H]] = {}
        self._advertised: List[str] = []

    @property
    def advertised(self) -> Tuple[str, ...]:
        """Advertised identifiers in registration order."""
        return tuple(self._advertised)

    def add(self, identifier: str, handler: H) -> None:
        self._handlers[identifier.casefold()] = (identifier, handler)
        if identifier == WILDCARD:
            return
        self._advertised.append(identifier)
        self._project()

    def remove(self, identifier: str) -> None:
        self._handlers.pop(identifier.casefold(), None)
        if identifier == WILDCARD:
            return
        if identifier in self._advertised:
            self._advertised.remove(identifier)
        self._project()

    def clear(self) -> None:
        self._handlers.clear()
        self._advertised.clear()
        self._project()

    def replace(self, kind: CapabilityKind, handler: H) -> int:
        """Rebind every entry whose handler is of ``kind``; returns the count."""
        replaced = 0
        for key, (identifier, current) in list(self._handlers.items()):
            if getattr(current, "kind", None) == kind:
                self._handlers[key] = (identifier, handler)
                replaced += 1
        logger.debug(f"HandlerRegistry.replace: kind={kind.value}, replaced={replaced}")
        self._project()
        return replaced

    def find(self, identifiers: Iterable[str]) -> Optional[H]:
        """First identifier with a handler, in the order given; then the wildcard."""
        for identifier in identifiers:
            entry = self._handlers.get(identifier.casefold())
            if entry is not None:
                return entry[1]
        wildcard = self._handlers.get(WILDCARD)
        if wildcard is not None:
            return wildcard[1]
        return None

    def _project(self) -> None:
        project_accept_header(self._default_parameters, self._header_name, self._advertised)
