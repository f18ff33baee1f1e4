"""
Content negotiation for rest_client.
"""
from .accept_header import (
    ACCEPT,
    ACCEPT_ENCODING,
    format_accept_header,
    project_accept_header,
)
from .handler_registry import (
    WILDCARD,
    HandlerRegistry,
    media_type,
    split_content_encoding,
)
from .handlers import (
    DeflateEncoding,
    GzipEncoding,
    JsonDeserializer,
    TextDeserializer,
)

__all__ = [
    "ACCEPT",
    "ACCEPT_ENCODING",
    "format_accept_header",
    "project_accept_header",
    "WILDCARD",
    "HandlerRegistry",
    "media_type",
    "split_content_encoding",
    "DeflateEncoding",
    "GzipEncoding",
    "JsonDeserializer",
    "TextDeserializer",
]
