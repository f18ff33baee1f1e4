"""
Materialized response: decoded bytes plus deserialized data.
"""
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

import httpx

from ..negotiation.handler_registry import split_content_encoding
from ..negotiation.handlers import decode_text
from .request import RestRequest

if TYPE_CHECKING:
    from .base_client import RestClient

logger = logging.getLogger("rest_client.response")

T = TypeVar("T")


async def read_wire_bytes(response: httpx.Response) -> Optional[bytes]:
    """Body bytes as received, before any content decoding.

    An unread response is drained with ``aiter_raw``. A response httpx read
    up front from an in-memory ``ByteStream`` still holds the wire bytes in
    that stream. Returns None when neither applies.
    """
    if not response.is_stream_consumed:
        return b"".join([chunk async for chunk in response.aiter_raw()])
    if isinstance(response.stream, httpx.ByteStream):
        return b"".join([chunk async for chunk in response.stream])
    return None


@dataclass
class RestResponse(Generic[T]):
    """Response returned by RestClient.execute."""

    request: RestRequest
    status_code: int
    reason_phrase: str
    headers: httpx.Headers
    url: str = ""
    raw_bytes: bytes = b""
    content_type: Optional[str] = None
    data: Optional[T] = None
    error: Optional[Exception] = field(default=None, repr=False)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content(self) -> str:
        return decode_text(self.raw_bytes, self.content_type)

    @classmethod
    async def create(
        cls,
        client: "RestClient",
        request: RestRequest,
        response: httpx.Response,
        target_type: Optional[Any] = None,
    ) -> "RestResponse":
        """Read the body, undo content encoding and deserialize.

        With ``target_type`` deserialization errors propagate; without it a
        body the handler cannot parse leaves ``data`` empty and ``error`` set.
        """
        raw = await read_wire_bytes(response)
        if raw is None:
            # Read earlier from a one-shot stream; only httpx's decoded body is left
            logger.debug("RestResponse.create: wire bytes unavailable, using httpx-decoded content")
            raw = response.content
        else:
            content_encoding = response.headers.get("content-encoding")
            tokens = split_content_encoding(content_encoding)
            if tokens:
                encoding = client.get_encoding(tokens)
                if encoding is not None:
                    raw = encoding.decode(raw, content_encoding)
                else:
                    logger.debug(f"RestResponse.create: no decoder for {content_encoding!r}, body left encoded")

        content_type = response.headers.get("content-type")
        result = cls(
            request=request,
            status_code=response.status_code,
            reason_phrase=response.reason_phrase or "",
            headers=response.headers,
            url=str(response.request.url),
            raw_bytes=raw,
            content_type=content_type,
        )

        handler = client.get_handler(content_type)
        if handler is None or not raw:
            return result

        if target_type is not None:
            result.data = handler.deserialize(raw, content_type, target_type)
            return result

        try:
            result.data = handler.deserialize(raw, content_type)
        except ValueError as exc:
            logger.debug(f"RestResponse.create: {type(handler).__name__} could not parse body: {exc}")
            result.error = exc
        return result
