"""
Errors raised by rest_client.
"""
from typing import Any, Optional


class RestClientError(Exception):
    """Base class for all rest_client errors."""


class TransportError(RestClientError):
    """Connecting to or exchanging data with the server failed."""


class AuthenticationError(RestClientError):
    """An authenticator hook failed."""


class RequestCancelledError(RestClientError):
    """The caller cancelled the request before a response arrived."""


class UnsuccessfulStatusError(RestClientError):
    """The server answered with a status outside the 2xx range."""

    def __init__(
        self,
        status_code: int,
        reason_phrase: str = "",
        content: bytes = b"",
        response: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.content = content
        self.response = response
        super().__init__(f"HTTP {status_code}: {reason_phrase}".rstrip(": "))

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")
