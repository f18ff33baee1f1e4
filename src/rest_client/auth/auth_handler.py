"""
Header authenticators for rest_client.
"""
import base64
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

from ..config import AuthConfig, Credentials
from ..types import Parameter, ParameterType
from .authenticator import Authenticator

if TYPE_CHECKING:
    from ..core.base_client import RestClient
    from ..core.request import RestRequest

logger = logging.getLogger(__name__)
LOG_PREFIX = "[AUTH:rest_client.auth]"

ApiKeyCallback = Callable[["RestRequest"], Optional[str]]


def _mask_value(val: Optional[str]) -> str:
    """Mask sensitive value for logging, showing first 10 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 10:
        return "*" * len(val)
    return val[:10] + "*" * (len(val) - 10)


def encode_basic(username: str, password: str) -> str:
    """Build a Basic Authorization header value."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("utf-8")
    return f"Basic {token}"


class HeaderAuthenticator(Authenticator, ABC):
    """Adds one header to every request before the message is built."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        get_api_key_for_request: Optional[ApiKeyCallback] = None,
    ):
        self._api_key = api_key
        self._get_api_key_for_request = get_api_key_for_request

    def _resolve_key(self, request: "RestRequest") -> Optional[str]:
        """Callback first, static key as fallback."""
        key = None
        if self._get_api_key_for_request:
            key = self._get_api_key_for_request(request)
        if not key:
            key = self._api_key
        return key

    @abstractmethod
    def get_header(
        self, request: "RestRequest", credentials: Any = None
    ) -> Optional[Dict[str, str]]:
        """Get auth header for request."""
        ...

    def can_pre_authenticate_request(
        self, client: "RestClient", request: "RestRequest", credentials: Any
    ) -> bool:
        return True

    async def pre_authenticate_request(
        self, client: "RestClient", request: "RestRequest", credentials: Any
    ) -> None:
        header = self.get_header(request, credentials)
        if not header:
            logger.debug(f"{LOG_PREFIX} {type(self).__name__}: no key available, request left as-is")
            return
        for name, value in header.items():
            request.add_or_update_parameter(
                Parameter(name, value, ParameterType.HTTP_HEADER, validate_on_add=True)
            )


class BearerAuthenticator(HeaderAuthenticator):
    """Bearer token authenticator."""

    def get_header(
        self, request: "RestRequest", credentials: Any = None
    ) -> Optional[Dict[str, str]]:
        key = self._resolve_key(request)
        if not key:
            return None
        header = {"Authorization": f"Bearer {key}"}
        logger.debug(
            f"{LOG_PREFIX} BearerAuthenticator.get_header: api_key={_mask_value(key)} -> "
            f"Authorization={_mask_value(header['Authorization'])}"
        )
        return header


class XApiKeyAuthenticator(HeaderAuthenticator):
    """X-API-Key authenticator."""

    def get_header(
        self, request: "RestRequest", credentials: Any = None
    ) -> Optional[Dict[str, str]]:
        key = self._resolve_key(request)
        if not key:
            return None
        logger.debug(f"{LOG_PREFIX} XApiKeyAuthenticator.get_header: api_key={_mask_value(key)}")
        return {"X-API-Key": key}


class CustomHeaderAuthenticator(HeaderAuthenticator):
    """Raw key in a caller-chosen header."""

    def __init__(
        self,
        header_name: str,
        api_key: Optional[str] = None,
        get_api_key_for_request: Optional[ApiKeyCallback] = None,
    ):
        super().__init__(api_key, get_api_key_for_request)
        self._header_name = header_name

    def get_header(
        self, request: "RestRequest", credentials: Any = None
    ) -> Optional[Dict[str, str]]:
        key = self._resolve_key(request)
        if not key:
            return None
        logger.debug(
            f"{LOG_PREFIX} CustomHeaderAuthenticator.get_header: header_name={self._header_name}, "
            f"api_key={_mask_value(key)}"
        )
        return {self._header_name: key}


class HttpBasicAuthenticator(HeaderAuthenticator):
    """HTTP Basic authenticator.

    Uses the explicit username/password when given, otherwise the client
    credentials (a ``Credentials`` instance) passed to the hook.
    """

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None):
        super().__init__()
        self._username = username
        self._password = password

    def _pair(self, credentials: Any = None) -> Optional[Tuple[str, str]]:
        if self._username is not None and self._password is not None:
            return self._username, self._password
        if isinstance(credentials, Credentials):
            return credentials.username, credentials.password
        return None

    def can_pre_authenticate_request(
        self, client: "RestClient", request: "RestRequest", credentials: Any
    ) -> bool:
        return self._pair(credentials) is not None

    def get_header(
        self, request: "RestRequest", credentials: Any = None
    ) -> Optional[Dict[str, str]]:
        pair = self._pair(credentials)
        if pair is None:
            return None
        logger.debug(f"{LOG_PREFIX} HttpBasicAuthenticator.get_header: username={pair[0]}")
        return {"Authorization": encode_basic(*pair)}


def create_authenticator(config: AuthConfig) -> Authenticator:
    """Create authenticator from config."""
    logger.debug(
        f"{LOG_PREFIX} create_authenticator: type={config.type}, "
        f"raw_api_key={_mask_value(config.raw_api_key)}, username={config.username}"
    )

    if config.type == "basic":
        return HttpBasicAuthenticator(config.username, config.password or config.raw_api_key)
    elif config.type == "x-api-key":
        return XApiKeyAuthenticator(config.raw_api_key, config.get_api_key_for_request)
    elif config.type == "custom":
        return CustomHeaderAuthenticator(
            config.header_name or "Authorization",
            config.raw_api_key,
            config.get_api_key_for_request,
        )
    else:
        logger.debug(f"{LOG_PREFIX} create_authenticator: {config.type!r} handled as bearer")
        return BearerAuthenticator(config.raw_api_key, config.get_api_key_for_request)
