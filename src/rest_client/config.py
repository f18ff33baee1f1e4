"""
Configuration for rest_client.
"""
import json
import os
from dataclasses import dataclass
from http.cookiejar import CookieJar
from typing import TYPE_CHECKING, Any, Callable, Literal, Optional, Union
from urllib.parse import urlparse

from .types import NameComparer

if TYPE_CHECKING:
    from .auth.authenticator import Authenticator
    from .core.request import RestRequest


AuthType = Literal["basic", "bearer", "x-api-key", "custom"]


def _mask_sensitive(value: Optional[str], visible_chars: int = 10) -> str:
    """Mask sensitive value for safe logging."""
    if value is None:
        return "<None>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def ordinal(left: str, right: str) -> bool:
    """Case-sensitive name comparison (the default)."""
    return left == right


def ordinal_ignore_case(left: str, right: str) -> bool:
    """Case-insensitive name comparison, the convention for header names."""
    return left.casefold() == right.casefold()


@dataclass
class Credentials:
    """User credentials handed to authenticators."""

    username: str
    password: str
    domain: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"Credentials(username={self.username!r}, "
            f"password={_mask_sensitive(self.password)!r}, "
            f"domain={self.domain!r})"
        )


@dataclass
class AuthConfig:
    """Header authentication configuration.

    Auth types:
    - basic: Authorization: Basic <base64(username:password|raw_api_key)>
    - bearer: Authorization: Bearer <raw_api_key>
    - x-api-key: raw_api_key in X-API-Key header
    - custom: raw_api_key in the header named by header_name
    """

    type: AuthType
    raw_api_key: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    header_name: Optional[str] = None
    get_api_key_for_request: Optional[Callable[["RestRequest"], Optional[str]]] = None

    def __repr__(self) -> str:
        """Safe repr that masks sensitive values."""
        return (
            f"AuthConfig(type={self.type!r}, "
            f"raw_api_key={_mask_sensitive(self.raw_api_key)!r}, "
            f"username={self.username!r}, "
            f"password={_mask_sensitive(self.password)!r}, "
            f"header_name={self.header_name!r}, "
            f"has_callback={self.get_api_key_for_request is not None})"
        )


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


@dataclass
class ClientConfig:
    """Client configuration.

    Lives as long as the client instance. The authenticator, credentials
    and status-code policy are read on every execution, so they may be
    changed between calls.
    """

    base_url: Optional[str] = None
    authenticator: Optional["Authenticator"] = None
    auth: Optional[AuthConfig] = None
    credentials: Optional[Any] = None
    proxy: Optional[str] = None
    timeout: Union[TimeoutConfig, float, None] = None
    cookie_jar: Optional[CookieJar] = None
    ignore_response_status_code: bool = False
    default_parameter_name_comparer: Optional[NameComparer] = None
    max_challenge_retries: Optional[int] = None
    follow_redirects: bool = True
    verify_ssl: Optional[bool] = None
    trace: bool = False


# Default values
DEFAULT_TIMEOUT = TimeoutConfig()


class DefaultSerializer:
    """Default JSON serializer."""

    def serialize(self, data: Any) -> str:
        """Serialize data to JSON string."""
        return json.dumps(data)

    def deserialize(self, text: str) -> Any:
        """Deserialize JSON string to data."""
        return json.loads(text)


default_serializer = DefaultSerializer()


def is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def resolve_verify_ssl(config: ClientConfig) -> bool:
    """Explicit config wins over the environment."""
    if config.verify_ssl is not None:
        return config.verify_ssl
    return not is_ssl_verify_disabled_by_env()


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return TimeoutConfig()
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def resolve_name_comparer(
    config: ClientConfig, request: Optional["RestRequest"] = None
) -> NameComparer:
    """Pick the request comparer, then the client default, then ordinal."""
    if request is not None and request.parameter_name_comparer is not None:
        return request.parameter_name_comparer
    if config.default_parameter_name_comparer is not None:
        return config.default_parameter_name_comparer
    return ordinal


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    if config.base_url:
        try:
            parsed = urlparse(config.base_url)
            if not parsed.scheme or not parsed.netloc:
                raise ValueError(f"Invalid base_url: {config.base_url}")
        except Exception as e:
            raise ValueError(f"Invalid base_url: {config.base_url}") from e

    if config.max_challenge_retries is not None and config.max_challenge_retries < 0:
        raise ValueError("max_challenge_retries must be >= 0 or None")

    if config.auth:
        validate_auth_config(config.auth)


def validate_auth_config(auth: AuthConfig) -> None:
    """Validate auth configuration."""
    valid_types = {"basic", "bearer", "x-api-key", "custom"}

    if auth.type not in valid_types:
        raise ValueError(f"Invalid auth type: {auth.type}. Must be one of: {sorted(valid_types)}")

    if auth.type == "basic":
        has_secret = auth.password or auth.raw_api_key
        if not auth.username or not has_secret:
            raise ValueError("basic auth requires username AND (password OR raw_api_key)")

    elif auth.type in ("bearer", "x-api-key"):
        if not auth.raw_api_key and not auth.get_api_key_for_request:
            raise ValueError(f"raw_api_key or get_api_key_for_request is required for {auth.type} auth type")

    elif auth.type == "custom":
        if not auth.header_name:
            raise ValueError("header_name is required for custom auth type")
        if not auth.raw_api_key and not auth.get_api_key_for_request:
            raise ValueError("raw_api_key or get_api_key_for_request is required for custom auth type")
