"""
Factory functions for creating REST clients.
"""
from typing import Any, Dict, Optional, Union

import httpx

from .auth.authenticator import Authenticator
from .config import AuthConfig, ClientConfig, TimeoutConfig
from .core.base_client import RestClient
from .core.transport import HttpClientFactory


def create_client(
    base_url: str,
    *,
    auth: Optional[AuthConfig] = None,
    authenticator: Optional[Authenticator] = None,
    timeout: Optional[Union[float, TimeoutConfig]] = None,
    default_headers: Optional[Dict[str, str]] = None,
    default_query: Optional[Dict[str, Any]] = None,
    ignore_response_status_code: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **config_kwargs: Any,
) -> RestClient:
    """
    Create a REST client with the given configuration.

    Args:
        base_url: Base URL for all requests.
        auth: Header authentication configuration.
        authenticator: Explicit authenticator; takes precedence over ``auth``.
        timeout: Request timeout (seconds or TimeoutConfig).
        default_headers: Headers sent with every request.
        default_query: Query parameters added to every request unless the
            request sets the same name.
        ignore_response_status_code: Return non-2xx responses instead of raising.
        transport: httpx transport for the lazily created httpx client.
        **config_kwargs: Any other ClientConfig field.

    Example:
        client = create_client(
            "https://api.example.com",
            auth=AuthConfig(type="bearer", raw_api_key="secret"),
        )
        async with client:
            response = await client.get("/users")
    """
    config = ClientConfig(
        base_url=base_url,
        auth=auth,
        authenticator=authenticator,
        timeout=timeout,
        ignore_response_status_code=ignore_response_status_code,
        **config_kwargs,
    )
    client = RestClient(config, http_client_factory=HttpClientFactory(transport))
    for name, value in (default_headers or {}).items():
        client.add_default_header(name, value)
    for name, value in (default_query or {}).items():
        client.add_default_query_parameter(name, value)
    return client
