"""
Default httpx-backed transport factory.
"""
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from ..config import normalize_timeout, resolve_verify_ssl
from .request import RestRequest
from .request_builder import build_headers, build_request_url

if TYPE_CHECKING:
    from .base_client import RestClient

logger = logging.getLogger("rest_client.transport")

# httpx adds these by default; negotiation headers must come from the registries
_NEGOTIATION_HEADERS = ("accept", "accept-encoding")


class HttpClientFactory:
    """Creates the transport client and wire messages for a RestClient.

    ``transport`` is handed to every created httpx.AsyncClient, which is
    how tests plug in httpx.MockTransport.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    def create_client(self, client: "RestClient", request: RestRequest) -> httpx.AsyncClient:
        config = client.config
        timeout = normalize_timeout(config.timeout)
        kwargs: Dict[str, Any] = {
            "timeout": httpx.Timeout(
                connect=timeout.connect,
                read=timeout.read,
                write=timeout.write,
                pool=timeout.connect,
            ),
            "verify": resolve_verify_ssl(config),
            "follow_redirects": config.follow_redirects,
        }
        if config.proxy:
            kwargs["proxy"] = config.proxy
        if config.cookie_jar is not None:
            # httpx keeps a reference to a CookieJar, so cookies accumulate there
            kwargs["cookies"] = config.cookie_jar
        if isinstance(config.credentials, httpx.Auth):
            kwargs["auth"] = config.credentials
        if self._transport is not None:
            kwargs["transport"] = self._transport

        logger.debug(
            f"HttpClientFactory.create_client: proxy={bool(config.proxy)}, "
            f"verify={kwargs['verify']}, follow_redirects={config.follow_redirects}"
        )
        http_client = httpx.AsyncClient(**kwargs)
        for name in _NEGOTIATION_HEADERS:
            http_client.headers.pop(name, None)
        return http_client

    def create_message(
        self,
        http_client: httpx.AsyncClient,
        client: "RestClient",
        request: RestRequest,
        content: Optional[bytes] = None,
        content_type: Optional[str] = None,
    ) -> httpx.Request:
        url = build_request_url(client.config.base_url, request.resource, request.parameters)
        headers = build_headers(request.parameters, client.default_parameters)
        if content is not None and content_type:
            if not any(name.lower() == "content-type" for name, _ in headers):
                headers.append(("Content-Type", content_type))

        kwargs: Dict[str, Any] = {"headers": headers, "content": content}
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout
        message = http_client.build_request(request.method, url, **kwargs)

        # An injected httpx client may still carry httpx's own negotiation defaults
        sent = {name.lower() for name, _ in headers}
        for name in _NEGOTIATION_HEADERS:
            if name not in sent and name in message.headers:
                del message.headers[name]
        return message

    async def release_message(self, message: httpx.Request) -> None:
        aclose = getattr(message.stream, "aclose", None)
        if aclose is not None:
            await aclose()

    async def release_response(self, response: httpx.Response) -> None:
        await response.aclose()
