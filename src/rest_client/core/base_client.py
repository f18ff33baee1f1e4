"""
REST client built on httpx.
"""
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import httpx

from ..auth.auth_handler import create_authenticator
from ..auth.authenticator import Authenticator
from ..config import AuthConfig, ClientConfig, default_serializer, resolve_name_comparer, validate_config
from ..console import print_response_body
from ..negotiation.accept_header import ACCEPT, ACCEPT_ENCODING
from ..negotiation.handler_registry import HandlerRegistry, media_type
from ..negotiation.handlers import JsonDeserializer
from ..parameters import remove_parameters, validate_header_parameter
from ..types import CapabilityKind, Deserializer, Encoding, HttpMethod, Parameter, ParameterType
from .cancellation import CancellationToken
from .executor import execute_request
from .request import RestRequest
from .response import RestResponse
from .transport import HttpClientFactory

logger = logging.getLogger("rest_client.base_client")

DEFAULT_JSON_CONTENT_TYPES = (
    "application/json",
    "text/json",
    "text/x-json",
    "text/javascript",
)


class RestClient:
    """Asynchronous REST client.

    Holds the client-wide configuration, the content/encoding handler
    registries and the default parameters applied to every request. The
    httpx client is created on first execution and reused afterwards.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client_factory: Optional[HttpClientFactory] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config if config is not None else ClientConfig()
        validate_config(self.config)
        self.http_client_factory = http_client_factory or HttpClientFactory()
        self.serializer = default_serializer
        self.default_parameters: List[Parameter] = []
        self._content_handlers: HandlerRegistry[Deserializer] = HandlerRegistry(ACCEPT, self.default_parameters)
        self._encoding_handlers: HandlerRegistry[Encoding] = HandlerRegistry(ACCEPT_ENCODING, self.default_parameters)
        self._http_client = http_client
        self._http_client_lock = threading.Lock()
        self._auth_source: Optional[AuthConfig] = None
        self._auth_authenticator: Optional[Authenticator] = None
        self._closed = False

        json_deserializer = JsonDeserializer(self.serializer)
        for content_type in DEFAULT_JSON_CONTENT_TYPES:
            self.add_handler(content_type, json_deserializer)

    # ------------------------------------------------------------------
    # Configuration accessors
    # ------------------------------------------------------------------

    @property
    def authenticator(self) -> Optional[Authenticator]:
        """Explicit authenticator, else one built from ``config.auth``."""
        if self.config.authenticator is not None:
            return self.config.authenticator
        if self.config.auth is None:
            return None
        if self._auth_source is not self.config.auth:
            self._auth_authenticator = create_authenticator(self.config.auth)
            self._auth_source = self.config.auth
        return self._auth_authenticator

    @property
    def accept_types(self) -> Tuple[str, ...]:
        return self._content_handlers.advertised

    @property
    def accept_encodings(self) -> Tuple[str, ...]:
        return self._encoding_handlers.advertised

    def get_http_client(self, request: RestRequest) -> httpx.AsyncClient:
        """Return the shared httpx client, creating it once."""
        if self._http_client is None:
            with self._http_client_lock:
                if self._http_client is None:
                    logger.debug("RestClient.get_http_client: creating transport client")
                    self._http_client = self.http_client_factory.create_client(self, request)
        return self._http_client

    # ------------------------------------------------------------------
    # Content handlers
    # ------------------------------------------------------------------

    def add_handler(self, content_type: str, deserializer: Deserializer) -> "RestClient":
        self._content_handlers.add(content_type, deserializer)
        return self

    def remove_handler(self, content_type: str) -> "RestClient":
        self._content_handlers.remove(content_type)
        return self

    def clear_handlers(self) -> "RestClient":
        self._content_handlers.clear()
        return self

    def replace_handler(self, kind: CapabilityKind, deserializer: Deserializer) -> "RestClient":
        self._content_handlers.replace(kind, deserializer)
        return self

    def get_handler(self, content_type: Optional[str]) -> Optional[Deserializer]:
        """Handler for a Content-Type value, the wildcard handler, or None."""
        return self._content_handlers.find([media_type(content_type)])

    # ------------------------------------------------------------------
    # Encoding handlers
    # ------------------------------------------------------------------

    def add_encoding(self, encoding_id: str, encoding: Encoding) -> "RestClient":
        self._encoding_handlers.add(encoding_id, encoding)
        return self

    def remove_encoding(self, encoding_id: str) -> "RestClient":
        self._encoding_handlers.remove(encoding_id)
        return self

    def clear_encodings(self) -> "RestClient":
        self._encoding_handlers.clear()
        return self

    def replace_encoding(self, kind: CapabilityKind, encoding: Encoding) -> "RestClient":
        self._encoding_handlers.replace(kind, encoding)
        return self

    def get_encoding(self, encoding_ids: Optional[Iterable[str]]) -> Optional[Encoding]:
        """First of ``encoding_ids`` with a decoder, the wildcard decoder, or None."""
        return self._encoding_handlers.find(encoding_ids or [])

    # ------------------------------------------------------------------
    # Default parameters
    # ------------------------------------------------------------------

    def add_default_parameter(
        self,
        name: Union[str, Parameter],
        value: Any = None,
        kind: ParameterType = ParameterType.QUERY_STRING,
    ) -> "RestClient":
        parameter = name if isinstance(name, Parameter) else Parameter(name, value, kind)
        if parameter.kind == ParameterType.HTTP_HEADER and parameter.validate_on_add:
            validate_header_parameter(parameter)
        self.default_parameters.append(parameter)
        return self

    def add_default_header(self, name: str, value: str) -> "RestClient":
        return self.add_default_parameter(Parameter(name, value, ParameterType.HTTP_HEADER, validate_on_add=True))

    def add_default_query_parameter(self, name: str, value: Any) -> "RestClient":
        return self.add_default_parameter(name, value, ParameterType.QUERY_STRING)

    def add_default_url_segment(self, name: str, value: Any) -> "RestClient":
        return self.add_default_parameter(name, value, ParameterType.URL_SEGMENT)

    def remove_default_parameter(self, name: str, kind: Optional[ParameterType] = None) -> "RestClient":
        remove_parameters(self.default_parameters, name, kind, resolve_name_comparer(self.config))
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Client has been closed")

    async def execute_raw(
        self,
        request: RestRequest,
        cancel_token: Optional[CancellationToken] = None,
    ) -> httpx.Response:
        """Run the request and return the still-open httpx response.

        The caller must release it (``await response.aclose()``).
        """
        self._ensure_open()
        return await execute_request(self, request, cancel_token)

    async def execute(
        self,
        request: RestRequest,
        cancel_token: Optional[CancellationToken] = None,
    ) -> RestResponse:
        return await self._execute(request, None, cancel_token)

    async def execute_as(
        self,
        request: RestRequest,
        target_type: Any,
        cancel_token: Optional[CancellationToken] = None,
    ) -> RestResponse:
        return await self._execute(request, target_type, cancel_token)

    async def _execute(
        self,
        request: RestRequest,
        target_type: Any,
        cancel_token: Optional[CancellationToken],
    ) -> RestResponse:
        response = await self.execute_raw(request, cancel_token)
        try:
            result = await RestResponse.create(self, request, response, target_type)
        finally:
            await self.http_client_factory.release_response(response)
        if self.config.trace:
            print_response_body(result.data, result.url)
        return result

    async def request(
        self,
        method: HttpMethod = "GET",
        resource: str = "",
        *,
        headers: Optional[Dict[str, str]] = None,
        query: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        body: Optional[Union[str, bytes]] = None,
        content_type: str = "text/plain",
        timeout: Optional[float] = None,
        target_type: Optional[Any] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> RestResponse:
        """Build a RestRequest from keyword options and execute it."""
        request = RestRequest(resource, method, timeout=timeout)
        for name, value in (headers or {}).items():
            request.add_header(name, value)
        for name, value in (query or {}).items():
            request.add_query_parameter(name, value)
        if json is not None:
            request.add_json_body(json)
        elif body is not None:
            request.add_body(body, content_type)
        return await self._execute(request, target_type, cancel_token)

    async def get(self, resource: str, **kwargs: Any) -> RestResponse:
        """GET request."""
        return await self.request("GET", resource, **kwargs)

    async def post(self, resource: str, **kwargs: Any) -> RestResponse:
        """POST request."""
        return await self.request("POST", resource, **kwargs)

    async def put(self, resource: str, **kwargs: Any) -> RestResponse:
        """PUT request."""
        return await self.request("PUT", resource, **kwargs)

    async def patch(self, resource: str, **kwargs: Any) -> RestResponse:
        """PATCH request."""
        return await self.request("PATCH", resource, **kwargs)

    async def delete(self, resource: str, **kwargs: Any) -> RestResponse:
        """DELETE request."""
        return await self.request("DELETE", resource, **kwargs)

    async def close(self) -> None:
        """Close the client and its httpx client, if one exists."""
        self._closed = True
        if self._http_client is not None:
            await self._http_client.aclose()

    async def __aenter__(self) -> "RestClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()
