"""
Shared fixtures for rest_client tests.
"""
from typing import Callable, List

import httpx
import pytest

from rest_client.config import ClientConfig
from rest_client.core.base_client import RestClient
from rest_client.core.response import read_wire_bytes
from rest_client.core.transport import HttpClientFactory

BASE_URL = "https://api.example.com"


class UnreadStream(httpx.AsyncByteStream):
    """Async body stream that is only consumed when the client reads it."""

    def __init__(self, body: bytes):
        self._body = body

    async def __aiter__(self):
        yield self._body

    async def aclose(self) -> None:
        pass


class UnreadMockTransport(httpx.AsyncBaseTransport):
    """httpx.MockTransport whose responses arrive unread, as from a socket.

    httpx reads responses built from in-memory content up front; re-wrapping
    the wire bytes in an async stream keeps content decoding to the client.
    """

    def __init__(self, handler):
        self._mock = httpx.MockTransport(handler)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self._mock.handle_async_request(request)
        body = await read_wire_bytes(response)
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            stream=UnreadStream(body or b""),
            extensions=response.extensions,
        )


class RecordingFactory(HttpClientFactory):
    """HttpClientFactory that records client creation and releases."""

    def __init__(self, transport=None):
        super().__init__(transport)
        self.created_clients = 0
        self.released_messages: List[httpx.Request] = []
        self.released_responses: List[httpx.Response] = []

    def create_client(self, client, request):
        self.created_clients += 1
        return super().create_client(client, request)

    async def release_message(self, message):
        self.released_messages.append(message)
        await super().release_message(message)

    async def release_response(self, response):
        self.released_responses.append(response)
        await super().release_response(response)


@pytest.fixture
def client_config():
    """Sample ClientConfig for testing."""
    return ClientConfig(base_url=BASE_URL)


@pytest.fixture
def make_client() -> Callable[..., RestClient]:
    """Build a RestClient whose httpx client talks to an UnreadMockTransport handler."""

    def _make(handler, config=None, **config_kwargs):
        if config is None:
            config = ClientConfig(base_url=BASE_URL, **config_kwargs)
        factory = RecordingFactory(UnreadMockTransport(handler))
        return RestClient(config, http_client_factory=factory)

    return _make


@pytest.fixture
def json_ok_handler():
    """Handler answering every request with a small JSON document."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True})

    return handler


@pytest.fixture
def recording_factory() -> RecordingFactory:
    """RecordingFactory without a transport, for clients given an httpx client."""
    return RecordingFactory()
