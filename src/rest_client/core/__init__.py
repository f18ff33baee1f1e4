"""
Core modules for rest_client.
"""
from .base_client import RestClient
from .cancellation import CancellationToken
from .executor import execute_request, send_message
from .request import RestRequest
from .request_builder import (
    build_body,
    build_headers,
    build_request_url,
    build_url,
    expand_resource,
)
from .response import RestResponse
from .transport import HttpClientFactory

__all__ = [
    "RestClient",
    "CancellationToken",
    "execute_request",
    "send_message",
    "RestRequest",
    "build_body",
    "build_headers",
    "build_request_url",
    "build_url",
    "expand_resource",
    "RestResponse",
    "HttpClientFactory",
]
