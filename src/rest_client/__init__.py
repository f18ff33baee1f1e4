"""
Configurable asynchronous REST client for Python.

Sends declarative requests over httpx, negotiates content type and
encoding from registered handlers, authenticates (including challenge
retries) and hands back responses for deserialization.
"""
from .types import (
    CapabilityKind,
    Deserializer,
    Encoding,
    HttpMethod,
    NameComparer,
    Parameter,
    ParameterType,
    Serializer,
)
from .config import (
    AuthConfig,
    ClientConfig,
    Credentials,
    DefaultSerializer,
    TimeoutConfig,
    ordinal,
    ordinal_ignore_case,
)
from .errors import (
    AuthenticationError,
    RequestCancelledError,
    RestClientError,
    TransportError,
    UnsuccessfulStatusError,
)
from .parameters import merge_default_parameters
from .negotiation import (
    DeflateEncoding,
    GzipEncoding,
    HandlerRegistry,
    JsonDeserializer,
    TextDeserializer,
    project_accept_header,
)
from .auth import (
    Authenticator,
    BearerAuthenticator,
    CustomHeaderAuthenticator,
    HeaderAuthenticator,
    HttpBasicAuthenticator,
    XApiKeyAuthenticator,
    create_authenticator,
)
from .core import (
    CancellationToken,
    HttpClientFactory,
    RestClient,
    RestRequest,
    RestResponse,
)
from .factory import create_client

__all__ = [
    # Types
    "CapabilityKind",
    "Deserializer",
    "Encoding",
    "HttpMethod",
    "NameComparer",
    "Parameter",
    "ParameterType",
    "Serializer",
    # Config
    "AuthConfig",
    "ClientConfig",
    "Credentials",
    "DefaultSerializer",
    "TimeoutConfig",
    "ordinal",
    "ordinal_ignore_case",
    # Errors
    "AuthenticationError",
    "RequestCancelledError",
    "RestClientError",
    "TransportError",
    "UnsuccessfulStatusError",
    # Negotiation
    "merge_default_parameters",
    "DeflateEncoding",
    "GzipEncoding",
    "HandlerRegistry",
    "JsonDeserializer",
    "TextDeserializer",
    "project_accept_header",
    # Auth
    "Authenticator",
    "BearerAuthenticator",
    "CustomHeaderAuthenticator",
    "HeaderAuthenticator",
    "HttpBasicAuthenticator",
    "XApiKeyAuthenticator",
    "create_authenticator",
    # Client
    "CancellationToken",
    "HttpClientFactory",
    "RestClient",
    "RestRequest",
    "RestResponse",
    "create_client",
]

__version__ = "0.1.0"
