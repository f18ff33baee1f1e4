"""
Authenticators for rest_client.
"""
from .authenticator import Authenticator
from .auth_handler import (
    BearerAuthenticator,
    CustomHeaderAuthenticator,
    HeaderAuthenticator,
    HttpBasicAuthenticator,
    XApiKeyAuthenticator,
    create_authenticator,
    encode_basic,
)

__all__ = [
    "Authenticator",
    "BearerAuthenticator",
    "CustomHeaderAuthenticator",
    "HeaderAuthenticator",
    "HttpBasicAuthenticator",
    "XApiKeyAuthenticator",
    "create_authenticator",
    "encode_basic",
]
