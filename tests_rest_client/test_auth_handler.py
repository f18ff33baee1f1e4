"""
Tests for auth_handler.py
Logic testing: Decision/Branch, Boundary, Path coverage
"""
import base64

import pytest

from rest_client.auth.auth_handler import (
    BearerAuthenticator,
    CustomHeaderAuthenticator,
    HttpBasicAuthenticator,
    XApiKeyAuthenticator,
    create_authenticator,
    encode_basic,
)
from rest_client.auth.authenticator import Authenticator
from rest_client.config import AuthConfig, Credentials
from rest_client.core.request import RestRequest
from rest_client.types import Parameter, ParameterType


@pytest.fixture
def sample_request():
    """Sample request for testing."""
    return RestRequest("/users")


class TestBearerAuthenticator:
    """Tests for BearerAuthenticator class."""

    # Decision: static key
    def test_bearer_static_key(self, sample_request):
        authenticator = BearerAuthenticator("my-api-key")
        result = authenticator.get_header(sample_request)

        assert result == {"Authorization": "Bearer my-api-key"}

    # Decision: callback invoked first
    def test_bearer_callback(self, sample_request):
        callback = lambda req: "dynamic-key"
        authenticator = BearerAuthenticator("static-key", callback)
        result = authenticator.get_header(sample_request)

        assert result == {"Authorization": "Bearer dynamic-key"}

    # Decision: callback returns None, fallback to static
    def test_bearer_callback_fallback(self, sample_request):
        callback = lambda req: None
        authenticator = BearerAuthenticator("fallback-key", callback)
        result = authenticator.get_header(sample_request)

        assert result == {"Authorization": "Bearer fallback-key"}

    # Boundary: no key available
    def test_bearer_no_key(self, sample_request):
        authenticator = BearerAuthenticator()
        result = authenticator.get_header(sample_request)

        assert result is None

    # Boundary: callback returns empty string (falsy)
    def test_bearer_callback_empty(self, sample_request):
        callback = lambda req: ""
        authenticator = BearerAuthenticator("static-key", callback)
        result = authenticator.get_header(sample_request)

        assert result == {"Authorization": "Bearer static-key"}

    # Path: callback sees the request
    def test_bearer_callback_receives_request(self, sample_request):
        callback = lambda req: f"key-for-{req.resource.strip('/')}"
        authenticator = BearerAuthenticator(None, callback)
        result = authenticator.get_header(sample_request)

        assert result == {"Authorization": "Bearer key-for-users"}


class TestXApiKeyAuthenticator:
    """Tests for XApiKeyAuthenticator class."""

    # Decision: static key
    def test_x_api_key_static(self, sample_request):
        authenticator = XApiKeyAuthenticator("my-api-key")
        assert authenticator.get_header(sample_request) == {"X-API-Key": "my-api-key"}

    # Decision: callback invoked first
    def test_x_api_key_callback(self, sample_request):
        authenticator = XApiKeyAuthenticator("static-key", lambda req: "dynamic-key")
        assert authenticator.get_header(sample_request) == {"X-API-Key": "dynamic-key"}

    # Boundary: no key available
    def test_x_api_key_no_key(self, sample_request):
        assert XApiKeyAuthenticator().get_header(sample_request) is None


class TestCustomHeaderAuthenticator:
    """Tests for CustomHeaderAuthenticator class."""

    # Decision: custom header name
    def test_custom_header_name(self, sample_request):
        authenticator = CustomHeaderAuthenticator("X-My-Auth", "secret")
        assert authenticator.get_header(sample_request) == {"X-My-Auth": "secret"}

    # Decision: callback returns None, fallback to static
    def test_custom_callback_fallback(self, sample_request):
        authenticator = CustomHeaderAuthenticator("X-Auth", "fallback", lambda req: None)
        assert authenticator.get_header(sample_request) == {"X-Auth": "fallback"}

    # Boundary: no key available
    def test_custom_no_key(self, sample_request):
        assert CustomHeaderAuthenticator("X-Auth").get_header(sample_request) is None


class TestHttpBasicAuthenticator:
    """Tests for HttpBasicAuthenticator class."""

    # Decision: explicit username/password
    def test_explicit_pair(self, sample_request):
        authenticator = HttpBasicAuthenticator("user", "pass")
        expected = "Basic " + base64.b64encode(b"user:pass").decode()

        assert authenticator.get_header(sample_request) == {"Authorization": expected}

    # Decision: falls back to client credentials
    def test_credentials_fallback(self, sample_request):
        authenticator = HttpBasicAuthenticator()
        credentials = Credentials("alice", "secret")

        assert authenticator.can_pre_authenticate_request(None, sample_request, credentials)
        assert authenticator.get_header(sample_request, credentials) == {
            "Authorization": encode_basic("alice", "secret")
        }

    # Boundary: nothing to authenticate with
    def test_no_credentials(self, sample_request):
        authenticator = HttpBasicAuthenticator()

        assert not authenticator.can_pre_authenticate_request(None, sample_request, None)
        assert authenticator.get_header(sample_request) is None

    # Boundary: non-ascii password
    def test_encode_basic_utf8(self):
        value = encode_basic("user", "pässword")
        decoded = base64.b64decode(value.split(" ", 1)[1]).decode("utf-8")
        assert decoded == "user:pässword"


class TestPreAuthenticateRequest:
    """Tests for the request-level hook shared by header authenticators."""

    # State: header added once, then updated in place
    @pytest.mark.asyncio
    async def test_adds_then_updates_header(self, sample_request):
        keys = iter(["first", "second"])
        authenticator = BearerAuthenticator(None, lambda req: next(keys))

        await authenticator.pre_authenticate_request(None, sample_request, None)
        await authenticator.pre_authenticate_request(None, sample_request, None)

        headers = [p for p in sample_request.parameters if p.kind == ParameterType.HTTP_HEADER]
        assert headers == [Parameter("Authorization", "Bearer second", ParameterType.HTTP_HEADER, True)]

    # Boundary: no key leaves the request untouched
    @pytest.mark.asyncio
    async def test_no_key_leaves_request(self, sample_request):
        await XApiKeyAuthenticator().pre_authenticate_request(None, sample_request, None)
        assert sample_request.parameters == []

    # Decision: header authenticators never take part in later stages
    def test_declines_message_and_challenge(self, sample_request):
        authenticator = BearerAuthenticator("key")
        assert authenticator.can_pre_authenticate_request(None, sample_request, None)
        assert not authenticator.can_pre_authenticate_message(None, None, None)
        assert not authenticator.can_handle_challenge(None, None, None, None)


class TestCreateAuthenticator:
    """Tests for create_authenticator function."""

    # Decision: bearer type
    def test_create_bearer(self, sample_request):
        authenticator = create_authenticator(AuthConfig(type="bearer", raw_api_key="key"))

        assert isinstance(authenticator, BearerAuthenticator)
        assert authenticator.get_header(sample_request) == {"Authorization": "Bearer key"}

    # Decision: x-api-key type
    def test_create_x_api_key(self, sample_request):
        authenticator = create_authenticator(AuthConfig(type="x-api-key", raw_api_key="key"))

        assert isinstance(authenticator, XApiKeyAuthenticator)

    # Decision: custom type
    def test_create_custom(self, sample_request):
        config = AuthConfig(type="custom", header_name="X-Auth", raw_api_key="key")
        authenticator = create_authenticator(config)

        assert isinstance(authenticator, CustomHeaderAuthenticator)
        assert authenticator.get_header(sample_request) == {"X-Auth": "key"}

    # Decision: basic type, raw_api_key stands in for password
    def test_create_basic_with_raw_key(self, sample_request):
        config = AuthConfig(type="basic", username="user", raw_api_key="token")
        authenticator = create_authenticator(config)

        assert isinstance(authenticator, HttpBasicAuthenticator)
        assert authenticator.get_header(sample_request) == {"Authorization": encode_basic("user", "token")}

    # Decision: default case (unknown type)
    def test_create_default(self):
        config = AuthConfig(type="unknown", raw_api_key="key")  # type: ignore
        assert isinstance(create_authenticator(config), BearerAuthenticator)


class TestAuthenticatorBase:
    """Tests for the declining base Authenticator."""

    @pytest.mark.asyncio
    async def test_base_declines_everything(self, sample_request):
        authenticator = Authenticator()

        assert not authenticator.can_pre_authenticate_request(None, sample_request, None)
        assert not authenticator.can_pre_authenticate_message(None, None, None)
        assert not authenticator.can_handle_challenge(None, None, None, None)
        assert await authenticator.pre_authenticate_request(None, sample_request, None) is None
