"""Tests for security requirement handling."""

import pytest

from snippetgen.errors import InvalidAuthTypeError, InvalidSchemeError
from snippetgen.security import (
    PUBLIC,
    auth_type,
    requirement_names,
    security_header,
    security_headers,
)


class TestRequirementNames:
    def test_flatten(self):
        assert requirement_names([{"a": []}, {"b": [], "c": []}]) == ["a", "b", "c"]

    def test_empty_object_is_public(self):
        assert requirement_names([{}]) == [PUBLIC]

    def test_empty_list(self):
        assert requirement_names([]) == []


class TestAuthType:
    def test_http_schemes(self):
        assert auth_type({"type": "http", "scheme": "Basic"}) == "basic"
        assert auth_type({"type": "http", "scheme": "bearer"}) == "bearer"

    def test_bare_http_is_bearer(self):
        assert auth_type({"type": "http"}) == "bearer"

    def test_api_key(self):
        assert auth_type({"type": "apiKey", "in": "header", "name": "X-Key"}) == "apikey"


class TestSecurityHeader:
    def test_basic(self):
        assert security_header({"type": "http", "scheme": "basic"}) == {
            "name": "Authorization", "value": "Basic REPLACE_BASIC_AUTH",
        }

    def test_bearer(self):
        assert security_header({"type": "http", "scheme": "bearer"}) == {
            "name": "Authorization", "value": "Bearer REPLACE_BEARER_TOKEN",
        }

    def test_api_key_in_header(self):
        scheme = {"type": "apiKey", "in": "header", "name": "X-API-KEY"}
        assert security_header(scheme) == {"name": "X-API-KEY", "value": "REPLACE_KEY_VALUE"}

    def test_api_key_elsewhere_adds_nothing(self):
        assert security_header({"type": "apiKey", "in": "query", "name": "key"}) is None
        assert security_header({"type": "apiKey", "name": "test"}) is None

    def test_oauth2_adds_nothing(self):
        assert security_header({"type": "oauth2", "flows": {}}) is None

    @pytest.mark.parametrize("scheme", [
        {"type": "http", "scheme": "digest"},
        {"type": "openIdConnect", "openIdConnectUrl": "https://example.com"},
        {},
    ])
    def test_invalid(self, scheme):
        with pytest.raises(InvalidAuthTypeError):
            security_header(scheme)


class TestSecurityHeaders:
    def test_order_and_public_skip(self):
        schemes = {
            "basic": {"type": "http", "scheme": "basic"},
            "key": {"type": "apiKey", "in": "header", "name": "X-Key"},
        }
        headers = security_headers(["key", PUBLIC, "basic"], schemes.__getitem__)
        assert [h["name"] for h in headers] == ["X-Key", "Authorization"]

    def test_unknown_scheme_propagates(self):
        def get_scheme(name):
            raise InvalidSchemeError("securityScheme", name)

        with pytest.raises(InvalidSchemeError):
            security_headers(["missing"], get_scheme)
