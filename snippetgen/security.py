"""Security requirements to request headers.

Only HTTP basic, HTTP bearer and apiKey-in-header schemes show up as
headers. apiKey in query/cookie and oauth2 are accepted but add nothing.
"""

from __future__ import annotations

from typing import Any, Callable

from .errors import InvalidAuthTypeError

# Requirement name used for an empty requirement object ({}), meaning no auth
PUBLIC = "public"

VALID_AUTH_TYPES = ("basic", "bearer", "apikey", "oauth2")

BASIC_VALUE = "Basic REPLACE_BASIC_AUTH"
BEARER_VALUE = "Bearer REPLACE_BEARER_TOKEN"
API_KEY_VALUE = "REPLACE_KEY_VALUE"


def requirement_names(security: list[dict[str, Any]]) -> list[str]:
    """Flatten security requirement objects into scheme ids."""
    names: list[str] = []
    for requirement in security or []:
        keys = [key for key in (requirement or {}) if key]
        names.extend(keys or [PUBLIC])
    return names


def auth_type(scheme: dict[str, Any]) -> str:
    """Normalized kind of a security scheme: basic, bearer, apikey, oauth2, ..."""
    kind = str(scheme.get("type") or "").lower()
    if kind == "http":
        return str(scheme.get("scheme") or "bearer").lower()
    return kind


def security_header(scheme: dict[str, Any]) -> dict[str, str] | None:
    """Header item for a scheme, or None when the scheme is not sent as a header."""
    kind = auth_type(scheme)
    if kind not in VALID_AUTH_TYPES:
        raise InvalidAuthTypeError(kind)

    if kind == "basic":
        return {"name": "Authorization", "value": BASIC_VALUE}
    if kind == "bearer":
        return {"name": "Authorization", "value": BEARER_VALUE}
    if kind == "apikey" and str(scheme.get("in") or "").lower() == "header":
        return {"name": scheme.get("name") or "Authorization", "value": API_KEY_VALUE}
    return None


def security_headers(
    requirements: list[str],
    get_scheme: Callable[[str], dict[str, Any]],
) -> list[dict[str, str]]:
    """Resolve requirement names and keep the ones that manifest as headers."""
    headers = []
    for name in requirements:
        if name == PUBLIC:
            continue
        header = security_header(get_scheme(name))
        if header is not None:
            headers.append(header)
    return headers
