"""Resource names, snippet titles and endpoint ordering.

Resource: last non-empty path segment that is not a {param}.
  /api/users/{id}   -> users
  /api/auth/login   -> login
  /                 -> ""

Endpoints sort by resource ascending, then by method precedence
get, post, put, delete, patch; other methods sort last, keeping their
relative order.
"""

from __future__ import annotations

from typing import Any

# Method precedence inside one resource
METHOD_ORDER: tuple[str, ...] = ("get", "post", "put", "delete", "patch")


def resource_name(pathname: str) -> str:
    """Return the resource exposed by a path template."""
    for segment in reversed(pathname.split("/")):
        if segment and not segment.startswith("{"):
            return segment
    return ""


def capitalize(word: str) -> str:
    """Upper-case the first letter only: 'node' -> 'Node'."""
    return word[:1].upper() + word[1:]


def target_title(language_title: str, library_title: str | None = None) -> str:
    """Snippet title like 'JavaScript + XMLHttpRequest'."""
    if library_title:
        return f"{language_title} + {library_title}"
    return language_title


def method_rank(method: str) -> int:
    method_lower = method.lower()
    if method_lower in METHOD_ORDER:
        return METHOD_ORDER.index(method_lower)
    return len(METHOD_ORDER)


def sort_endpoints(endpoints: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Sort endpoint aggregates by (resource, method rank); stable."""
    return sorted(endpoints, key=lambda e: (e["resource"], method_rank(e["method"])))
