"""Parameter declarations and operation-over-path shadowing.

Each declaration is reduced to a dict with its name, location, required
flag and a placeholder value. Operation-level declarations shadow path-level
ones with the same (name, location) pair.
"""

from __future__ import annotations

import json
from typing import Any, Callable

# Locations that end up in the request descriptor; path params stay in the URL
_BUCKETS = ("header", "query", "cookie")


def stringify(value: Any) -> str:
    """Render a sample value as request text: strings verbatim, the rest as JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _schema_type(schema: dict[str, Any]) -> str:
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        schema_type = next((t for t in schema_type if t != "null"), None)
    return schema_type or "string"


def placeholder_value(param: dict[str, Any], schema: dict[str, Any]) -> str:
    """Pick the value shown for a parameter in generated code."""
    for candidate in (schema.get("default"), param.get("example"), schema.get("example")):
        if candidate is not None and candidate != "":
            return stringify(candidate)
    return f"SOME_{_schema_type(schema).upper()}_VALUE"


def parse_parameter(
    param: dict[str, Any],
    resolve: Callable[[Any], Any],
) -> dict[str, Any]:
    """Reduce a (possibly $ref) parameter object to a declaration dict."""
    param = resolve(param)
    schema = resolve(param.get("schema") or {})
    return {
        "name": param["name"],
        "location": (param.get("in") or "").lower(),
        "required": bool(param.get("required", False)),
        "value": placeholder_value(param, schema),
    }


def same_parameter(a: dict[str, Any], b: dict[str, Any]) -> bool:
    return a["name"] == b["name"] and a["location"] == b["location"]


def merge(
    local: list[dict[str, Any]],
    parent: list[dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """Local declarations first, then parent ones not already present."""
    merged = list(local)
    for candidate in parent or []:
        if not any(same_parameter(candidate, p) for p in merged):
            merged.append(candidate)
    return merged


def to_har_items(params: list[dict[str, Any]]) -> list[dict[str, str]]:
    return [{"name": p["name"], "value": p["value"]} for p in params]


class ParameterSet:
    """Parameters of one PathItem or Operation, bucketed by location once.

    An operation's set points at its path item's set as parent, so each
    accessor applies the shadow merge against the matching parent bucket.
    """

    def __init__(
        self,
        declarations: list[dict[str, Any]],
        parent: ParameterSet | None = None,
    ) -> None:
        self.declarations = declarations
        self.parent = parent
        self._buckets: dict[str, list[dict[str, Any]]] = {b: [] for b in _BUCKETS}
        for decl in declarations:
            if decl["location"] in self._buckets:
                self._buckets[decl["location"]].append(decl)

    def bucket(self, location: str) -> list[dict[str, Any]]:
        return self._buckets.get(location, [])

    def _merged(self, location: str) -> list[dict[str, Any]]:
        parent = self.parent.bucket(location) if self.parent else None
        return merge(self.bucket(location), parent)

    def headers(self) -> list[dict[str, Any]]:
        return self._merged("header")

    def query(self) -> list[dict[str, Any]]:
        return self._merged("query")

    def cookies(self) -> list[dict[str, Any]]:
        return self._merged("cookie")
