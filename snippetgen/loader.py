"""Load an OpenAPI document and walk its $ref pointers.

Documents are read from JSON or YAML files. Pointers are internal only
("#/components/schemas/User"); chains of $ref are followed until a node
without one is reached.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import ReferenceResolutionError

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates and timestamps as strings, as JSON would."""


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_spec(path: Path) -> dict[str, Any]:
    """Load an OpenAPI document from a JSON or YAML file."""
    text = Path(path).read_text(encoding="utf-8")
    if Path(path).suffix.lower() == ".json":
        return json.loads(text)
    return yaml.load(text, Loader=DocumentLoader)


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_security_schemes(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component security schemes from the spec."""
    return (spec.get("components") or {}).get("securitySchemes") or {}


def _unescape(part: str) -> str:
    return part.replace("~1", "/").replace("~0", "~")


def _walk(spec: dict[str, Any], ref: str) -> Any:
    if not isinstance(ref, str) or not ref.startswith("#") or not ref.strip("#/"):
        raise ReferenceResolutionError(ref, "is empty or not an internal pointer")

    node: Any = spec
    for part in ref[1:].split("/"):
        if part == "":
            continue
        part = _unescape(part)
        if isinstance(node, dict) and part in node:
            node = node[part]
        elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
            node = node[int(part)]
        else:
            raise ReferenceResolutionError(ref)
    return node


def resolve_ref(spec: dict[str, Any], ref: str) -> Any:
    """Resolve a $ref pointer in the spec, following chained references."""
    seen: list[str] = []
    node = _walk(spec, ref)
    seen.append(ref)
    while isinstance(node, dict) and "$ref" in node:
        nxt = node["$ref"]
        if nxt in seen:
            raise ReferenceResolutionError(nxt, "is part of a reference cycle")
        seen.append(nxt)
        node = _walk(spec, nxt)
    logger.debug("resolved %s through %d pointer(s)", ref, len(seen))
    return node


def resolve_node(spec: dict[str, Any], node: Any) -> Any:
    """Return node itself, or its target when it is a {"$ref": ...} object."""
    if isinstance(node, dict) and "$ref" in node:
        return resolve_ref(spec, node["$ref"])
    return node
