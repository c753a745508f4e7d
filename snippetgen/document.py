"""Read-only wrappers over an OpenAPI document.

Document -> PathItem -> Operation, each built lazily on first access and
memoized on its parent, so asking twice returns the same object. The
document is deep-copied on construction; callers may keep mutating their
own dict without affecting resolution.

Memoization is plain per-instance state with no locking. Share a Document
between threads only after it has been fully resolved.
"""

from __future__ import annotations

import copy
import logging
import re
from functools import cached_property
from typing import Any

from .errors import (
    InvalidMethodError,
    InvalidPathError,
    InvalidSchemeError,
    InvalidSchemeReferenceError,
    NoServerError,
    ReferenceResolutionError,
)
from .loader import get_paths, get_security_schemes, resolve_node
from .parameters import ParameterSet, parse_parameter
from .security import requirement_names

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "patch", "options", "head", "trace")

_SERVER_VARIABLE = re.compile(r"\{([^{}]+)\}")


def server_url(servers: list[dict[str, Any]] | None) -> str | None:
    """First non-empty server URL, with server variables set to their defaults."""
    for server in servers or []:
        url = (server or {}).get("url")
        if not url:
            continue
        variables = server.get("variables") or {}

        def _default(match: re.Match) -> str:
            variable = variables.get(match.group(1))
            if variable and variable.get("default") is not None:
                return str(variable["default"])
            return match.group(0)

        return _SERVER_VARIABLE.sub(_default, url)
    return None


class Operation:
    """One HTTP method on one path."""

    def __init__(self, raw: dict[str, Any], method: str, path_item: PathItem) -> None:
        self.raw = raw
        self.method = method.upper()
        self.path_item = path_item
        self.document = path_item.document
        self.pathname = path_item.pathname

    @property
    def description(self) -> str:
        return self.raw.get("description") or ""

    @cached_property
    def base_url(self) -> str:
        return server_url(self.raw.get("servers")) or self.path_item.base_url

    @cached_property
    def parameters(self) -> ParameterSet:
        declarations = [
            parse_parameter(p, self.document.resolve) for p in self.raw.get("parameters") or []
        ]
        return ParameterSet(declarations, parent=self.path_item.parameters)

    @cached_property
    def security_requirements(self) -> list[str]:
        """Requirement names; unset falls back to the document, [] means none."""
        security = self.raw.get("security")
        if security is None:
            return self.document.security_requirements
        return requirement_names(security)

    @cached_property
    def request_body(self) -> dict[str, Any] | None:
        """Request body with the body and each media schema $ref resolved."""
        body = self.raw.get("requestBody")
        if body is None:
            return None
        body = self.document.resolve(body)
        content = {}
        for mime_type, media in (body.get("content") or {}).items():
            media = dict(media or {})
            if media.get("schema") is not None:
                media["schema"] = self.document.resolve(media["schema"])
            content[mime_type] = media
        return {**body, "content": content}


class PathItem:
    """One URL template and the operations declared on it."""

    def __init__(self, raw: dict[str, Any], pathname: str, document: Document) -> None:
        self.raw = raw
        self.pathname = pathname
        self.document = document
        self._operations: dict[str, Operation] = {}

    @property
    def description(self) -> str:
        return self.raw.get("description") or ""

    @cached_property
    def base_url(self) -> str:
        return server_url(self.raw.get("servers")) or self.document.base_url

    @cached_property
    def parameters(self) -> ParameterSet:
        declarations = [
            parse_parameter(p, self.document.resolve) for p in self.raw.get("parameters") or []
        ]
        return ParameterSet(declarations)

    @property
    def available_methods(self) -> list[str]:
        """Declared methods, lower case, in declaration order."""
        return [key.lower() for key in self.raw if key.lower() in HTTP_METHODS]

    @property
    def operations(self) -> list[Operation]:
        return [self.get_operation(method) for method in self.available_methods]

    def get_operation(self, method: str) -> Operation:
        key = method.lower()
        if key not in self._operations:
            raw = next(
                (value for name, value in self.raw.items() if name.lower() == key),
                None,
            )
            if key not in HTTP_METHODS or raw is None:
                raise InvalidMethodError(self.pathname, method)
            self._operations[key] = Operation(raw, key, self)
        return self._operations[key]


class Document:
    """Entry point of the resolution pass for one OpenAPI document."""

    def __init__(self, spec: dict[str, Any]) -> None:
        self._spec = copy.deepcopy(spec)
        self._paths: dict[str, PathItem] = {}

    @property
    def spec(self) -> dict[str, Any]:
        return self._spec

    @property
    def available_paths(self) -> list[str]:
        return list(get_paths(self._spec))

    @property
    def paths(self) -> list[PathItem]:
        return [self.get_path(pathname) for pathname in self.available_paths]

    @cached_property
    def security_requirements(self) -> list[str]:
        return requirement_names(self._spec.get("security") or [])

    @cached_property
    def base_url(self) -> str:
        url = server_url(self._spec.get("servers"))
        if url is None:
            raise NoServerError()
        return url

    def resolve(self, node: Any) -> Any:
        return resolve_node(self._spec, node)

    def get_path(self, pathname: str) -> PathItem:
        if pathname not in self._paths:
            paths = get_paths(self._spec)
            if pathname not in paths:
                raise InvalidPathError(pathname)
            logger.debug("building path item %s", pathname)
            self._paths[pathname] = PathItem(self.resolve(paths[pathname]) or {}, pathname, self)
        return self._paths[pathname]

    def get_operation(self, pathname: str, method: str) -> Operation:
        return self.get_path(pathname).get_operation(method)

    def get_security_scheme(self, scheme_id: str) -> dict[str, Any]:
        schemes = get_security_schemes(self._spec)
        if scheme_id not in schemes:
            raise InvalidSchemeError("securityScheme", scheme_id)
        scheme = schemes[scheme_id]
        try:
            return self.resolve(scheme)
        except ReferenceResolutionError as exc:
            raise InvalidSchemeReferenceError(scheme.get("$ref")) from exc
