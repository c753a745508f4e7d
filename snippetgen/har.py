"""Build HAR request descriptors from a resolved document.

One descriptor per usable request content type of an operation, or a
single descriptor without postData when the operation has no usable body.
Descriptor field order is fixed so serialized output is stable.
"""

from __future__ import annotations

import logging
from typing import Any

from .document import Document, Operation
from .errors import SnippetGenerateError
from .parameters import to_har_items
from .payloads import PostData
from .security import security_headers

logger = logging.getLogger(__name__)

HTTP_VERSION = "HTTP/1.1"
NO_DESCRIPTION = "No description available"


def base_headers(operation: Operation) -> list[dict[str, str]]:
    """Parameter headers followed by security headers."""
    document = operation.document
    return [
        *to_har_items(operation.parameters.headers()),
        *security_headers(operation.security_requirements, document.get_security_scheme),
    ]


def build_request(
    operation: Operation,
    headers: list[dict[str, str]],
    post_data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Assemble one descriptor; post_data=None means no body."""
    mime_type = (post_data or {}).get("mimeType") or ""
    if mime_type:
        headers = [*headers, {"name": "content-type", "value": mime_type}]

    request: dict[str, Any] = {
        "method": operation.method,
        "pathname": operation.pathname,
        "url": f"{operation.base_url}{operation.pathname}",
        "headers": headers,
        "queryString": to_har_items(operation.parameters.query()),
        "cookies": to_har_items(operation.parameters.cookies()),
        "httpVersion": HTTP_VERSION,
        "headersSize": 0,
        "bodySize": 0,
    }
    if post_data:
        request["postData"] = dict(post_data)
    request["comment"] = mime_type
    return request


def build_requests(operation: Operation) -> list[dict[str, Any]]:
    """All descriptors of one operation, in content-map declaration order."""
    headers = base_headers(operation)
    post_data = PostData(operation.document.spec, operation.request_body)
    if post_data.is_empty:
        return [build_request(operation, headers)]
    return [build_request(operation, headers, payload) for payload in post_data.to_array()]


def describe(operation: Operation) -> str:
    return operation.description or operation.path_item.description or NO_DESCRIPTION


class HarBuilder:
    """Memoized descriptor builder over one Document."""

    def __init__(self, spec: dict[str, Any] | Document) -> None:
        self.document = spec if isinstance(spec, Document) else Document(spec)
        self._requests: dict[tuple[str, str], list[dict[str, Any]]] = {}
        self._paths: dict[str, list[dict[str, Any]]] = {}

    def operation(self, pathname: str, method: str) -> list[dict[str, Any]]:
        """Descriptors for one operation; same list object on every call."""
        key = (pathname, method.lower())
        if key not in self._requests:
            operation = self.document.get_operation(pathname, method)
            logger.debug("building descriptors for %s %s", operation.method, pathname)
            self._requests[key] = build_requests(operation)
        return self._requests[key]

    def path(self, pathname: str) -> list[dict[str, Any]]:
        """One aggregate per declared method of a path."""
        if pathname not in self._paths:
            path_item = self.document.get_path(pathname)
            aggregates = []
            for operation in path_item.operations:
                aggregates.append({
                    "method": operation.method,
                    "pathname": pathname,
                    "url": f"{operation.base_url}{pathname}",
                    "description": describe(operation),
                    "hars": self.operation(pathname, operation.method),
                })
            self._paths[pathname] = aggregates
        return self._paths[pathname]

    def all(self) -> list[dict[str, Any]]:
        """Aggregates for every path; the first failure aborts the batch."""
        aggregates: list[dict[str, Any]] = []
        for path_item in self.document.paths:
            for method in path_item.available_methods:
                try:
                    self.operation(path_item.pathname, method)
                except Exception as exc:
                    raise SnippetGenerateError(
                        path_item.raw.get(method), path_item.pathname, method, exc
                    ) from exc
            aggregates.extend(self.path(path_item.pathname))
        return aggregates
