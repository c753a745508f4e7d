"""Turn an OpenAPI document into code snippets.

Pipeline: Document -> HarBuilder descriptors -> one snippet per
(target, descriptor), targets in the outer loop and descriptors in the
inner one. Endpoint aggregates carry method, url, description, resource
and the snippets; whole-document results are sorted by resource then
method.
"""

from __future__ import annotations

import logging
from typing import Any

from .codegen import convert
from .document import Document
from .errors import InvalidLanguageError, SnippetGenerateError
from .har import HarBuilder, describe
from .naming import resource_name, sort_endpoints, target_title
from .targets import get_target

logger = logging.getLogger(__name__)


def resolve_target(identifier: str) -> dict[str, str]:
    """Parse 'language' or 'language_library' into a target id.

    Returns {"title", "language", "library"}; the library falls back to the
    language's default client.
    """
    language, _, library = identifier.partition("_")
    target = get_target(language)
    if target is None:
        raise InvalidLanguageError(identifier)

    library = library or target["default"]
    client = target["clients"].get(library)
    if client is None:
        raise InvalidLanguageError(identifier)

    return {
        "title": target_title(target["title"], client["title"]),
        "language": language,
        "library": library,
    }


def emit(target: dict[str, str], har: dict[str, Any]) -> dict[str, Any]:
    """One snippet for one descriptor; tagged with mimeType when it has one."""
    snippet: dict[str, Any] = {"id": dict(target)}
    if har.get("comment"):
        snippet["mimeType"] = har["comment"]
    snippet["title"] = target["title"]
    snippet["content"] = convert(har, target["language"], target["library"])
    return snippet


def create_all(targets: list[dict[str, str]], hars: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [emit(target, har) for target in targets for har in hars]


def normalize_snippet_code(code: str) -> str:
    """Put back the braces of URL templates escaped by the renderers."""
    return code.replace("%7B", "{").replace("%7D", "}")


def _normalized(snippets: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{**s, "content": normalize_snippet_code(s["content"])} for s in snippets]


def _as_builder(spec: dict[str, Any] | Document | HarBuilder) -> HarBuilder:
    if isinstance(spec, HarBuilder):
        return spec
    return HarBuilder(spec)


def _endpoint(
    builder: HarBuilder,
    path: str,
    method: str,
    resolved: list[dict[str, str]],
    normalize: bool,
) -> dict[str, Any]:
    hars = builder.operation(path, method)
    operation = builder.document.get_operation(path, method)

    snippets = create_all(resolved, hars)
    if normalize:
        snippets = _normalized(snippets)

    return {
        "method": operation.method,
        "url": hars[0]["url"],
        "description": describe(operation),
        "resource": resource_name(path),
        "snippets": snippets,
    }


def get_endpoint_snippets(
    spec: dict[str, Any] | Document | HarBuilder,
    path: str,
    method: str,
    targets: list[str],
    normalize: bool = False,
) -> dict[str, Any]:
    """Endpoint aggregate for one operation."""
    resolved = [resolve_target(t) for t in targets]
    return _endpoint(_as_builder(spec), path, method, resolved, normalize)


def get_snippets(
    spec: dict[str, Any] | Document | HarBuilder,
    targets: list[str],
    normalize: bool = False,
) -> list[dict[str, Any]]:
    """Endpoint aggregates for every operation, sorted by resource and method.

    Target ids are checked before any rendering. The first failing
    operation aborts the run with SnippetGenerateError.
    """
    builder = _as_builder(spec)
    resolved = [resolve_target(t) for t in targets]

    results = []
    for path_item in builder.document.paths:
        for method in path_item.available_methods:
            try:
                results.append(_endpoint(builder, path_item.pathname, method, resolved, normalize))
            except Exception as exc:
                raise SnippetGenerateError(
                    path_item.raw.get(method), path_item.pathname, method, exc
                ) from exc
    logger.debug("generated %d endpoints for %d targets", len(results), len(resolved))
    return sort_endpoints(results)
