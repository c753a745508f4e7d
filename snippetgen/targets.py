"""Registry of snippet languages and their client libraries.

Each language has a display title, a default client, and a set of clients.
A client names the Jinja2 template that renders it (under templates/) or
carries inline template source. The registry is open: register_target and
register_client add entries at runtime, and lookups always read the
current state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .naming import capitalize

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _client(title: str, template: str) -> dict[str, Any]:
    return {"title": title, "template": template}


# language key -> {title, default client key, clients}
TARGETS: dict[str, dict[str, Any]] = {
    "shell": {
        "title": "Shell",
        "default": "curl",
        "clients": {
            "curl": _client("cURL", "shell_curl.j2"),
            "httpie": _client("HTTPie", "shell_httpie.j2"),
            "wget": _client("Wget", "shell_wget.j2"),
        },
    },
    "javascript": {
        "title": "JavaScript",
        "default": "xhr",
        "clients": {
            "xhr": _client("XMLHttpRequest", "javascript_xhr.j2"),
            "fetch": _client("fetch", "javascript_fetch.j2"),
            "axios": _client("Axios", "javascript_axios.j2"),
            "jquery": _client("jQuery", "javascript_jquery.j2"),
        },
    },
    "node": {
        "title": "Node.js",
        "default": "native",
        "clients": {
            "native": _client("HTTP", "node_native.j2"),
            "fetch": _client("Fetch", "node_fetch.j2"),
            "axios": _client("Axios", "node_axios.j2"),
        },
    },
    "python": {
        "title": "Python",
        "default": "python3",
        "clients": {
            "python3": _client("http.client", "python_python3.j2"),
            "requests": _client("Requests", "python_requests.j2"),
        },
    },
    "http": {
        "title": "HTTP",
        "default": "1.1",
        "clients": {
            "1.1": _client("HTTP/1.1", "http_1.1.j2"),
        },
    },
    "go": {
        "title": "Go",
        "default": "native",
        "clients": {
            "native": _client("NewRequest", "go_native.j2"),
        },
    },
    "php": {
        "title": "PHP",
        "default": "curl",
        "clients": {
            "curl": _client("cURL", "php_curl.j2"),
        },
    },
    "ruby": {
        "title": "Ruby",
        "default": "native",
        "clients": {
            "native": _client("net::http", "ruby_native.j2"),
        },
    },
    "java": {
        "title": "Java",
        "default": "okhttp",
        "clients": {
            "okhttp": _client("OkHttp", "java_okhttp.j2"),
        },
    },
    "csharp": {
        "title": "C#",
        "default": "httpclient",
        "clients": {
            "httpclient": _client("HttpClient", "csharp_httpclient.j2"),
        },
    },
}


def available_targets() -> list[dict[str, Any]]:
    """Registered languages with their clients, in registration order."""
    return [
        {
            "key": key,
            "title": target["title"],
            "default": target["default"],
            "clients": [
                {"key": client_key, "title": client["title"]}
                for client_key, client in target["clients"].items()
            ],
        }
        for key, target in TARGETS.items()
    ]


def get_target(language: str) -> dict[str, Any] | None:
    return TARGETS.get(language)


def get_client(language: str, library: str) -> dict[str, Any] | None:
    target = TARGETS.get(language)
    if target is None:
        return None
    return target["clients"].get(library)


def register_target(key: str, default: str, title: str | None = None) -> dict[str, Any]:
    """Add (or replace) a language; clients are added with register_client."""
    target = {"title": title or capitalize(key), "default": default, "clients": {}}
    TARGETS[key] = target
    logger.debug("registered target %s", key)
    return target


def register_client(
    language: str,
    key: str,
    *,
    title: str | None = None,
    template: str | None = None,
    source: str | None = None,
) -> dict[str, Any]:
    """Add a client to a registered language.

    template names a file under templates/; source is inline template text
    and wins when both are given. One of the two is required.
    """
    if language not in TARGETS:
        raise KeyError(f"Unknown target language: {language}")
    client: dict[str, Any] = {"title": title or capitalize(key)}
    if source is not None:
        client["source"] = source
    elif template is None:
        raise ValueError(f"Client {language}_{key} needs a template or source")
    elif not (TEMPLATE_DIR / template).is_file():
        raise ValueError(f"Template {template} not found in {TEMPLATE_DIR}")
    else:
        client["template"] = template
    TARGETS[language]["clients"][key] = client
    logger.debug("registered client %s_%s", language, key)
    return client
