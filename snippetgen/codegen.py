"""Render request descriptors into code with the client templates.

Takes the context from context_builder and renders the template registered
for a (language, library) pair in targets.
"""

from __future__ import annotations

import json
import logging
import pprint
from functools import lru_cache
from typing import Any

import jinja2

from .context_builder import build_context
from .errors import InvalidLanguageError
from .targets import TEMPLATE_DIR, get_client

logger = logging.getLogger(__name__)


def to_json(value: Any, indent: int | None = None) -> str:
    """JSON literal, usable as a quoted string in most C-like languages."""
    return json.dumps(value, ensure_ascii=False, indent=indent)


def to_shell(value: Any) -> str:
    """Single-quoted shell word."""
    return "'" + str(value).replace("'", "'\\''") + "'"


def to_python(value: Any) -> str:
    return pprint.pformat(value, sort_dicts=False, width=88)


def to_php(value: Any) -> str:
    return json.dumps(str(value), ensure_ascii=False).replace("$", "\\$")


def to_ruby(value: Any) -> str:
    return json.dumps(str(value), ensure_ascii=False).replace("#{", "\\#{")


@lru_cache(maxsize=1)
def get_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["json"] = to_json
    env.filters["shell"] = to_shell
    env.filters["py"] = to_python
    env.filters["php"] = to_php
    env.filters["ruby"] = to_ruby
    return env


def convert(har: dict[str, Any], language: str, library: str) -> str:
    """Render one descriptor for one client; trailing whitespace is dropped."""
    client = get_client(language, library)
    if client is None:
        raise InvalidLanguageError(f"{language}_{library}")

    env = get_environment()
    if "source" in client:
        template = env.from_string(client["source"])
    else:
        template = env.get_template(client["template"])

    logger.debug("rendering %s %s as %s_%s", har["method"], har["url"], language, library)
    return template.render(**build_context(har)).rstrip()
