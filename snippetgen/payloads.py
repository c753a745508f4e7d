"""Sample request payloads, one per recognized request content type.

Encodes the sampled value the way each media type carries it:
- application/json: compact JSON text
- application/xml: the same JSON text tagged with the xml mime type
- multipart/form-data: one field per top-level property
- application/x-www-form-urlencoded: form-encoded fields plus joined text
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

from .parameters import stringify
from .sampler import sample_schema

logger = logging.getLogger(__name__)

JSON = "application/json"
XML = "application/xml"
MULTIPART = "multipart/form-data"
FORM_URLENCODED = "application/x-www-form-urlencoded"

VALID_MIME_TYPES = (JSON, XML, FORM_URLENCODED, MULTIPART)

# Characters encodeURIComponent leaves alone besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def form_encode(value: str) -> str:
    """Percent-encode for a form body, spaces as '+'."""
    return encode_uri_component(value).replace("%20", "+")


def _form_text(value: Any) -> str:
    """Text of a value placed in an urlencoded field; arrays join on ','."""
    if isinstance(value, list):
        return ",".join(_form_text(item) for item in value)
    if value is None:
        return ""
    return stringify(value)


def _json_text(sample: Any) -> str:
    return json.dumps(sample, ensure_ascii=False, separators=(",", ":"))


def encode_sample(sample: Any, mime_type: str) -> dict[str, Any]:
    """Serialize a sample value into HAR postData for mime_type."""
    if mime_type == MULTIPART and isinstance(sample, dict):
        return {
            "mimeType": mime_type,
            "params": [{"name": name, "value": stringify(value)} for name, value in sample.items()],
        }
    if mime_type == FORM_URLENCODED and isinstance(sample, dict):
        params = [
            {"name": form_encode(name), "value": form_encode(_form_text(value))}
            for name, value in sample.items()
        ]
        return {
            "mimeType": mime_type,
            "params": params,
            "text": "&".join(f"{p['name']}={p['value']}" for p in params),
        }
    return {"mimeType": mime_type, "text": _json_text(sample)}


def usable_contents(
    request_body: dict[str, Any] | None,
) -> list[tuple[str, dict[str, Any]]]:
    """(mime type, schema) pairs for recognized content types that carry a schema."""
    content = (request_body or {}).get("content") or {}
    return [
        (mime_type, media["schema"])
        for mime_type, media in content.items()
        if mime_type in VALID_MIME_TYPES and (media or {}).get("schema") is not None
    ]


class PostData:
    """Sample payloads of one operation's request body."""

    def __init__(self, spec: dict[str, Any], request_body: dict[str, Any] | None) -> None:
        self._spec = spec
        self._contents = usable_contents(request_body)
        self._payloads: list[dict[str, Any]] | None = None

    @property
    def is_empty(self) -> bool:
        return not self._contents

    @property
    def mime_types(self) -> list[str]:
        return [mime_type for mime_type, _ in self._contents]

    def to_array(self) -> list[dict[str, Any]]:
        if self._payloads is None:
            self._payloads = []
            for mime_type, schema in self._contents:
                logger.debug("sampling %s payload", mime_type)
                sample = sample_schema(self._spec, schema)
                self._payloads.append(encode_sample(sample, mime_type))
        return self._payloads
