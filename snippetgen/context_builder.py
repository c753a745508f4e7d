"""Build Jinja2 template context from one HAR request descriptor.

Every client template renders from the same context: the URL split into
its parts, headers in three flavours (as declared, without content-type
for clients that build form bodies themselves, and raw with a multipart
boundary), and the post body in the shapes clients need.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote, unquote_plus, urlsplit, urlunsplit

from .payloads import FORM_URLENCODED, JSON, MULTIPART, encode_uri_component

logger = logging.getLogger(__name__)

# Boundary used when a client needs the multipart body spelled out
MULTIPART_BOUNDARY = "---011000010111000001101001"

# Characters kept verbatim in a URL path; braces and spaces get escaped
_PATH_SAFE = "/:@!$&'()*+,;=-._~%"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _pairs(items: list[dict[str, Any]] | None) -> list[dict[str, str]]:
    return [{"name": str(i["name"]), "value": str(i.get("value", ""))} for i in items or []]


def _to_map(items: list[dict[str, str]]) -> dict[str, Any]:
    """Name -> value, repeated names collected into a list."""
    result: dict[str, Any] = {}
    for item in items:
        name, value = item["name"], item["value"]
        if name in result:
            if not isinstance(result[name], list):
                result[name] = [result[name]]
            result[name].append(value)
        else:
            result[name] = value
    return result


def _encode_query(items: list[dict[str, str]]) -> str:
    return "&".join(
        f"{encode_uri_component(i['name'])}={encode_uri_component(i['value'])}" for i in items
    )


def _is_content_type(header: dict[str, str]) -> bool:
    return header["name"].lower() == "content-type"


def multipart_body(params: list[dict[str, str]], boundary: str = MULTIPART_BOUNDARY) -> str:
    """Spell out a multipart/form-data body with CRLF line endings."""
    parts = []
    for param in params:
        parts.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{param["name"]}"\r\n'
            "\r\n"
            f"{param['value']}\r\n"
        )
    return "".join(parts) + f"--{boundary}--\r\n"


def _build_post(post_data: dict[str, Any] | None) -> dict[str, Any]:
    post_data = post_data or {}
    mime_type = post_data.get("mimeType") or ""
    params = _pairs(post_data.get("params"))
    text = post_data.get("text") or ""

    multipart = mime_type.startswith(MULTIPART) and bool(params)
    form = mime_type.startswith(FORM_URLENCODED) and bool(params)

    parsed = None
    if mime_type.startswith(JSON) and text:
        try:
            parsed = json.loads(text)
        except ValueError:
            logger.debug("postData text is not valid JSON, rendering it as text")

    if form:
        # urlencoded params arrive encoded; clients that build forms want them decoded
        fields = [{"name": unquote_plus(p["name"]), "value": unquote_plus(p["value"])} for p in params]
        text = text or _encode_query(fields)
    else:
        fields = params

    if multipart:
        body = multipart_body(params)
    else:
        body = text

    return {
        "mime_type": mime_type,
        "text": text,
        "params": params,
        "fields": fields,
        "field_map": _to_map(fields),
        "json": parsed,
        "body": body,
        "multipart": multipart,
        "form": form,
        "has_body": bool(body),
    }


def build_context(har: dict[str, Any]) -> dict[str, Any]:
    """Assemble the render context for one request descriptor."""
    parts = urlsplit(har["url"])
    path = quote(parts.path, safe=_PATH_SAFE) or "/"

    # a server URL may already carry a query; descriptor items come after it
    query = []
    for pair in parts.query.split("&"):
        if pair:
            name, _, value = pair.partition("=")
            query.append({"name": unquote_plus(name), "value": unquote_plus(value)})
    query += _pairs(har.get("queryString"))
    query_string = _encode_query(query)

    base_url = urlunsplit((parts.scheme, parts.netloc, path, "", ""))
    full_url = f"{base_url}?{query_string}" if query_string else base_url
    full_path = f"{path}?{query_string}" if query_string else path

    post = _build_post(har.get("postData"))

    headers = _pairs(har.get("headers"))
    cookies = _pairs(har.get("cookies"))
    if cookies:
        cookie_value = "; ".join(
            f"{encode_uri_component(c['name'])}={encode_uri_component(c['value'])}" for c in cookies
        )
        headers.append({"name": "cookie", "value": cookie_value})

    plain_headers = [h for h in headers if not _is_content_type(h)]
    body_headers = plain_headers if post["multipart"] else headers
    raw_headers = headers
    if post["multipart"]:
        multipart_type = f"{MULTIPART}; boundary={MULTIPART_BOUNDARY}"
        raw_headers = [
            {"name": h["name"], "value": multipart_type} if _is_content_type(h) else h
            for h in headers
        ]

    scheme = parts.scheme or "http"
    port = parts.port or _DEFAULT_PORTS.get(scheme, 80)

    return {
        "method": har["method"].upper(),
        "url": base_url,
        "full_url": full_url,
        "scheme": scheme,
        "host": parts.netloc,
        "hostname": parts.hostname or "",
        "port": port,
        "path": path,
        "full_path": full_path,
        "query": query,
        "query_string": query_string,
        "query_map": _to_map(query),
        "headers": headers,
        "header_map": _to_map(headers),
        "plain_headers": plain_headers,
        "body_headers": body_headers,
        "body_header_map": _to_map(body_headers),
        "raw_headers": raw_headers,
        "raw_header_map": _to_map(raw_headers),
        "cookies": cookies,
        "http_version": har.get("httpVersion") or "HTTP/1.1",
        "post": post,
    }
