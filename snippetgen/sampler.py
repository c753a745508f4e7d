"""Synthesize deterministic sample values from OpenAPI schemas.

Handles:
- $ref resolution (recursive schemas stop at the repeated reference)
- const / example / examples / default / enum short-circuits
- allOf merging, oneOf/anyOf first branch
- readOnly property exclusion (samples are request payloads)
- string formats, length and numeric bounds
"""

from __future__ import annotations

from typing import Any

from .loader import resolve_ref

# Placeholder strings per format; unknown formats (binary included) fall back to "string"
_FORMAT_SAMPLES: dict[str, str] = {
    "email": "user@example.com",
    "idn-email": "user@example.com",
    "password": "pa$$word",
    "date-time": "2019-08-24T14:15:22Z",
    "date": "2019-08-24",
    "time": "14:15:22Z",
    "uuid": "497f6eca-6276-4993-bfeb-53cbbbba6f08",
    "uri": "http://example.com",
    "url": "http://example.com",
    "uri-reference": "../dictionary",
    "hostname": "example.com",
    "idn-hostname": "example.com",
    "ipv4": "192.168.0.1",
    "ipv6": "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
    "byte": "U3dhZ2dlciByb2Nrcw==",
}

_DEFAULT_STRING = "string"

# allOf branches contribute structure only; their own samples would hide siblings
_NOT_MERGED = {"properties", "required", "const", "example", "examples", "default", "enum"}


def _infer_type(schema: dict[str, Any]) -> str | None:
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        schema_type = next((t for t in schema_type if t != "null"), "null")
    if schema_type:
        return schema_type
    if "properties" in schema or "additionalProperties" in schema:
        return "object"
    if "items" in schema:
        return "array"
    if any(k in schema for k in ("format", "minLength", "maxLength", "pattern")):
        return "string"
    if any(k in schema for k in ("minimum", "maximum", "multipleOf")):
        return "number"
    return None


def _merge_all_of(
    spec: dict[str, Any],
    schema: dict[str, Any],
    stack: tuple[str, ...],
) -> dict[str, Any]:
    """Flatten allOf into one object schema, keeping property order."""
    merged: dict[str, Any] = {k: v for k, v in schema.items() if k != "allOf"}
    properties: dict[str, Any] = dict(merged.get("properties") or {})
    required: list[str] = list(merged.get("required") or [])
    for sub in schema["allOf"]:
        sub_stack = stack
        if "$ref" in sub:
            if sub["$ref"] in stack:
                continue
            sub_stack = stack + (sub["$ref"],)
            sub = resolve_ref(spec, sub["$ref"])
        if "allOf" in sub:
            sub = _merge_all_of(spec, sub, sub_stack)
        properties.update(sub.get("properties") or {})
        required.extend(sub.get("required") or [])
        for key, value in sub.items():
            if key not in _NOT_MERGED:
                merged.setdefault(key, value)
    if properties:
        merged["properties"] = properties
        merged.setdefault("type", "object")
    if required:
        merged["required"] = required
    return merged


def _sample_string(schema: dict[str, Any]) -> str:
    value = _FORMAT_SAMPLES.get(schema.get("format") or "", _DEFAULT_STRING)
    min_length = schema.get("minLength")
    max_length = schema.get("maxLength")
    if isinstance(min_length, int) and len(value) < min_length:
        value = (value * (min_length // len(value) + 1))[:min_length]
    if isinstance(max_length, int) and len(value) > max_length:
        value = value[:max_length]
    return value


def _sample_number(schema: dict[str, Any]) -> int | float:
    value: int | float = 0
    minimum = schema.get("minimum")
    maximum = schema.get("maximum")
    exclusive_min = schema.get("exclusiveMinimum")
    exclusive_max = schema.get("exclusiveMaximum")
    step = 1 if schema.get("type") == "integer" else 0.01

    # 3.1 uses numeric exclusive bounds, 3.0 uses booleans next to minimum/maximum
    if isinstance(exclusive_min, (int, float)) and not isinstance(exclusive_min, bool):
        value = exclusive_min + step
    elif isinstance(minimum, (int, float)):
        value = minimum + step if exclusive_min is True else minimum
    elif isinstance(exclusive_max, (int, float)) and not isinstance(exclusive_max, bool):
        value = min(0, exclusive_max - step)
    elif isinstance(maximum, (int, float)) and maximum < 0:
        value = maximum - step if exclusive_max is True else maximum
    if schema.get("type") == "integer":
        return int(value)
    return value


def _empty_for(schema: dict[str, Any]) -> Any:
    kind = _infer_type(schema)
    if kind == "object":
        return {}
    if kind == "array":
        return []
    return None


def sample_schema(
    spec: dict[str, Any],
    schema: dict[str, Any] | None,
    _stack: tuple[str, ...] = (),
) -> Any:
    """Build a representative value for schema, resolving refs against spec."""
    if not isinstance(schema, dict):
        return None

    if "$ref" in schema:
        ref = schema["$ref"]
        resolved = resolve_ref(spec, ref)
        if ref in _stack:
            return _empty_for(resolved)
        return sample_schema(spec, resolved, _stack + (ref,))

    if "const" in schema:
        return schema["const"]
    if "example" in schema:
        return schema["example"]
    if isinstance(schema.get("examples"), list) and schema["examples"]:
        return schema["examples"][0]
    if "default" in schema:
        return schema["default"]
    if schema.get("enum"):
        return schema["enum"][0]

    if "allOf" in schema:
        return sample_schema(spec, _merge_all_of(spec, schema, _stack), _stack)
    for key in ("oneOf", "anyOf"):
        if schema.get(key):
            return sample_schema(spec, schema[key][0], _stack)

    kind = _infer_type(schema)
    if kind == "object":
        result = {}
        for name, prop in (schema.get("properties") or {}).items():
            if isinstance(prop, dict) and prop.get("readOnly"):
                continue
            result[name] = sample_schema(spec, prop, _stack)
        return result
    if kind == "array":
        items = schema.get("items") or {}
        if isinstance(items, list):
            items = items[0] if items else {}
        count = max(1, schema.get("minItems") or 0)
        return [sample_schema(spec, items, _stack) for _ in range(count)]
    if kind == "string":
        return _sample_string(schema)
    if kind in ("integer", "number"):
        return _sample_number(schema)
    if kind == "boolean":
        return True
    return None
