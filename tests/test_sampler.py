"""Tests for sample value synthesis."""

import pytest

from snippetgen.errors import ReferenceResolutionError
from snippetgen.sampler import sample_schema

_SPEC: dict = {
    "components": {
        "schemas": {
            "Base": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "readOnly": True},
                    "name": {"type": "string"},
                },
            },
            "Extended": {
                "allOf": [
                    {"$ref": "#/components/schemas/Base"},
                    {"type": "object", "properties": {"extra": {"type": "boolean"}}},
                ]
            },
            "Node": {
                "type": "object",
                "properties": {
                    "value": {"type": "integer"},
                    "children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}},
                    "parent": {"$ref": "#/components/schemas/Node"},
                },
            },
        }
    }
}


class TestScalars:
    def test_defaults_per_type(self):
        assert sample_schema(_SPEC, {"type": "string"}) == "string"
        assert sample_schema(_SPEC, {"type": "integer"}) == 0
        assert sample_schema(_SPEC, {"type": "number"}) == 0
        assert sample_schema(_SPEC, {"type": "boolean"}) is True
        assert sample_schema(_SPEC, {"type": "null"}) is None

    def test_formats(self):
        assert sample_schema(_SPEC, {"type": "string", "format": "email"}) == "user@example.com"
        assert sample_schema(_SPEC, {"type": "string", "format": "date-time"}) == "2019-08-24T14:15:22Z"
        assert sample_schema(_SPEC, {"type": "string", "format": "binary"}) == "string"

    def test_length_bounds(self):
        assert sample_schema(_SPEC, {"type": "string", "minLength": 10}) == "stringstri"
        assert sample_schema(_SPEC, {"type": "string", "maxLength": 3}) == "str"

    def test_numeric_bounds(self):
        assert sample_schema(_SPEC, {"type": "integer", "minimum": 5}) == 5
        assert sample_schema(_SPEC, {"type": "integer", "minimum": 5, "exclusiveMinimum": True}) == 6
        assert sample_schema(_SPEC, {"type": "integer", "exclusiveMinimum": 1}) == 2
        assert sample_schema(_SPEC, {"type": "integer", "maximum": -3}) == -3

    def test_nullable_type_list(self):
        assert sample_schema(_SPEC, {"type": ["null", "string"]}) == "string"


class TestShortCircuits:
    """Declared values win over synthesized ones, in a fixed order."""

    def test_example_beats_type(self):
        assert sample_schema(_SPEC, {"type": "boolean", "example": "text"}) == "text"

    def test_order(self):
        schema = {"const": 1, "example": 2, "default": 3, "enum": [4]}
        assert sample_schema(_SPEC, schema) == 1
        del schema["const"]
        assert sample_schema(_SPEC, schema) == 2
        del schema["example"]
        assert sample_schema(_SPEC, schema) == 3
        del schema["default"]
        assert sample_schema(_SPEC, schema) == 4

    def test_examples_list(self):
        assert sample_schema(_SPEC, {"type": "string", "examples": ["a", "b"]}) == "a"


class TestStructures:
    def test_object_property_order_kept(self):
        schema = {"type": "object", "properties": {"b": {"type": "string"}, "a": {"type": "integer"}}}
        assert list(sample_schema(_SPEC, schema)) == ["b", "a"]

    def test_read_only_skipped(self):
        assert sample_schema(_SPEC, {"$ref": "#/components/schemas/Base"}) == {"name": "string"}

    def test_all_of_merged(self):
        assert sample_schema(_SPEC, {"$ref": "#/components/schemas/Extended"}) == {
            "name": "string",
            "extra": True,
        }

    def test_one_of_first_branch(self):
        schema = {"oneOf": [{"type": "integer"}, {"type": "string"}]}
        assert sample_schema(_SPEC, schema) == 0

    def test_array_min_items(self):
        assert sample_schema(_SPEC, {"type": "array", "items": {"type": "string"}}) == ["string"]
        assert sample_schema(_SPEC, {"type": "array", "items": {"type": "integer"}, "minItems": 2}) == [0, 0]

    def test_inferred_object(self):
        assert sample_schema(_SPEC, {"properties": {"x": {"type": "boolean"}}}) == {"x": True}

    def test_recursive_schema_terminates(self):
        """A schema that refers to itself stops at the repeated reference."""
        assert sample_schema(_SPEC, {"$ref": "#/components/schemas/Node"}) == {
            "value": 0,
            "children": [{}],
            "parent": {},
        }

    def test_unresolvable_ref(self):
        with pytest.raises(ReferenceResolutionError):
            sample_schema(_SPEC, {"$ref": "#/components/schemas/Missing"})


class TestAllOfCycles:
    """Inheritance chains that loop back stop at the repeated reference."""

    spec = {
        "components": {
            "schemas": {
                "Cat": {
                    "allOf": [
                        {"$ref": "#/components/schemas/Pet"},
                        {"type": "object", "properties": {"indoor": {"type": "boolean"}}},
                    ]
                },
                "Pet": {
                    "allOf": [
                        {"$ref": "#/components/schemas/Cat"},
                        {"type": "object", "properties": {"name": {"type": "string"}}},
                    ]
                },
                "Self": {
                    "allOf": [
                        {"$ref": "#/components/schemas/Self"},
                        {"type": "object", "properties": {"id": {"type": "integer"}}},
                    ]
                },
            }
        }
    }

    def test_mutual_all_of(self):
        assert sample_schema(self.spec, {"$ref": "#/components/schemas/Cat"}) == {
            "name": "string",
            "indoor": True,
        }

    def test_self_all_of(self):
        assert sample_schema(self.spec, {"$ref": "#/components/schemas/Self"}) == {"id": 0}

    def test_inline_all_of_into_cycle(self):
        schema = {"allOf": [{"$ref": "#/components/schemas/Self"}]}
        assert sample_schema(self.spec, schema) == {"id": 0}
