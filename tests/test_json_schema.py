# ==============================================
# Tests for $jsonSchema translation and tree serialization
# ==============================================

import pytest

from docschema import FieldKind, InferenceOptions, infer_schema, tree_from_dict, tree_to_dict
from docschema.schema import bson_type_for, to_json_schema, to_validator


class TestBsonTypeMapping:
    def test_every_kind_is_mapped(self):
        for kind in FieldKind:
            bson_type_for(kind)

    @pytest.mark.parametrize("kind, expected", [
        (FieldKind.TEXT, "string"),
        (FieldKind.NUMBER, ["int", "long", "double"]),
        (FieldKind.TIMESTAMP, "date"),
        (FieldKind.BINARY, "binData"),
        (FieldKind.BOOLEAN, "bool"),
        (FieldKind.MIXED, None),
        (FieldKind.OBJECT_ID, "objectId"),
        (FieldKind.ARRAY, "array"),
        (FieldKind.DECIMAL128, "decimal"),
        (FieldKind.MAP, "object"),
    ])
    def test_mapping(self, kind, expected):
        assert bson_type_for(kind) == expected


class TestToJsonSchema:
    def test_flat_tree(self):
        tree = infer_schema({"name": "x", "age": 3, "extra": None}, optional_attributes=["age"])
        assert to_json_schema(tree) == {
            "bsonType": "object",
            "required": ["name", "extra"],
            "properties": {
                "name": {"bsonType": "string"},
                "age": {"bsonType": ["int", "long", "double"]},
                "extra": {},
            },
        }

    def test_nested_and_typed_arrays(self):
        tree = infer_schema(
            {"meta": {"tags": ["a"], "mixed": ["a", 1], "any": []}},
            strongly_type_arrays=True
        )
        meta = to_json_schema(tree)["properties"]["meta"]
        assert meta["bsonType"] == "object"
        assert meta["required"] == ["tags", "mixed", "any"]
        assert meta["properties"]["tags"] == {"bsonType": "array", "items": {"bsonType": "string"}}
        assert meta["properties"]["mixed"] == {"bsonType": "array"}
        assert meta["properties"]["any"] == {"bsonType": "array"}

    def test_no_required_key_when_everything_is_optional(self):
        tree = infer_schema({"a": 1}, optional_attributes=["a"])
        assert "required" not in to_json_schema(tree)

    def test_validator_wrapper(self):
        tree = infer_schema({"a": "x"})
        assert to_validator(tree) == {"$jsonSchema": to_json_schema(tree)}


class TestTreeSerialization:
    def test_to_dict(self):
        tree = infer_schema(
            {"a": "x", "b": {"c": [1, 2]}},
            InferenceOptions(strongly_type_arrays=True, default_values={"a": "dflt"})
        )
        assert tree_to_dict(tree) == {
            "a": {"type": "String", "required": True, "default": "dflt"},
            "b": {
                "type": {"c": {"type": ["Number"], "required": True}},
                "required": True,
            },
        }

    def test_round_trip_keeps_default_marker(self):
        tree = infer_schema({"a": "x", "b": [{"n": 1}]}, strongly_type_arrays=True, default_values={"a": None})
        restored = tree_from_dict(tree_to_dict(tree))
        assert restored == tree
        assert restored["a"].has_default
        assert not restored["b"].has_default
