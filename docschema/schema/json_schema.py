# ==============================================
# MongoDB $jsonSchema Translation
# ==============================================
#
# PURPOSE:
#   Turn a schema-description tree into a MongoDB `$jsonSchema`
#   validator document, the form MongoDB enforces on a collection.
#
# FUNCTIONS:
# ----------
# - bson_type_for(kind: FieldKind) -> str | list[str] | None
#     Closed mapping from field kind to BSON type alias:
#       TEXT       → "string"
#       NUMBER     → ["int", "long", "double"]
#       TIMESTAMP  → "date"
#       BINARY     → "binData"
#       BOOLEAN    → "bool"
#       MIXED      → None (no constraint)
#       OBJECT_ID  → "objectId"
#       ARRAY      → "array"
#       DECIMAL128 → "decimal"
#       MAP        → "object"
#       NESTED     → "object"
#
# - to_json_schema(tree) -> dict
#     {"bsonType": "object", "required": [...], "properties": {...}}
#     Nested trees recurse; strongly typed arrays get "items".
#     "required" is left out when no attribute is required.
#
# - to_validator(tree) -> dict
#     {"$jsonSchema": to_json_schema(tree)}
#
# NOTE:
#   MongoDB's $jsonSchema does not support "default", so defaults
#   stay in the description tree only.
#
# ==============================================

from typing import Any, Dict, List, Optional, Union

from docschema.inference.descriptor import FieldKind, SchemaTree


def bson_type_for(kind: FieldKind) -> Optional[Union[str, List[str]]]:
    """Return the $jsonSchema bsonType for a field kind (None for Mixed)."""
    if kind is FieldKind.TEXT:
        return "string"
    if kind is FieldKind.NUMBER:
        return ["int", "long", "double"]
    if kind is FieldKind.TIMESTAMP:
        return "date"
    if kind is FieldKind.BINARY:
        return "binData"
    if kind is FieldKind.BOOLEAN:
        return "bool"
    if kind is FieldKind.MIXED:
        return None
    if kind is FieldKind.OBJECT_ID:
        return "objectId"
    if kind is FieldKind.ARRAY:
        return "array"
    if kind is FieldKind.DECIMAL128:
        return "decimal"
    if kind in (FieldKind.MAP, FieldKind.NESTED):
        return "object"
    raise ValueError(f"Unknown field kind: {kind!r}")


def _property_schema(field_type: Any) -> Dict[str, Any]:
    if isinstance(field_type, FieldKind):
        bson_type = bson_type_for(field_type)
        return {} if bson_type is None else {"bsonType": bson_type}

    if isinstance(field_type, dict):
        return to_json_schema(field_type)

    if isinstance(field_type, list):
        schema: Dict[str, Any] = {"bsonType": "array"}
        if field_type:
            items = _property_schema(field_type[0])
            if items:
                schema["items"] = items
        return schema

    raise TypeError(f"Unsupported field type: {field_type!r}")


def to_json_schema(tree: SchemaTree) -> Dict[str, Any]:
    """
    Build the $jsonSchema body for a schema-description tree.

    Args:
        tree: Mapping of attribute name → FieldDescriptor

    Returns:
        A $jsonSchema object schema
    """
    properties = {
        name: _property_schema(descriptor.type)
        for name, descriptor in tree.items()
    }
    required = [name for name, descriptor in tree.items() if descriptor.required]

    schema: Dict[str, Any] = {"bsonType": "object"}
    if required:
        schema["required"] = required
    schema["properties"] = properties
    return schema


def to_validator(tree: SchemaTree) -> Dict[str, Any]:
    """Wrap the tree's $jsonSchema in a collection validator document."""
    return {"$jsonSchema": to_json_schema(tree)}
