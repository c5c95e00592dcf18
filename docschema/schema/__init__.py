# ==============================================
# SCHEMA TRANSLATION
# ==============================================
#
# Turns inferred schema-description trees into the documents a
# MongoDB collection validator understands.
#
# Modules:
# --------
# - json_schema.py  → FieldKind → bsonType mapping, $jsonSchema builder
#
# ==============================================

from .json_schema import bson_type_for, to_json_schema, to_validator

__all__ = ["bson_type_for", "to_json_schema", "to_validator"]
