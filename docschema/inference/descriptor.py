# ==============================================
# Descriptor (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of inference:
#   the field kinds and the per-attribute field descriptors
#   that make up a schema-description tree.
#
# ENUMS:
# ------
# - FieldKind(Enum): TEXT, NUMBER, TIMESTAMP, BINARY, BOOLEAN, MIXED,
#                    OBJECT_ID, ARRAY, DECIMAL128, MAP, NESTED
#     Values use the Mongoose schema type names so serialized trees
#     read the same way a hand-written schema would.
#
# CLASSES:
# --------
# - FieldDescriptor (dataclass)
#     The description of a single attribute.
#
#     Attributes:
#     -----------
#     - name: str            → Attribute name (stringified)
#     - type: FieldType      → FieldKind, nested SchemaTree, or [element type]
#     - required: bool       → False only for caller-declared optional attributes
#     - default: Any         → Default value, or the NO_DEFAULT marker
#
#     Methods:
#     --------
#     - to_dict() -> dict    → Serialize (omits "default" when NO_DEFAULT)
#     - from_dict(name, data) -> FieldDescriptor  (classmethod)
#
# FUNCTIONS:
# ----------
# - tree_to_dict(tree) -> dict
# - tree_from_dict(data) -> SchemaTree
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, List, Union


class FieldKind(Enum):
    """
    Closed set of field kinds a sample attribute can be classified into.

    NESTED never appears as a descriptor type on its own: a nested
    object is described by its sub-tree instead.
    """
    TEXT = "String"
    NUMBER = "Number"
    TIMESTAMP = "Date"
    BINARY = "Buffer"
    BOOLEAN = "Boolean"
    MIXED = "Mixed"
    OBJECT_ID = "ObjectId"
    ARRAY = "Array"
    DECIMAL128 = "Decimal128"
    MAP = "Map"
    NESTED = "Object"


class _NoDefault:
    """Marker for descriptors that carry no default value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_NoDefault, ())


NO_DEFAULT = _NoDefault()

# FieldKind | SchemaTree | [FieldType]
FieldType = Union[FieldKind, Dict[str, "FieldDescriptor"], List[Any]]
SchemaTree = Dict[str, "FieldDescriptor"]


@dataclass
class FieldDescriptor:
    """
    Describes one attribute of the sample.

    `type` is a FieldKind for scalar attributes, a SchemaTree for
    nested objects, or a one-element list naming the element type
    of a strongly typed array.
    """

    name: str
    type: Any
    required: bool = True
    default: Any = NO_DEFAULT

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def is_nested(self) -> bool:
        return isinstance(self.type, dict)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the descriptor to a dictionary.

        The default value is copied verbatim; callers that write the
        result to disk should use bson.json_util so BSON values survive.

        Returns:
            A dictionary with "type", "required" and, when set, "default"
        """
        data = {
            "type": _type_to_data(self.type),
            "required": self.required,
        }
        if self.has_default:
            data["default"] = self.default
        return data

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "FieldDescriptor":
        """
        Reconstruct a FieldDescriptor from serialized data.

        Args:
            name: Attribute name the descriptor belongs to
            data: Dictionary produced by to_dict()

        Returns:
            A FieldDescriptor instance
        """
        return cls(
            name=name,
            type=_type_from_data(data["type"]),
            required=data.get("required", True),
            default=data["default"] if "default" in data else NO_DEFAULT,
        )


def _type_to_data(field_type: Any) -> Any:
    if isinstance(field_type, FieldKind):
        return field_type.value
    if isinstance(field_type, dict):
        return tree_to_dict(field_type)
    if isinstance(field_type, list):
        return [_type_to_data(element) for element in field_type]
    raise TypeError(f"Unsupported field type: {field_type!r}")


def _type_from_data(data: Any) -> Any:
    if isinstance(data, str):
        return FieldKind(data)
    if isinstance(data, dict):
        return tree_from_dict(data)
    if isinstance(data, list):
        return [_type_from_data(element) for element in data]
    raise TypeError(f"Unsupported serialized field type: {data!r}")


def tree_to_dict(tree: SchemaTree) -> Dict[str, Any]:
    """Serialize a schema-description tree to plain dictionaries."""
    return {name: descriptor.to_dict() for name, descriptor in tree.items()}


def tree_from_dict(data: Dict[str, Any]) -> SchemaTree:
    """Rebuild a schema-description tree from tree_to_dict() output."""
    return {
        name: FieldDescriptor.from_dict(name, descriptor_data)
        for name, descriptor_data in data.items()
    }
