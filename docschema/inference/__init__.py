# ==============================================
# INFERENCE ENGINE
# ==============================================
#
# This package turns one sample value into a schema-description
# tree. It never validates its input; the dispatch layer in
# docschema.infer does that before calling in.
#
# Modules:
# --------
# - descriptor.py      → FieldKind, FieldDescriptor, tree (de)serialization
# - decimal_policy.py  → Decimal128 conversion rules and predicates
# - options.py         → InferenceOptions (per-call configuration)
# - classifier.py      → Ordered value → FieldKind classification
# - tree_builder.py    → Recursive descriptor tree construction
#
# ==============================================

from .descriptor import (
    FieldKind,
    FieldDescriptor,
    NO_DEFAULT,
    SchemaTree,
    tree_to_dict,
    tree_from_dict,
)
from .decimal_policy import Decimal128ConversionRule, should_convert_to_decimal128
from .options import InferenceOptions
from .classifier import classify_value
from .tree_builder import SchemaTreeBuilder, build_schema_tree

__all__ = [
    "FieldKind",
    "FieldDescriptor",
    "NO_DEFAULT",
    "SchemaTree",
    "tree_to_dict",
    "tree_from_dict",
    "Decimal128ConversionRule",
    "should_convert_to_decimal128",
    "InferenceOptions",
    "classify_value",
    "SchemaTreeBuilder",
    "build_schema_tree",
]
