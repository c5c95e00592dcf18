# ==============================================
# Attribute Classifier
# ==============================================
#
# PURPOSE:
#   Decide which FieldKind a single runtime value represents.
#   This is the ordered predicate chain the tree builder consults
#   for every attribute and every array element.
#
# FUNCTION: classify_value(value, options) -> FieldKind
# -----------------------------------------------------
#   First match wins, in this order:
#
#     1.  None                                  → MIXED
#     2.  enabled Decimal128 conversion rule    → DECIMAL128
#     3.  str                                   → TEXT
#     4.  int / float (not bool)                → NUMBER
#     5.  datetime / date                       → TIMESTAMP
#     6.  bytes / bytearray / memoryview / Binary → BINARY
#     7.  bool                                  → BOOLEAN
#     8.  ObjectId                              → OBJECT_ID
#     9.  empty list / tuple                    → ARRAY
#     10. non-empty list / tuple                → ARRAY
#     11. Decimal128 / decimal.Decimal          → DECIMAL128
#     12. Mapping that is not a plain dict      → MAP
#     13. plain dict / object with attributes   → NESTED
#     anything else                             → MIXED
#
#   ARRAY and NESTED are refined by the tree builder (element typing,
#   sub-tree construction); this module never recurses.
#
# HELPERS:
# --------
#   is_sequence(value), is_object_shaped(value),
#   iter_data_attributes(value) → (name, value) pairs of an object
#
# ==============================================

import inspect
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterator, List, Optional, Tuple

from bson.binary import Binary
from bson.decimal128 import Decimal128
from bson.objectid import ObjectId

from .decimal_policy import should_convert_to_decimal128
from .descriptor import FieldKind
from .options import InferenceOptions

_SEQUENCE_TYPES = (list, tuple)
_BINARY_TYPES = (bytes, bytearray, memoryview, Binary)
_DECIMAL_TYPES = (Decimal128, Decimal)


def is_sequence(value: Any) -> bool:
    return isinstance(value, _SEQUENCE_TYPES)


def _slot_names(cls: type) -> List[str]:
    names = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(slot for slot in slots if slot not in ("__dict__", "__weakref__"))
    return names


def is_object_shaped(value: Any) -> bool:
    """
    True for values whose attributes can be described as a sub-tree.

    Plain dicts qualify, as do instances carrying a __dict__ or
    __slots__. Classes, functions and modules do not.
    """
    if type(value) is dict:
        return True
    if value is None or callable(value) or inspect.ismodule(value):
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def iter_data_attributes(value: Any) -> Iterator[Tuple[str, Any]]:
    """
    Yield (name, value) pairs for the data attributes of an object.

    Dict keys and attribute names are stringified. Callable values
    are skipped.
    """
    if isinstance(value, Mapping):
        items = list(value.items())
    else:
        items = list(vars(value).items()) if hasattr(value, "__dict__") else []
        seen = {name for name, _ in items}
        for slot in _slot_names(type(value)):
            if slot not in seen and hasattr(value, slot):
                items.append((slot, getattr(value, slot)))
                seen.add(slot)

    for name, attribute in items:
        if callable(attribute):
            continue
        yield str(name), attribute


def classify_value(value: Any, options: Optional[InferenceOptions] = None) -> FieldKind:
    """
    Classify one value into a FieldKind.

    Args:
        value: The attribute value under inspection
        options: Per-call options; only the Decimal128 rules matter here

    Returns:
        The FieldKind of the first matching rule
    """
    if value is None:
        return FieldKind.MIXED

    if options is not None and options.converts_decimals:
        if should_convert_to_decimal128(value, options.decimal128_conversion_rules):
            return FieldKind.DECIMAL128

    if isinstance(value, str):
        return FieldKind.TEXT

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return FieldKind.NUMBER

    if isinstance(value, (datetime, date)):
        return FieldKind.TIMESTAMP

    if isinstance(value, _BINARY_TYPES):
        return FieldKind.BINARY

    if isinstance(value, bool):
        return FieldKind.BOOLEAN

    if isinstance(value, ObjectId):
        return FieldKind.OBJECT_ID

    if is_sequence(value):
        return FieldKind.ARRAY

    if isinstance(value, _DECIMAL_TYPES):
        return FieldKind.DECIMAL128

    if isinstance(value, Mapping) and type(value) is not dict:
        return FieldKind.MAP

    if is_object_shaped(value):
        return FieldKind.NESTED

    return FieldKind.MIXED
