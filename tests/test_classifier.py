# ==============================================
# Tests for the Attribute Classifier
# ==============================================

from collections import OrderedDict
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType

import pytest
from bson.binary import Binary
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.objectid import ObjectId

from docschema.inference import FieldKind, InferenceOptions, classify_value
from docschema.inference.classifier import is_object_shaped, iter_data_attributes


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y


class Plain:
    def __init__(self):
        self.value = 1
        self.callback = print


class TestClassifyValue:
    @pytest.mark.parametrize("value, expected", [
        (None, FieldKind.MIXED),
        ("text", FieldKind.TEXT),
        ("", FieldKind.TEXT),
        (42, FieldKind.NUMBER),
        (-3.5, FieldKind.NUMBER),
        (Int64(7), FieldKind.NUMBER),
        (datetime(2024, 5, 1), FieldKind.TIMESTAMP),
        (date(2024, 5, 1), FieldKind.TIMESTAMP),
        (b"raw", FieldKind.BINARY),
        (bytearray(b"raw"), FieldKind.BINARY),
        (Binary(b"raw", 4), FieldKind.BINARY),
        (True, FieldKind.BOOLEAN),
        (False, FieldKind.BOOLEAN),
        (ObjectId(), FieldKind.OBJECT_ID),
        ([], FieldKind.ARRAY),
        (["a", 1], FieldKind.ARRAY),
        ((1, 2), FieldKind.ARRAY),
        (Decimal128("1.23"), FieldKind.DECIMAL128),
        (Decimal("1.23"), FieldKind.DECIMAL128),
        (OrderedDict(a=1), FieldKind.MAP),
        (MappingProxyType({"a": 1}), FieldKind.MAP),
        ({"a": 1}, FieldKind.NESTED),
        ({}, FieldKind.NESTED),
        (Point(1, 2), FieldKind.NESTED),
        ({1, 2}, FieldKind.MIXED),
    ])
    def test_default_classification(self, value, expected):
        assert classify_value(value) is expected

    def test_bool_is_not_a_number(self):
        """bool subclasses int but must classify as Boolean."""
        assert classify_value(True) is FieldKind.BOOLEAN
        assert classify_value(0) is FieldKind.NUMBER

    def test_decimal_rules_take_precedence_over_number(self):
        options = InferenceOptions(decimal128_conversion_rules=["IntegerToDecimal"])
        assert classify_value(2147483647, options) is FieldKind.DECIMAL128
        assert classify_value(2147483647) is FieldKind.NUMBER

    def test_decimal_rules_take_precedence_over_text(self):
        options = InferenceOptions(decimal128_conversion_rules=["DecimalStringToDecimal"])
        assert classify_value("1.25", options) is FieldKind.DECIMAL128
        assert classify_value("1.2.5", options) is FieldKind.TEXT

    def test_decimal_rules_do_not_touch_booleans(self):
        options = InferenceOptions(decimal128_conversion_rules=["IntegerToDecimal"])
        assert classify_value(True, options) is FieldKind.BOOLEAN

    def test_none_stays_mixed_with_rules(self):
        options = InferenceOptions(
            decimal128_conversion_rules=["IntegerToDecimal", "DecimalToDecimal", "IntegerStringToDecimal"]
        )
        assert classify_value(None, options) is FieldKind.MIXED


class TestObjectShape:
    def test_functions_and_classes_are_not_objects(self):
        assert not is_object_shaped(print)
        assert not is_object_shaped(Plain)
        assert not is_object_shaped(pytest)

    def test_iter_data_attributes_skips_callables(self):
        assert list(iter_data_attributes(Plain())) == [("value", 1)]

    def test_iter_data_attributes_reads_slots(self):
        assert list(iter_data_attributes(Point(1, 2))) == [("x", 1), ("y", 2)]

    def test_iter_data_attributes_stringifies_keys(self):
        assert list(iter_data_attributes({1: "a", "b": len})) == [("1", "a")]
