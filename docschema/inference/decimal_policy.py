# ==============================================
# Decimal128 Conversion Policy
# ==============================================
#
# PURPOSE:
#   Decide whether a scalar value should be described as a
#   Decimal128 field instead of its default kind (Number / String).
#   Every conversion is opt-in through a rule tag.
#
# ENUM: Decimal128ConversionRule
# ------------------------------
#   INTEGER_TO_DECIMAL            → int within the exact-float range
#   DECIMAL_TO_DECIMAL            → float written as digits '.' digits
#   BIGINT_TO_DECIMAL             → Int64 / big int up to 2**63 - 1
#   DECIMAL_STRING_TO_DECIMAL     → "1.23"
#   INTEGER_STRING_TO_DECIMAL     → "123"
#   BIGINT_STRING_TO_DECIMAL      → "9223372036854775806"
#   DECIMAL128_STRING_TO_DECIMAL  → accepted, never matches (no predicate yet)
#
# PREDICATES:
# -----------
#   is_integer, is_integer_parseable_string,
#   is_decimal, is_decimal_parseable_string,
#   is_bigint, is_bigint_parseable_string
#
#   Only unsigned ASCII digits are recognized; negative numbers and
#   exponent-notation strings never match. Floats are written out in
#   positional notation before the decimal check.
#
# FUNCTION:
# ---------
# - should_convert_to_decimal128(value, rules) -> bool
#     First enabled matching predicate wins. Evaluation order:
#     integer, integer string, decimal, decimal string, bigint, bigint string.
#
# ==============================================

import logging
import re
import sys
from decimal import Decimal
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional

from bson.int64 import Int64

from docschema.errors import InvalidOptionsError

logger = logging.getLogger(__name__)

MAX_SAFE_INTEGER = 2 ** 53 - 1
MAX_INT64 = 9223372036854775807
MAX_FLOAT = sys.float_info.max

_INTEGER_PATTERN = re.compile(r"[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[0-9]*\.[0-9]*")


class Decimal128ConversionRule(Enum):
    """Opt-in rules promoting scalar values to Decimal128."""
    INTEGER_TO_DECIMAL = "IntegerToDecimal"
    DECIMAL_TO_DECIMAL = "DecimalToDecimal"
    BIGINT_TO_DECIMAL = "BigintToDecimal"
    DECIMAL_STRING_TO_DECIMAL = "DecimalStringToDecimal"
    INTEGER_STRING_TO_DECIMAL = "IntegerStringToDecimal"
    BIGINT_STRING_TO_DECIMAL = "BigintStringToDecimal"
    DECIMAL128_STRING_TO_DECIMAL = "Decimal128StringToDecimal"

    @classmethod
    def parse(cls, tag: Any) -> "Decimal128ConversionRule":
        """
        Interpret a rule given as a member, its tag or its member name.

        Raises:
            InvalidOptionsError: if the tag names no rule
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls(tag)
            except ValueError:
                pass
            try:
                return cls[tag.upper()]
            except KeyError:
                pass
        raise InvalidOptionsError(f"Unknown Decimal128 conversion rule: {tag!r}")


def parse_rules(tags: Optional[Iterable[Any]]) -> FrozenSet[Decimal128ConversionRule]:
    """Turn a collection of rule tags into a frozenset of rules."""
    if tags is None:
        return frozenset()
    if isinstance(tags, (str, Decimal128ConversionRule)):
        tags = [tags]
    rules = frozenset(Decimal128ConversionRule.parse(tag) for tag in tags)
    if Decimal128ConversionRule.DECIMAL128_STRING_TO_DECIMAL in rules:
        logger.warning(
            "Decimal128 conversion rule %s is not implemented and will never match",
            Decimal128ConversionRule.DECIMAL128_STRING_TO_DECIMAL.value,
        )
    return rules


def _is_big_integer_value(value: Any) -> bool:
    # Int64 is the BSON big integer; plain ints past the exact-float range count too
    if isinstance(value, Int64):
        return True
    return type(value) is int and abs(value) > MAX_SAFE_INTEGER


def _digits_within(digits: str, limit: int) -> bool:
    # length check first: int() refuses very long digit strings
    significant = digits.lstrip("0") or "0"
    return len(significant) <= len(str(limit)) and int(significant) <= limit


def is_integer_parseable_string(value: Any) -> bool:
    return (
        isinstance(value, str)
        and _INTEGER_PATTERN.fullmatch(value) is not None
        and _digits_within(value, MAX_SAFE_INTEGER)
    )


def is_integer(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and not _is_big_integer_value(value)
        and is_integer_parseable_string(str(int(value)))
    )


def is_decimal_parseable_string(value: Any) -> bool:
    if not isinstance(value, str) or _DECIMAL_PATTERN.fullmatch(value) is None:
        return False
    try:
        parsed = float(value)
    except ValueError:
        # a lone "." matches the pattern but is not a number
        return False
    return abs(parsed) <= MAX_FLOAT


def is_decimal(value: Any) -> bool:
    if not isinstance(value, float):
        return False
    # positional notation; str() switches to exponents below 1e-4
    return is_decimal_parseable_string(format(Decimal(repr(value)), "f"))



def is_bigint_parseable_string(value: Any) -> bool:
    return (
        isinstance(value, str)
        and _INTEGER_PATTERN.fullmatch(value) is not None
        and _digits_within(value, MAX_INT64)
    )


def is_bigint(value: Any) -> bool:
    return _is_big_integer_value(value) and is_bigint_parseable_string(str(int(value)))


def can_convert_to_decimal128(value: Any) -> bool:
    """True for native numbers that a Decimal128 can hold."""
    return is_decimal(value) or is_integer(value)


_RULE_CHECKS = (
    (is_integer, Decimal128ConversionRule.INTEGER_TO_DECIMAL),
    (is_integer_parseable_string, Decimal128ConversionRule.INTEGER_STRING_TO_DECIMAL),
    (is_decimal, Decimal128ConversionRule.DECIMAL_TO_DECIMAL),
    (is_decimal_parseable_string, Decimal128ConversionRule.DECIMAL_STRING_TO_DECIMAL),
    (is_bigint, Decimal128ConversionRule.BIGINT_TO_DECIMAL),
    (is_bigint_parseable_string, Decimal128ConversionRule.BIGINT_STRING_TO_DECIMAL),
)


def should_convert_to_decimal128(
    value: Any,
    rules: Optional[Iterable[Decimal128ConversionRule]]
) -> bool:
    """
    Check whether a scalar should be promoted to Decimal128.

    Args:
        value: The attribute value under inspection
        rules: Enabled conversion rules (None or empty disables conversion)

    Returns:
        True if an enabled rule's predicate matches the value
    """
    if not rules:
        return False
    enabled = rules if isinstance(rules, (set, frozenset)) else frozenset(rules)

    for predicate, rule in _RULE_CHECKS:
        if rule in enabled and predicate(value):
            return True
    return False
