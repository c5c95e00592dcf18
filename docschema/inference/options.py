# ==============================================
# InferenceOptions
# ==============================================
#
# PURPOSE:
#   Per-call configuration record consulted by the classifier
#   and the tree builder.
#
# CLASS: InferenceOptions (dataclass, frozen)
# -------------------------------------------
#   - optional_attributes: frozenset[str]   → top-level names with required=False
#   - default_values: dict | None           → top-level name -> default value
#   - strongly_type_arrays: bool            → type arrays by their element kind
#   - decimal128_conversion_rules: frozenset[Decimal128ConversionRule]
#   - max_depth: int | None                 → container nesting limit
#
#   Constructors:
#   -------------
#   - coerce(options=None, **overrides)  → accept InferenceOptions / mapping / kwargs
#   - from_mapping(data)                 → snake_case or camelCase keys
#   - from_config(config=None, **overrides) → defaults from docschema.config
#
#   - for_nested() → copy without the top-level-only settings
#
# ==============================================

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, FrozenSet, Mapping, Optional

from docschema.config import get_config
from docschema.errors import InvalidOptionsError
from .decimal_policy import Decimal128ConversionRule, parse_rules


# external (camelCase) option names → field names
_ALIASES = {
    "optionalAttributes": "optional_attributes",
    "defaultValues": "default_values",
    "stronglyTypeArrays": "strongly_type_arrays",
    "decimal128ConversionRules": "decimal128_conversion_rules",
    "maxDepth": "max_depth",
}


@dataclass(frozen=True)
class InferenceOptions:
    """
    Options for a single inference call.

    Optional attributes and default values only affect top-level
    attributes; the remaining settings apply at every depth.
    """

    optional_attributes: FrozenSet[str] = field(default_factory=frozenset)
    default_values: Optional[Dict[str, Any]] = None
    strongly_type_arrays: bool = False
    decimal128_conversion_rules: FrozenSet[Decimal128ConversionRule] = field(default_factory=frozenset)
    max_depth: Optional[int] = None

    def __post_init__(self):
        optional = self.optional_attributes
        if optional is None:
            optional = ()
        elif isinstance(optional, str):
            optional = (optional,)
        object.__setattr__(self, "optional_attributes", frozenset(str(name) for name in optional))

        if self.default_values is not None:
            if not isinstance(self.default_values, Mapping):
                raise InvalidOptionsError("default_values must be a mapping of attribute name to value")
            object.__setattr__(
                self,
                "default_values",
                {str(name): value for name, value in self.default_values.items()}
            )

        object.__setattr__(self, "strongly_type_arrays", bool(self.strongly_type_arrays))
        rules = self.decimal128_conversion_rules
        if not (isinstance(rules, frozenset) and all(isinstance(rule, Decimal128ConversionRule) for rule in rules)):
            object.__setattr__(self, "decimal128_conversion_rules", parse_rules(rules))

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
                raise InvalidOptionsError(f"max_depth must be a positive integer, got {self.max_depth!r}")

    @property
    def converts_decimals(self) -> bool:
        return bool(self.decimal128_conversion_rules)

    def is_optional(self, name: str) -> bool:
        return name in self.optional_attributes

    def for_nested(self) -> "InferenceOptions":
        """Options passed below the top level (no optional/default handling)."""
        if not self.optional_attributes and self.default_values is None:
            return self
        return replace(self, optional_attributes=frozenset(), default_values=None)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InferenceOptions":
        """
        Build options from a plain mapping.

        Accepts both the snake_case field names and the camelCase names
        (optionalAttributes, defaultValues, stronglyTypeArrays,
        decimal128ConversionRules, maxDepth).

        Raises:
            InvalidOptionsError: on unrecognized keys
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidOptionsError(f"Unknown inference option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def coerce(cls, options: Any = None, **overrides: Any) -> "InferenceOptions":
        """
        Normalize whatever the caller passed as options.

        Args:
            options: None, an InferenceOptions, or a mapping of option names
            **overrides: Individual options that take precedence

        Returns:
            An InferenceOptions instance
        """
        if options is None:
            base = cls()
        elif isinstance(options, cls):
            base = options
        elif isinstance(options, Mapping):
            base = cls.from_mapping(options)
        else:
            raise InvalidOptionsError(
                f"options must be an InferenceOptions or a mapping, got {type(options).__name__}"
            )

        if not overrides:
            return base
        names = [_ALIASES.get(key, key) for key in overrides]
        merged = cls.from_mapping(overrides)
        return replace(base, **{name: getattr(merged, name) for name in names})

    @classmethod
    def from_config(cls, config=None, **overrides: Any) -> "InferenceOptions":
        """Start from the configured inference defaults, then apply overrides."""
        if config is None:
            config = get_config()
        defaults = config.inference
        base = cls(
            strongly_type_arrays=defaults.strongly_type_arrays,
            decimal128_conversion_rules=defaults.decimal128_rules,
            max_depth=defaults.max_depth,
        )
        return cls.coerce(base, **overrides)
