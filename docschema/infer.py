# ==============================================
# infer_schema — caller-facing entry point
# ==============================================
#
# PURPOSE:
#   Decide what kind of input the caller handed over and route it.
#   Only single sample objects are supported; the other recognized
#   kinds are reserved and raise MethodNotImplementedError.
#
# DISPATCH ORDER:
# ---------------
#   1. None                                        → InvalidInputError
#   2. a class                                     → MethodNotImplementedError(CLASS)
#   3. any other callable                          → MethodNotImplementedError(FUNCTION)
#   4. non-empty list/tuple of object-shaped items → MethodNotImplementedError(ARRAY)
#   5. dict, mapping or object with attributes     → build_schema_tree()
#        (InvalidInputError if it has no data attributes)
#   6. anything else                               → InvalidInputError
#
# ==============================================

import inspect
import logging
from typing import Any, Optional

from docschema.errors import InputKind, InvalidInputError, MethodNotImplementedError
from docschema.inference import FieldKind, InferenceOptions, SchemaTree, build_schema_tree, classify_value
from docschema.inference.classifier import is_object_shaped, is_sequence, iter_data_attributes

logger = logging.getLogger(__name__)


def infer_schema(sample: Any, options: Optional[Any] = None, **kwargs: Any) -> SchemaTree:
    """
    Infer a schema-description tree from a single sample object.

    Args:
        sample: A dict or an object with data attributes
        options: InferenceOptions, or a mapping using the option names
                 (snake_case or optionalAttributes / defaultValues /
                 stronglyTypeArrays / decimal128ConversionRules)
        **kwargs: Individual options, overriding `options`

    Returns:
        Mapping of attribute name → FieldDescriptor

    Raises:
        InvalidInputError: if the sample is missing or has no data attributes
        MethodNotImplementedError: for classes, functions and lists of samples
        InvalidOptionsError: if the options cannot be interpreted
    """
    if sample is None:
        raise InvalidInputError(InputKind.OBJECT, "Received None.")

    if inspect.isclass(sample):
        raise MethodNotImplementedError(InputKind.CLASS)

    if callable(sample):
        raise MethodNotImplementedError(InputKind.FUNCTION)

    if is_sequence(sample):
        if len(sample) > 0 and is_object_shaped(sample[0]):
            raise MethodNotImplementedError(InputKind.ARRAY)
        raise InvalidInputError(InputKind.OBJECT, "Received a list of non-object values.")

    if classify_value(sample) not in (FieldKind.NESTED, FieldKind.MAP):
        raise InvalidInputError(InputKind.OBJECT, f"Received {type(sample).__name__}.")

    if next(iter_data_attributes(sample), None) is None:
        raise InvalidInputError(InputKind.OBJECT, "The sample has no data attributes.")

    resolved = InferenceOptions.coerce(options, **kwargs)
    logger.debug(
        "Inferring schema from %s (strongly_type_arrays=%s, decimal128 rules=%s)",
        type(sample).__name__,
        resolved.strongly_type_arrays,
        sorted(rule.value for rule in resolved.decimal128_conversion_rules),
    )
    return build_schema_tree(sample, resolved)
