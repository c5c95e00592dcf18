# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   All exceptions raised by the inference engine and the
#   dispatch layer in front of it.
#
# HIERARCHY:
# ----------
# - InferenceError(Exception)
#     ├── InvalidInputError          → sample is not a usable single object
#     ├── MethodNotImplementedError  → class / function / array-of-samples input
#     ├── InvalidOptionsError        → malformed inference options
#     ├── CyclicStructureError       → sample refers back to itself
#     └── MaxDepthExceededError      → nesting deeper than options.max_depth
#
# All errors are terminal for the call: no partial schema tree
# is ever returned together with an error.
#
# ==============================================

from enum import Enum


class InputKind(Enum):
    """Kinds of input the dispatch layer can recognize."""
    CLASS = "Class"
    FUNCTION = "Function"
    ARRAY = "Array of Sample Objects"
    OBJECT = "Sample Object"


class InferenceError(Exception):
    """Base class for every schema inference failure."""


class InvalidInputError(InferenceError, ValueError):
    """Raised when the argument is not a valid sample of the given kind."""

    def __init__(self, input_kind: InputKind = InputKind.OBJECT, detail: str = ""):
        self.input_kind = input_kind
        message = (
            "Unable to infer schema from provided input - "
            f"argument is not a valid {input_kind.value}."
        )
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class MethodNotImplementedError(InferenceError, NotImplementedError):
    """Raised for input kinds that are recognized but not supported yet."""

    def __init__(self, input_kind: InputKind):
        self.input_kind = input_kind
        super().__init__(
            "Unable to infer schema from provided input - "
            f"inference from {input_kind.value} is not yet implemented."
        )


class InvalidOptionsError(InferenceError, ValueError):
    """Raised when inference options cannot be interpreted."""


class CyclicStructureError(InferenceError):
    """Raised when a sample contains a reference to one of its ancestors."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(
            "Unable to infer schema from provided input - "
            f"cyclic reference detected at '{namespace}'."
        )


class MaxDepthExceededError(InferenceError):
    """Raised when a sample nests deeper than the configured maximum."""

    def __init__(self, namespace: str, max_depth: int):
        self.namespace = namespace
        self.max_depth = max_depth
        super().__init__(
            "Unable to infer schema from provided input - "
            f"'{namespace}' is nested deeper than max_depth={max_depth}."
        )
