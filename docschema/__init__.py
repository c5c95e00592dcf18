# ==============================================
# docschema — schema inference from a sample document
# ==============================================
#
# Package Structure:
#
# docschema/
# ├── inference/     # Classification, Decimal128 policy, tree building
# ├── schema/        # Tree → MongoDB $jsonSchema validator
# ├── storage/       # Apply validators to MongoDB collections
# ├── persistence/   # Save / load inferred schemas on disk
# ├── infer.py       # infer_schema(): input dispatch and validation
# ├── errors.py      # Exception hierarchy
# ├── config.py      # Configuration management
# └── cli.py         # Command line entry point
#
# ==============================================

from docschema.errors import (
    InferenceError,
    InvalidInputError,
    MethodNotImplementedError,
    InvalidOptionsError,
    CyclicStructureError,
    MaxDepthExceededError,
)
from docschema.inference import (
    FieldKind,
    FieldDescriptor,
    NO_DEFAULT,
    Decimal128ConversionRule,
    InferenceOptions,
    tree_to_dict,
    tree_from_dict,
)
from docschema.infer import infer_schema

__version__ = "0.1.0"

__all__ = [
    "infer_schema",
    "FieldKind",
    "FieldDescriptor",
    "NO_DEFAULT",
    "Decimal128ConversionRule",
    "InferenceOptions",
    "tree_to_dict",
    "tree_from_dict",
    "InferenceError",
    "InvalidInputError",
    "MethodNotImplementedError",
    "InvalidOptionsError",
    "CyclicStructureError",
    "MaxDepthExceededError",
]
