# ==============================================
# Recursive Tree Builder
# ==============================================
#
# PURPOSE:
#   Walk a sample object's data attributes and produce the
#   schema-description tree: one FieldDescriptor per attribute,
#   with nested objects described by sub-trees.
#
# CLASS: SchemaTreeBuilder
# ------------------------
#   Holds the options for one build plus the recursion guard state.
#
#   Methods:
#   --------
#   - build(sample) -> SchemaTree
#       Top-level entry, namespace "".
#
#   Internal helpers:
#   -----------------
#   - _build_tree(obj, namespace, options, depth) -> SchemaTree
#       One FieldDescriptor per attribute:
#         required = name not in options.optional_attributes
#         default  = options.default_values[name] if present else NO_DEFAULT
#       Optional attributes and defaults are applied at the top level only.
#
#   - _resolve_type(value, namespace, options, depth) -> FieldType
#       classify_value(), then refine:
#         NESTED → sub-tree (recursion with namespace extended by ":name")
#         ARRAY  → [element type] when strongly_type_arrays is set and the
#                  array is non-empty; [MIXED] if element types differ
#
#   - _enter(value, namespace, depth) / _leave(value)
#       Guard against cycles (CyclicStructureError) and, when
#       options.max_depth is set, excessive nesting (MaxDepthExceededError).
#
# FUNCTION:
# ---------
# - build_schema_tree(sample, options=None) -> SchemaTree
#
# ==============================================

import logging
from typing import Any, Optional, Set

from docschema.errors import CyclicStructureError, MaxDepthExceededError
from .classifier import classify_value, iter_data_attributes
from .descriptor import FieldDescriptor, FieldKind, FieldType, NO_DEFAULT, SchemaTree
from .options import InferenceOptions

logger = logging.getLogger(__name__)


class SchemaTreeBuilder:
    """
    Builds a schema-description tree from a single sample object.

    A builder is cheap; create one per build. It keeps track of the
    objects on the current recursion path so that a sample which
    refers back to one of its ancestors fails cleanly instead of
    recursing forever.
    """

    def __init__(self, options: Optional[InferenceOptions] = None):
        self.options = options or InferenceOptions()
        self._active: Set[int] = set()

    def build(self, sample: Any) -> SchemaTree:
        """
        Build the tree for a top-level sample.

        Args:
            sample: A dict or an object with data attributes

        Returns:
            Mapping of attribute name → FieldDescriptor
        """
        self._active = set()
        self._enter(sample, "", 0)
        try:
            return self._build_tree(sample, "", self.options, 0)
        finally:
            self._leave(sample)

    def _build_tree(
        self,
        obj: Any,
        namespace: str,
        options: InferenceOptions,
        depth: int
    ) -> SchemaTree:
        tree: SchemaTree = {}
        nested_options = options.for_nested()

        for name, value in iter_data_attributes(obj):
            sub_namespace = f"{namespace}:{name}" if namespace else name

            descriptor = FieldDescriptor(
                name=name,
                type=self._resolve_type(value, sub_namespace, nested_options, depth),
                required=not options.is_optional(name),
            )
            if options.default_values is not None:
                descriptor.default = options.default_values.get(name, NO_DEFAULT)

            tree[name] = descriptor

        return tree

    def _resolve_type(
        self,
        value: Any,
        namespace: str,
        options: InferenceOptions,
        depth: int
    ) -> FieldType:
        kind = classify_value(value, options)

        if kind is FieldKind.NESTED:
            self._enter(value, namespace, depth + 1)
            try:
                return self._build_tree(value, namespace, options, depth + 1)
            finally:
                self._leave(value)

        if kind is FieldKind.ARRAY and options.strongly_type_arrays and len(value) > 0:
            self._enter(value, namespace, depth + 1)
            try:
                return [self._element_type(value, namespace, options, depth + 1)]
            finally:
                self._leave(value)

        logger.debug("Classified '%s' as %s", namespace, kind.value)
        return kind

    def _element_type(
        self,
        array: Any,
        namespace: str,
        options: InferenceOptions,
        depth: int
    ) -> FieldType:
        """Common type of every element, or MIXED for heterogeneous arrays."""
        first_type = self._resolve_type(array[0], f"{namespace}[0]", options, depth)

        for index in range(1, len(array)):
            element_type = self._resolve_type(array[index], f"{namespace}[{index}]", options, depth)
            if element_type != first_type:
                logger.debug("Array '%s' is heterogeneous, typing elements as Mixed", namespace)
                return FieldKind.MIXED

        return first_type

    def _enter(self, value: Any, namespace: str, depth: int) -> None:
        if id(value) in self._active:
            raise CyclicStructureError(namespace)
        max_depth = self.options.max_depth
        if max_depth is not None and depth > max_depth:
            raise MaxDepthExceededError(namespace, max_depth)
        self._active.add(id(value))

    def _leave(self, value: Any) -> None:
        self._active.discard(id(value))


def build_schema_tree(sample: Any, options: Optional[InferenceOptions] = None) -> SchemaTree:
    """
    Infer the schema-description tree of a sample object.

    No input validation happens here; use docschema.infer_schema()
    for the checked entry point.
    """
    return SchemaTreeBuilder(options).build(sample)
