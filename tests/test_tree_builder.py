# ==============================================
# Tests for the Recursive Tree Builder
# ==============================================

import pytest

from docschema.errors import CyclicStructureError, MaxDepthExceededError
from docschema.inference import (
    NO_DEFAULT,
    FieldDescriptor,
    FieldKind,
    InferenceOptions,
    SchemaTreeBuilder,
    build_schema_tree,
)


class TestDescriptors:
    def test_required_by_default(self):
        tree = build_schema_tree({"a": "x", "b": 1})
        assert tree["a"] == FieldDescriptor(name="a", type=FieldKind.TEXT, required=True)
        assert tree["b"].type is FieldKind.NUMBER
        assert tree["b"].default is NO_DEFAULT

    def test_preserves_attribute_order(self):
        tree = build_schema_tree({"z": 1, "a": 2, "m": 3})
        assert list(tree) == ["z", "a", "m"]

    def test_optional_attributes(self):
        tree = build_schema_tree({"a": "x", "b": "y"}, InferenceOptions(optional_attributes=["a"]))
        assert tree["a"].required is False
        assert tree["b"].required is True

    def test_optional_attribute_not_in_sample_adds_nothing(self):
        tree = build_schema_tree({"a": "x"}, InferenceOptions(optional_attributes=["missing"]))
        assert list(tree) == ["a"]

    def test_default_values_are_verbatim(self):
        default = ["not", "a", "number"]
        tree = build_schema_tree({"a": 1}, InferenceOptions(default_values={"a": default}))
        assert tree["a"].default is default

    def test_default_marker_when_key_absent(self):
        tree = build_schema_tree({"a": 1, "b": 2}, InferenceOptions(default_values={"a": 5}))
        assert tree["a"].default == 5
        assert tree["b"].default is NO_DEFAULT
        assert not tree["b"].has_default

    def test_none_default_is_kept(self):
        tree = build_schema_tree({"a": 1}, InferenceOptions(default_values={"a": None}))
        assert tree["a"].has_default
        assert tree["a"].default is None


class TestNesting:
    def test_nested_object_becomes_subtree(self):
        tree = build_schema_tree({"a": {"b": "x"}})
        subtree = tree["a"].type
        assert isinstance(subtree, dict)
        assert subtree["b"] == FieldDescriptor(name="b", type=FieldKind.TEXT, required=True)

    def test_optional_and_defaults_only_apply_top_level(self):
        options = InferenceOptions(optional_attributes=["b"], default_values={"b": "d"})
        tree = build_schema_tree({"a": {"b": "x"}, "b": "y"}, options)
        assert tree["b"].required is False
        assert tree["b"].default == "d"
        nested = tree["a"].type["b"]
        assert nested.required is True
        assert nested.default is NO_DEFAULT

    def test_empty_nested_object(self):
        assert build_schema_tree({"a": {}})["a"].type == {}

    def test_decimal_rules_apply_at_every_depth(self):
        options = InferenceOptions(decimal128_conversion_rules=["IntegerToDecimal"])
        tree = build_schema_tree({"a": {"b": {"c": 10}}}, options)
        assert tree["a"].type["b"].type["c"].type is FieldKind.DECIMAL128


class TestArrays:
    def test_empty_array_is_untyped(self):
        for strongly in (False, True):
            tree = build_schema_tree({"a": []}, InferenceOptions(strongly_type_arrays=strongly))
            assert tree["a"].type is FieldKind.ARRAY

    def test_untyped_by_default(self):
        assert build_schema_tree({"a": ["x", "y"]})["a"].type is FieldKind.ARRAY

    def test_homogeneous_array(self):
        options = InferenceOptions(strongly_type_arrays=True)
        assert build_schema_tree({"a": ["x", "y"]}, options)["a"].type == [FieldKind.TEXT]

    def test_heterogeneous_array(self):
        options = InferenceOptions(strongly_type_arrays=True)
        assert build_schema_tree({"a": ["x", 1]}, options)["a"].type == [FieldKind.MIXED]

    def test_array_of_objects(self):
        options = InferenceOptions(strongly_type_arrays=True)
        tree = build_schema_tree({"a": [{"name": "n1"}, {"name": "n2"}]}, options)
        element = tree["a"].type[0]
        assert element == {"name": FieldDescriptor(name="name", type=FieldKind.TEXT)}

    def test_array_of_differently_shaped_objects(self):
        options = InferenceOptions(strongly_type_arrays=True)
        tree = build_schema_tree({"a": [{"name": "n1"}, {"title": "t"}]}, options)
        assert tree["a"].type == [FieldKind.MIXED]

    def test_nested_arrays(self):
        options = InferenceOptions(strongly_type_arrays=True)
        tree = build_schema_tree({"a": [[1, 2], [3]]}, options)
        assert tree["a"].type == [[FieldKind.NUMBER]]

    def test_decimal_rules_inside_arrays(self):
        options = InferenceOptions(
            strongly_type_arrays=True,
            decimal128_conversion_rules=["DecimalToDecimal"]
        )
        assert build_schema_tree({"a": [1.5, 2.5]}, options)["a"].type == [FieldKind.DECIMAL128]


class TestGuards:
    def test_cycle_through_dict(self):
        sample = {"a": {}}
        sample["a"]["parent"] = sample
        with pytest.raises(CyclicStructureError) as excinfo:
            build_schema_tree(sample)
        assert excinfo.value.namespace == "a:parent"

    def test_cycle_through_strongly_typed_array(self):
        items = []
        items.append(items)
        with pytest.raises(CyclicStructureError):
            build_schema_tree({"a": items}, InferenceOptions(strongly_type_arrays=True))

    def test_shared_reference_is_not_a_cycle(self):
        shared = {"x": 1}
        tree = build_schema_tree({"a": shared, "b": shared})
        assert tree["a"].type == tree["b"].type

    def test_max_depth(self):
        sample = {"a": {"b": {"c": 1}}}
        build_schema_tree(sample, InferenceOptions(max_depth=2))
        with pytest.raises(MaxDepthExceededError):
            build_schema_tree(sample, InferenceOptions(max_depth=1))

    def test_builder_is_reusable(self):
        builder = SchemaTreeBuilder()
        assert builder.build({"a": 1}) == builder.build({"a": 1})
