"""Tests for rfcpointer.reference — pointers bound to a base document."""

from __future__ import annotations

import copy
import json

import pytest

from rfcpointer.errors import MalformedPointerError, NegativeIndexError, NoParentOfRootError
from rfcpointer.pointer import ROOT, JsonPointer
from rfcpointer.reference import JsonReference

# ---------------------------------------------------------------------------
# Test documents
# ---------------------------------------------------------------------------

TEST_STRING = json.loads('"test1"')
TEST_OBJECT = json.loads('{"field1":123,"field2":["abc","def"]}')


# ===================================================================
# Construction
# ===================================================================


class TestConstruction:
    def test_root_pointer(self):
        ref = JsonReference(TEST_STRING, ROOT)
        assert ref.base is TEST_STRING
        assert ref.pointer == ROOT
        assert ref.valid
        assert ref.value is TEST_STRING
        assert str(ref) == '"test1"'

    def test_default_pointer_is_root(self):
        ref = JsonReference(TEST_STRING)
        assert ref.pointer == ROOT
        assert ref.is_root
        assert ref.valid
        assert ref.value is TEST_STRING

    def test_non_root_pointer(self):
        ref = JsonReference(TEST_OBJECT, JsonPointer.parse("/field1"))
        assert ref.base is TEST_OBJECT
        assert ref.pointer == ROOT.child("field1")
        assert ref.valid
        assert ref.value == 123
        assert str(ref) == "123"

    def test_string_pointer(self):
        ref = JsonReference(TEST_OBJECT, "/field2/0")
        assert ref.pointer == ROOT.child("field2").child(0)
        assert ref.valid
        assert ref.value == "abc"
        assert str(ref) == '"abc"'

    def test_malformed_string_pointer(self):
        with pytest.raises(MalformedPointerError):
            JsonReference(TEST_OBJECT, "field1")

    def test_invalid_pointer(self):
        ref = JsonReference(TEST_OBJECT, JsonPointer.parse("/field99"))
        assert ref.base is TEST_OBJECT
        assert ref.pointer == ROOT.child("field99")
        assert not ref.valid
        assert ref.value is None
        assert str(ref) == "invalid"

    @pytest.mark.parametrize("path", ["/field2/-", "/field2/01", "/field2/5", "/field1/x"])
    def test_resolution_failures_become_invalid(self, path):
        ref = JsonReference(TEST_OBJECT, path)
        assert not ref.valid

    def test_null_base_is_invalid(self):
        assert not JsonReference(None).valid
        assert not JsonReference(None, ROOT).valid
        assert str(JsonReference(None)) == "invalid"

    def test_null_member_is_valid(self):
        doc = {"a": None}
        ref = JsonReference(doc, "/a")
        assert ref.valid
        assert ref.value is None
        assert str(ref) == "null"

    def test_whole_object_renders_compact_json(self):
        assert str(JsonReference(TEST_OBJECT)) == '{"field1":123,"field2":["abc","def"]}'

    def test_non_ascii_rendered_verbatim(self):
        assert str(JsonReference({"k": "café"}, "/k")) == '"café"'

    def test_delegated_pointer_operations(self):
        ref = JsonReference(TEST_OBJECT, "/field2/1")
        assert ref.tokens == ("field2", "1")
        assert ref.current_token == "1"
        assert ref.to_uri_fragment() == "#/field2/1"
        assert repr(ref) == "JsonReference('/field2/1', valid=True)"


# ===================================================================
# Navigation
# ===================================================================


class TestNavigation:
    def test_child(self):
        root = JsonReference(TEST_OBJECT)
        assert isinstance(root.value, dict)
        child = root.child("field1")
        assert child.base is TEST_OBJECT
        assert child.pointer == ROOT.child("field1")
        assert child.valid
        assert child.value == 123
        assert str(child) == "123"

    def test_child_index(self):
        ref = JsonReference(TEST_OBJECT).child("field2").child(1)
        assert ref.valid
        assert ref.value == "def"

    def test_child_string_index_into_array(self):
        ref = JsonReference(TEST_OBJECT).child("field2").child("1")
        assert ref.valid
        assert ref.value == "def"

    def test_child_int_on_object_uses_decimal_key(self):
        ref = JsonReference({"0": "zero"}).child(0)
        assert ref.valid
        assert ref.value == "zero"

    def test_child_missing(self):
        ref = JsonReference(TEST_OBJECT).child("field99")
        assert not ref.valid
        assert ref.pointer == JsonPointer.parse("/field99")

    def test_child_past_end(self):
        assert not JsonReference(TEST_OBJECT).child("field2").child(2).valid

    def test_child_of_scalar(self):
        assert not JsonReference(TEST_OBJECT).child("field1").child("x").valid

    def test_child_of_invalid_stays_invalid(self):
        ref = JsonReference(TEST_OBJECT).child("nope").child("field1")
        assert not ref.valid
        assert ref.pointer == JsonPointer.parse("/nope/field1")

    def test_child_negative_index(self):
        with pytest.raises(NegativeIndexError):
            JsonReference(TEST_OBJECT).child("field2").child(-1)

    def test_truediv(self):
        assert (JsonReference(TEST_OBJECT) / "field2" / 0).value == "abc"

    def test_child_does_not_rewalk_from_base(self):
        # A child is derived from the cached value only; replacing the base's
        # member afterwards does not affect a reference already holding it.
        doc = {"a": {"b": 1}}
        ref_a = JsonReference(doc, "/a")
        doc["a"] = {"b": 2}
        assert ref_a.child("b").value == 1

    def test_parent(self):
        child = JsonReference(TEST_OBJECT).child("field1")
        parent = child.parent()
        assert parent.base is TEST_OBJECT
        assert parent.pointer == ROOT
        assert parent.valid
        assert parent.value is TEST_OBJECT
        assert str(parent) == '{"field1":123,"field2":["abc","def"]}'

    def test_parent_of_invalid_can_be_valid(self):
        ref = JsonReference(TEST_OBJECT, "/field2/7")
        assert not ref.valid
        parent = ref.parent()
        assert parent.valid
        assert parent.value == ["abc", "def"]

    def test_parent_of_root(self):
        with pytest.raises(NoParentOfRootError):
            JsonReference(TEST_OBJECT).parent()

    def test_child_then_parent(self):
        ref = JsonReference(TEST_OBJECT, "/field2")
        assert ref.child(0).parent() == ref


class TestHasChild:
    def test_object_names(self):
        root = JsonReference(TEST_OBJECT)
        assert not root.has_child("field99")
        assert root.has_child("field2")

    def test_array_indices(self):
        ref = JsonReference(TEST_OBJECT).child("field2")
        assert not ref.has_child("field99")
        assert not ref.has_child(2)
        assert not ref.has_child(-1)
        assert ref.has_child(0)
        assert ref.has_child(1)

    def test_name_against_array(self):
        assert not JsonReference(TEST_OBJECT).child("field2").has_child("0")

    def test_name_against_array_differs_from_child(self):
        ref = JsonReference(TEST_OBJECT).child("field2")
        assert not ref.has_child("0")
        assert ref.child("0").valid
        assert ref.has_child(0)

    def test_index_against_object(self):
        ref = JsonReference({"1": "one"})
        assert ref.has_child(1)
        assert not ref.has_child(2)

    def test_invalid_has_no_children(self):
        assert not JsonReference(TEST_OBJECT, "/nope").has_child("field1")
        assert not JsonReference(None).has_child(0)

    def test_scalar_has_no_children(self):
        ref = JsonReference(TEST_OBJECT, "/field1")
        assert not ref.has_child("x")
        assert not ref.has_child(0)


# ===================================================================
# Equality
# ===================================================================


class TestEquality:
    def test_equal_references(self):
        ref1 = JsonReference(TEST_OBJECT, JsonPointer.parse("/field2/1"))
        ref2 = JsonReference(TEST_OBJECT).child("field2").child(1)
        assert ref1 == ref2
        assert hash(ref1) == hash(ref2)

    def test_different_paths(self):
        ref1 = JsonReference(TEST_OBJECT, JsonPointer.parse("/field2/1"))
        ref2 = JsonReference(TEST_OBJECT).child("field2")
        assert ref1 != ref2

    def test_different_base_identity(self):
        ref1 = JsonReference(TEST_OBJECT, "/field2")
        ref2 = JsonReference(copy.copy(TEST_OBJECT)).child("field2")
        assert ref1.value is ref2.value
        assert ref1 != ref2

    def test_structurally_equal_bases(self):
        ref1 = JsonReference(json.loads('{"a": [1]}'), "/a")
        ref2 = JsonReference(json.loads('{"a": [1]}'), "/a")
        assert ref1 != ref2

    def test_not_equal_to_pointer(self):
        ref = JsonReference(TEST_OBJECT, "/field1")
        assert ref != JsonPointer.parse("/field1")

    def test_invalid_references_on_same_base(self):
        assert JsonReference(TEST_OBJECT, "/x") == JsonReference(TEST_OBJECT).child("x")

    def test_usable_as_dict_key(self):
        seen = {JsonReference(TEST_OBJECT, "/field1"): "first"}
        assert seen[JsonReference(TEST_OBJECT).child("field1")] == "first"
