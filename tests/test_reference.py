"""
Tests for deferred references and value helpers.
"""
import math

import pytest

from shapecast import UNDEFINED, Reference, is_absent, ref, sparse_list
from shapecast.validation import print_value
from shapecast.validation.reference import get_in


class TestGetIn:
    """Test path lookup."""

    def test_nested_mapping_and_index(self):
        """Test dotted and indexed segments."""
        data = {"a": {"b": [{"c": 1}, {"c": 2}]}}
        assert get_in(data, "a.b[1].c") == 2

    def test_missing_segment(self):
        """Test that misses give UNDEFINED."""
        assert get_in({"a": 1}, "b") is UNDEFINED
        assert get_in([1], "[3]") is UNDEFINED
        assert get_in(None, "a") is UNDEFINED

    def test_attribute_access(self):
        """Test attribute lookup on objects."""

        class Point:
            x = 4

        assert get_in(Point(), "x") == 4


class TestReference:
    """Test Reference resolution."""

    def test_context_reference(self):
        """Test $-prefixed keys."""
        reference = ref("$limits.max")
        assert reference.is_context
        assert reference.get_value(None, None, {"limits": {"max": 3}}) == 3

    def test_value_reference(self):
        """Test .-prefixed keys."""
        reference = ref(".size")
        assert reference.is_value
        assert reference.get_value({"size": 2}) == 2

    def test_sibling_reference(self):
        """Test keys read from the parent."""
        reference = ref("other")
        assert reference.is_sibling
        assert reference.get_value(1, {"other": 9}) == 9

    def test_missing_context(self):
        """Test that an absent context resolves to UNDEFINED."""
        assert ref("$x").get_value(1, None, None) is UNDEFINED

    def test_map(self):
        """Test the map callable."""
        assert ref("$n", map=lambda v: v * 2).get_value(None, None, {"n": 4}) == 8

    def test_invalid_keys(self):
        """Test key validation."""
        with pytest.raises(TypeError):
            Reference(3)
        with pytest.raises(ValueError):
            ref("   ")

    def test_describe_and_guard(self):
        """Test introspection helpers."""
        reference = ref("$x")
        assert reference.describe() == {"type": "ref", "key": "$x"}
        assert Reference.is_ref(reference)
        assert not Reference.is_ref("$x")


class TestValueHelpers:
    """Test UNDEFINED, sparse lists and value printing."""

    def test_undefined_is_falsy_singleton(self):
        """Test the absent sentinel."""
        assert not UNDEFINED
        assert repr(UNDEFINED) == "UNDEFINED"
        assert is_absent(UNDEFINED)
        assert is_absent(None)
        assert not is_absent(0)

    def test_sparse_list(self):
        """Test sparse list construction."""
        values = sparse_list(3, {1: "x"})
        assert values == [UNDEFINED, "x", UNDEFINED]

    def test_sparse_list_index_out_of_range(self):
        """Test bounds checking."""
        with pytest.raises(IndexError):
            sparse_list(2, {2: "x"})
        with pytest.raises(ValueError):
            sparse_list(-1)

    @pytest.mark.parametrize("value,expected", [
        (None, "null"),
        (UNDEFINED, "undefined"),
        (True, "true"),
        (math.nan, "NaN"),
        (-math.inf, "-Infinity"),
        (3, "3"),
        ("s", "s"),
        ([1, "a"], '[1, "a"]'),
    ])
    def test_print_value(self, value, expected):
        """Test message rendering of values."""
        assert print_value(value) == expected

    def test_print_value_quotes_strings(self):
        """Test quoted string rendering."""
        assert print_value("s", quote_strings=True) == '"s"'
