"""
Tests for the number and string element schemas.
"""
import math
import re

import pytest

from shapecast import Ok, number, string


class TestNumberCast:
    """Test number coercion."""

    @pytest.mark.parametrize("raw,expected", [
        ("5", 5),
        (" 2.5 ", 2.5),
        ("1 000", 1000),
        ("-3", -3),
        (7, 7),
        (1.5, 1.5),
    ])
    def test_numeric_input(self, raw, expected):
        """Test values that coerce to numbers."""
        assert number().cast(raw) == expected

    def test_integral_text_gives_int(self):
        """Test that integral text stays an int."""
        assert isinstance(number().cast("42"), int)

    @pytest.mark.parametrize("raw", ["abc", "", True, [1], {}])
    def test_uncastable_input_gives_nan(self, raw):
        """Test that bad input degrades to NaN."""
        assert math.isnan(number().cast(raw))

    def test_null_is_kept(self):
        """Test that None is left for the type check."""
        assert number().cast(None) is None


class TestNumberValidation:
    """Test number builders."""

    def test_type_check_rejects_bool_and_nan(self):
        """Test the strict type check."""
        assert number().strict().validate_sync(True).is_err()
        assert number().strict().validate_sync(math.nan).is_err()
        assert number().strict().validate_sync(3) == Ok(3)

    def test_min_and_max(self):
        """Test inclusive bounds."""
        schema = number().min(1).max(3)
        assert schema.is_valid_sync(1)
        assert schema.is_valid_sync(3)
        assert schema.validate_sync(0).error.messages == ["this must be greater than or equal to 1"]
        assert schema.validate_sync(4).error.messages == ["this must be less than or equal to 3"]

    def test_exclusive_bounds(self):
        """Test more_than and less_than."""
        schema = number().more_than(1).less_than(3)
        assert schema.is_valid_sync(2)
        assert schema.validate_sync(1).error.messages == ["this must be greater than 1"]
        assert schema.validate_sync(3).error.messages == ["this must be less than 3"]

    def test_more_than_replaces_min(self):
        """Test that the lower bounds share one slot."""
        schema = number().min(10).more_than(0)
        assert [t.name for t in schema.tests] == ["min"]
        assert schema.is_valid_sync(5)

    def test_positive_and_negative(self):
        """Test sign checks."""
        assert number().positive().validate_sync(0).error.messages == ["this must be a positive number"]
        assert number().negative().validate_sync(0).error.messages == ["this must be a negative number"]
        assert number().positive().is_valid_sync(0.1)

    def test_integer(self):
        """Test integer()."""
        schema = number().integer()
        assert schema.is_valid_sync(4)
        assert schema.is_valid_sync(4.0)
        assert schema.validate_sync(4.5).error.messages == ["this must be an integer"]

    def test_bounds_ignore_absent(self):
        """Test that bounds pass for null on a nullable schema."""
        assert number().nullable().min(1).validate_sync(None) == Ok(None)


class TestStringCast:
    """Test string coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (5, "5"),
        (2.5, "2.5"),
        (True, "true"),
        (False, "false"),
        ("x", "x"),
    ])
    def test_scalars_become_text(self, raw, expected):
        """Test scalar conversion."""
        assert string().cast(raw) == expected

    def test_null_is_kept(self):
        """Test that None is not stringified."""
        assert string().cast(None) is None

    def test_containers_fail_type_check(self):
        """Test that lists are not stringified."""
        assert string().validate_sync([1]).is_err()


class TestStringValidation:
    """Test string builders."""

    def test_required_rejects_empty(self):
        """Test string presence."""
        assert string().required().validate_sync("").error.messages == ["this is a required field"]

    def test_length_bounds(self):
        """Test length, min_length and max_length."""
        assert string().length(2).validate_sync("abc").error.messages == ["this must be exactly 2 characters"]
        assert string().min_length(2).validate_sync("a").error.messages == ["this must be at least 2 characters"]
        assert string().max_length(2).validate_sync("abc").error.messages == ["this must be at most 2 characters"]
        assert string().min_length(1).max_length(3).is_valid_sync("ab")

    def test_matches(self):
        """Test pattern matching."""
        schema = string().matches(r"^\d+$")
        assert schema.is_valid_sync("123")
        assert schema.validate_sync("12a").error.messages == ['this must match the following: "^\\d+$"']

    def test_matches_compiled_pattern(self):
        """Test a precompiled pattern."""
        assert string().matches(re.compile("^a", re.IGNORECASE)).is_valid_sync("Abc")

    def test_matches_exclude_empty(self):
        """Test that empty strings can skip the pattern."""
        assert string().matches("^a", exclude_empty=True).is_valid_sync("")
        assert not string().matches("^a").is_valid_sync("")

    def test_trim_casts(self):
        """Test that trim() strips when casting."""
        assert string().trim().cast("  a ") == "a"
        assert string().trim().validate_sync("  a ") == Ok("a")

    def test_trim_strict(self):
        """Test that strict validation rejects untrimmed text."""
        result = string().trim().strict().validate_sync(" a")
        assert result.error.messages == ["this must be a trimmed string"]
