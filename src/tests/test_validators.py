"""
Tests for input validation functions.

Tests cover the field-level validators used by the recipe command parser
and the collaborator services:
- String validation (required, length)
- Numeric validation (positive, finite)
- Unit validation
- String sanitisation

All validation functions raise ValidationError on failure.
"""

from decimal import Decimal

import pytest

from src.utils import validators
from src.services.exceptions import ValidationError
from src.utils.constants import MAX_UNIT_LENGTH


class TestStringValidation:
    """Test string validation functions."""

    def test_validate_required_string_returns_trimmed(self):
        assert validators.validate_required_string("  Flour ", "Name") == "Flour"

    @pytest.mark.parametrize("value", [None, "", "   ", 12, ["a"]])
    def test_validate_required_string_invalid(self, value):
        with pytest.raises(ValidationError) as exc:
            validators.validate_required_string(value, "Name")
        assert exc.value.errors == ["Name: This field is required"]

    def test_validate_string_length_ok(self):
        validators.validate_string_length("abc", 3, "Code")
        validators.validate_string_length(None, 3, "Code")

    def test_validate_string_length_too_long(self):
        with pytest.raises(ValidationError, match="Code: Must be 3 characters or less"):
            validators.validate_string_length("abcd", 3, "Code")


class TestNumberValidation:
    """Test validate_positive_number()."""

    @pytest.mark.parametrize(
        "value, expected",
        [(1, 1.0), (0.25, 0.25), ("2.5", 2.5), (" 3 ", 3.0), (Decimal("1.5"), 1.5)],
    )
    def test_valid_numbers(self, value, expected):
        assert validators.validate_positive_number(value, "Quantity") == expected

    @pytest.mark.parametrize("value", [0, -0.5, "-1"])
    def test_non_positive(self, value):
        with pytest.raises(ValidationError) as exc:
            validators.validate_positive_number(value, "Quantity")
        assert exc.value.errors == ["Quantity: Value must be greater than zero"]

    @pytest.mark.parametrize(
        "value", [None, "", "abc", True, False, [1], float("nan"), float("inf"), "-inf"]
    )
    def test_not_a_number(self, value):
        with pytest.raises(ValidationError) as exc:
            validators.validate_positive_number(value, "Quantity")
        assert exc.value.errors == ["Quantity: Please enter a valid number"]


class TestUnitValidation:
    """Test validate_unit()."""

    def test_unit_is_trimmed_but_not_folded(self):
        assert validators.validate_unit(" G ") == "G"

    def test_blank_unit(self):
        with pytest.raises(ValidationError, match="Unit: This field is required"):
            validators.validate_unit("  ")

    def test_unit_too_long(self):
        with pytest.raises(ValidationError, match="characters or less"):
            validators.validate_unit("u" * (MAX_UNIT_LENGTH + 1))


class TestSanitizeString:
    """Test sanitize_string()."""

    @pytest.mark.parametrize(
        "value, expected",
        [(None, None), ("", None), ("   ", None), ("  soup ", "soup")],
    )
    def test_sanitize(self, value, expected):
        assert validators.sanitize_string(value) == expected
