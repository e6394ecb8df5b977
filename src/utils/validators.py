"""
Input validation functions for the Recipe Box application.

This module provides the field-level checks used by the input validation
boundary (src.services.recipe_commands) and the collaborator services:
- String validation (required, length)
- Numeric validation (positive, finite)
- Unit validation

All validation functions raise ValidationError on failure and return the
normalised value on success.
"""

import math
from decimal import Decimal
from typing import Any, Optional

from src.services.exceptions import ValidationError

from .constants import (
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_REQUIRED_FIELD,
    MAX_UNIT_LENGTH,
)


def validate_required_string(value: Any, field_name: str = "Field") -> str:
    """
    Validate that a value is a non-blank string.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        The trimmed string

    Raises:
        ValidationError: If value is None, not a string, or blank
    """
    if not isinstance(value, str) or value.strip() == "":
        raise ValidationError([f"{field_name}: {ERROR_REQUIRED_FIELD}"])
    return value.strip()


def validate_string_length(value: Optional[str], max_length: int, field_name: str = "Field") -> None:
    """
    Validate that a string doesn't exceed maximum length.

    Raises:
        ValidationError: If value is longer than max_length
    """
    if value and len(value) > max_length:
        raise ValidationError([f"{field_name}: Must be {max_length} characters or less"])


def validate_positive_number(value: Any, field_name: str = "Field") -> float:
    """
    Validate that a value is a finite number greater than zero.

    Numeric strings are accepted (command-line input arrives as text);
    booleans are not, even though bool is an int subclass.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        The value as a float

    Raises:
        ValidationError: If value is not numeric, not finite, or <= 0
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NUMBER}"])
    try:
        num_value = float(value)
    except ValueError:
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NUMBER}"])
    if not math.isfinite(num_value):
        raise ValidationError([f"{field_name}: {ERROR_INVALID_NUMBER}"])
    if num_value <= 0:
        raise ValidationError([f"{field_name}: {ERROR_INVALID_POSITIVE}"])
    return num_value


def validate_unit(unit: Any, field_name: str = "Unit") -> str:
    """
    Validate a unit string.

    Units are free text: any non-blank string up to MAX_UNIT_LENGTH is
    accepted and kept verbatim apart from trimming. No conversion or case
    folding happens, so "g" and "G" stay distinct.

    Returns:
        The trimmed unit
    """
    unit = validate_required_string(unit, field_name)
    validate_string_length(unit, MAX_UNIT_LENGTH, field_name)
    return unit


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Sanitize a string value by stripping whitespace and converting empty strings to None.

    Args:
        value: The string value to sanitize

    Returns:
        Sanitized string or None
    """
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None
