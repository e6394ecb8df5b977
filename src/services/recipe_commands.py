"""
Recipe Commands - input validation boundary for recipe writes.

Raw, untyped input (dicts from a form, JSON body or the command line) is
parsed here exactly once into frozen command objects. Everything past this
module works with already-validated values.

Parsing checks every field and reports all problems together in a single
ValidationError, e.g.:

    >>> parse_create_recipe({"title": " ", "servings": 0})
    ValidationError: Validation failed: Title: This field is required; ...

Update commands distinguish "not supplied" (UNSET) from "supplied as None",
so a partial update only touches the fields the caller sent.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from src.services.exceptions import ValidationError
from src.utils.constants import ERROR_INGREDIENTS_REQUIRED, MAX_TITLE_LENGTH
from src.utils.validators import (
    sanitize_string,
    validate_positive_number,
    validate_required_string,
    validate_string_length,
    validate_unit,
)


class _Unset:
    """Marker type for fields omitted from an update."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

RECIPE_FIELDS = frozenset(
    {"title", "description", "ingredients", "steps", "servings", "category_id"}
)


@dataclass(frozen=True)
class IngredientLineInput:
    """One validated ingredient line, before name resolution."""

    name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class CreateRecipeCommand:
    """Validated input for create_recipe()."""

    title: str
    servings: float
    ingredients: Tuple[IngredientLineInput, ...]
    steps: Tuple[str, ...] = ()
    description: Optional[str] = None
    category_id: Optional[int] = None


@dataclass(frozen=True)
class UpdateRecipeCommand:
    """Validated input for update_recipe(); omitted fields are UNSET."""

    title: Any = UNSET
    servings: Any = UNSET
    ingredients: Any = UNSET
    steps: Any = UNSET
    description: Any = UNSET
    category_id: Any = UNSET

    def is_supplied(self, field_name: str) -> bool:
        return getattr(self, field_name) is not UNSET

    def supplied_fields(self) -> List[str]:
        return sorted(name for name in RECIPE_FIELDS if self.is_supplied(name))


# ============================================================================
# Field parsers
# ============================================================================


def _parse_title(value: Any) -> str:
    title = validate_required_string(value, "Title")
    validate_string_length(title, MAX_TITLE_LENGTH, "Title")
    return title


def _parse_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(["Description: Must be text"])
    return sanitize_string(value)


def _parse_category_id(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(["Category: Must be a category ID"])
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError(["Category: Must be a category ID"])


def _parse_steps(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ValidationError(["Steps: Must be a list of instructions"])

    steps = []
    errors = []
    for index, step in enumerate(value, start=1):
        try:
            steps.append(validate_required_string(step, f"Step {index}"))
        except ValidationError as e:
            errors.extend(e.errors)
    if errors:
        raise ValidationError(errors)
    return tuple(steps)


def _parse_ingredient_line(index: int, value: Any) -> IngredientLineInput:
    label = f"Ingredient {index}"
    if not isinstance(value, Mapping):
        raise ValidationError([f"{label}: Must have a name, quantity and unit"])

    errors: List[str] = []
    name = _collect(errors, validate_required_string, value.get("name"), f"{label} name")
    quantity = _collect(
        errors, validate_positive_number, value.get("quantity"), f"{label} quantity"
    )
    unit = _collect(errors, validate_unit, value.get("unit"), f"{label} unit")
    if errors:
        raise ValidationError(errors)
    return IngredientLineInput(name=name, quantity=quantity, unit=unit)


def _parse_ingredients(value: Any) -> Tuple[IngredientLineInput, ...]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple)):
        raise ValidationError([f"Ingredients: {ERROR_INGREDIENTS_REQUIRED}"])
    if not value:
        raise ValidationError([f"Ingredients: {ERROR_INGREDIENTS_REQUIRED}"])

    lines = []
    errors: List[str] = []
    for index, item in enumerate(value, start=1):
        line = _collect(errors, _parse_ingredient_line, index, item)
        if line is not None:
            lines.append(line)
    if errors:
        raise ValidationError(errors)
    return tuple(lines)


def _parse_servings(value: Any) -> float:
    return validate_positive_number(value, "Servings")


_PARSERS = {
    "title": _parse_title,
    "description": _parse_description,
    "ingredients": _parse_ingredients,
    "steps": _parse_steps,
    "servings": _parse_servings,
    "category_id": _parse_category_id,
}


def _collect(errors: List[str], parser: Callable, *args):
    """Run a parser, appending its messages to errors instead of raising."""
    try:
        return parser(*args)
    except ValidationError as e:
        errors.extend(e.errors)
        return None


def _check_shape(data: Any) -> List[str]:
    if not isinstance(data, Mapping):
        raise ValidationError(["Recipe data must be a mapping of field names to values"])
    return [f"Unknown field: {key}" for key in data if key not in RECIPE_FIELDS]


# ============================================================================
# Public API
# ============================================================================


def parse_create_recipe(data: Mapping[str, Any]) -> CreateRecipeCommand:
    """
    Parse raw input into a CreateRecipeCommand.

    Required: title, servings, ingredients (non-empty list of
    {"name", "quantity", "unit"}). Optional: description, steps, category_id.

    Raises:
        ValidationError: Listing every invalid or missing field
    """
    errors = _check_shape(data)

    values = {}
    for field_name, parser in _PARSERS.items():
        if field_name in ("title", "servings", "ingredients"):
            raw = data.get(field_name)
        elif field_name not in data:
            continue
        else:
            raw = data[field_name]
        values[field_name] = _collect(errors, parser, raw)

    if errors:
        raise ValidationError(errors)
    return CreateRecipeCommand(**values)


def parse_update_recipe(data: Mapping[str, Any]) -> UpdateRecipeCommand:
    """
    Parse raw partial input into an UpdateRecipeCommand.

    Only keys present in data are validated and carried; everything else
    stays UNSET. A supplied ingredients list replaces the whole list and
    must be non-empty. category_id may be supplied as None to clear it.

    Raises:
        ValidationError: Listing every invalid supplied field
    """
    errors = _check_shape(data)

    values = {}
    for field_name, parser in _PARSERS.items():
        if field_name in data:
            values[field_name] = _collect(errors, parser, data[field_name])

    if errors:
        raise ValidationError(errors)
    return UpdateRecipeCommand(**values)
