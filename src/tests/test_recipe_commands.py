"""Tests for parsing raw recipe input into command objects."""

import pytest

from src.services.exceptions import ValidationError
from src.services.recipe_commands import (
    UNSET,
    CreateRecipeCommand,
    IngredientLineInput,
    parse_create_recipe,
    parse_update_recipe,
)


def _errors(data, parser=parse_create_recipe):
    with pytest.raises(ValidationError) as exc_info:
        parser(data)
    return exc_info.value.errors


class TestParseCreateRecipe:
    """Tests for parse_create_recipe()."""

    def test_minimal_input(self):
        command = parse_create_recipe(
            {
                "title": "Toast",
                "servings": 1,
                "ingredients": [{"name": "Bread", "quantity": 2, "unit": "slice"}],
            }
        )

        assert command == CreateRecipeCommand(
            title="Toast",
            servings=1.0,
            ingredients=(IngredientLineInput(name="Bread", quantity=2.0, unit="slice"),),
        )
        assert command.steps == ()
        assert command.description is None
        assert command.category_id is None

    def test_full_input_is_normalised(self, pancake_data):
        command = parse_create_recipe(
            {**pancake_data, "description": "  ", "category_id": "3", "servings": "2.5"}
        )

        assert command.title == "Pancakes"
        assert command.description is None
        assert command.category_id == 3
        assert command.servings == 2.5
        assert command.steps == ("Whisk everything together", "Fry in a hot pan")
        assert [line.name for line in command.ingredients] == ["Flour", "Milk", "Egg"]

    def test_missing_required_fields(self):
        errors = _errors({})

        assert errors == [
            "Title: This field is required",
            "Ingredients: At least one ingredient is required",
            "Servings: Please enter a valid number",
        ]

    def test_non_mapping_rejected(self):
        assert _errors(["title", "Toast"]) == [
            "Recipe data must be a mapping of field names to values"
        ]

    def test_unknown_fields_listed(self, pancake_data):
        errors = _errors({**pancake_data, "status": "published", "id": 4})

        assert "Unknown field: status" in errors
        assert "Unknown field: id" in errors

    def test_ingredient_line_errors_are_numbered(self, pancake_data):
        pancake_data["ingredients"] = [
            {"name": "Flour", "quantity": 200, "unit": "g"},
            {"name": " ", "quantity": -1, "unit": ""},
            "eggs",
        ]

        errors = _errors(pancake_data)

        assert errors == [
            "Ingredient 2 name: This field is required",
            "Ingredient 2 quantity: Value must be greater than zero",
            "Ingredient 2 unit: This field is required",
            "Ingredient 3: Must have a name, quantity and unit",
        ]

    @pytest.mark.parametrize("ingredients", [None, [], "flour", {"name": "flour"}])
    def test_ingredients_must_be_non_empty_list(self, pancake_data, ingredients):
        pancake_data["ingredients"] = ingredients

        assert _errors(pancake_data) == ["Ingredients: At least one ingredient is required"]

    @pytest.mark.parametrize("servings", [0, -1, "many", True, float("nan")])
    def test_invalid_servings(self, pancake_data, servings):
        pancake_data["servings"] = servings

        errors = _errors(pancake_data)

        assert len(errors) == 1
        assert errors[0].startswith("Servings: ")

    def test_blank_step_rejected(self, pancake_data):
        pancake_data["steps"] = ["Mix", "  ", "Bake"]

        assert _errors(pancake_data) == ["Step 2: This field is required"]

    @pytest.mark.parametrize("steps", ["Mix then bake", {"1": "Mix"}])
    def test_steps_must_be_a_list(self, pancake_data, steps):
        pancake_data["steps"] = steps

        assert _errors(pancake_data) == ["Steps: Must be a list of instructions"]

    @pytest.mark.parametrize("category_id", [True, "abc", 1.5])
    def test_invalid_category_id(self, pancake_data, category_id):
        pancake_data["category_id"] = category_id

        assert _errors(pancake_data) == ["Category: Must be a category ID"]

    def test_title_too_long(self, pancake_data):
        pancake_data["title"] = "t" * 201

        assert _errors(pancake_data) == ["Title: Must be 200 characters or less"]


class TestParseUpdateRecipe:
    """Tests for parse_update_recipe()."""

    def test_empty_update(self):
        command = parse_update_recipe({})

        assert command.supplied_fields() == []
        assert command.title is UNSET
        assert not command.is_supplied("ingredients")

    def test_only_supplied_fields_are_set(self):
        command = parse_update_recipe({"title": " Crepes ", "servings": 4})

        assert command.title == "Crepes"
        assert command.servings == 4.0
        assert command.supplied_fields() == ["servings", "title"]
        assert command.description is UNSET

    def test_none_clears_optional_fields(self):
        command = parse_update_recipe({"description": None, "category_id": None, "steps": None})

        assert command.is_supplied("description")
        assert command.description is None
        assert command.category_id is None
        assert command.steps == ()

    def test_required_fields_cannot_be_cleared(self):
        errors = _errors({"title": None, "servings": None}, parse_update_recipe)

        assert "Title: This field is required" in errors
        assert "Servings: Please enter a valid number" in errors

    def test_empty_ingredient_list_rejected(self):
        errors = _errors({"ingredients": []}, parse_update_recipe)

        assert errors == ["Ingredients: At least one ingredient is required"]

    def test_unknown_field_rejected(self):
        assert _errors({"colour": "red"}, parse_update_recipe) == ["Unknown field: colour"]

    def test_unset_is_falsy_singleton(self):
        assert not UNSET
        assert repr(UNSET) == "UNSET"
        assert type(UNSET)() is UNSET
