"""
Recipe Scaling - serving-based quantity scaling.

Derives a proportionally scaled ingredient list for an arbitrary number of
servings. The stored recipe is never modified; the result is a separate
ScaledRecipe view. Quantities are not rounded.
"""

from dataclasses import dataclass, field
from typing import List

from src.models import Recipe
from src.services import recipe_lifecycle
from src.utils.validators import validate_positive_number


@dataclass(frozen=True)
class ScaledIngredient:
    """One ingredient line of a scaled recipe."""

    ingredient_id: int
    ingredient_name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class ScaledRecipe:
    """
    Scaled view of a recipe.

    Attributes:
        recipe_id: Source recipe
        title: Source recipe title
        servings: Target servings the quantities are scaled to
        original_servings: Servings stored on the source recipe
        ingredients: Scaled lines, in the source recipe's order
    """

    recipe_id: int
    title: str
    servings: float
    original_servings: float
    ingredients: List[ScaledIngredient] = field(default_factory=list)

    @property
    def factor(self) -> float:
        """Ratio applied to every quantity (servings / original_servings)."""
        return self.servings / self.original_servings


def scale_recipe(recipe: Recipe, target_servings) -> ScaledRecipe:
    """
    Scale a published recipe's ingredients to a target serving count.

    factor = target_servings / recipe.servings, applied to every line;
    ingredient identity and unit are carried over unchanged.

    Args:
        recipe: Loaded Recipe with its ingredient lines
        target_servings: Desired number of servings (> 0)

    Returns:
        ScaledRecipe with servings == target_servings

    Raises:
        RecipeStateError: If the recipe is not PUBLISHED
        ValidationError: If target_servings is not a positive number
    """
    recipe_lifecycle.ensure_published(recipe, "scale")
    target_servings = validate_positive_number(target_servings, "Servings")

    factor = target_servings / recipe.servings
    ingredients = [
        ScaledIngredient(
            ingredient_id=ri.ingredient_id,
            ingredient_name=ri.ingredient.name if ri.ingredient else "",
            quantity=ri.quantity * factor,
            unit=ri.unit,
        )
        for ri in recipe.recipe_ingredients
    ]

    return ScaledRecipe(
        recipe_id=recipe.id,
        title=recipe.title,
        servings=target_servings,
        original_servings=recipe.servings,
        ingredients=ingredients,
    )
