"""
Shopping List Service - ingredient aggregation across recipes.

Merges the ingredient lines of several published recipes into one list,
keyed by (ingredient_id, unit). Units are compared verbatim and never
converted, so "g" and "kg" of the same ingredient stay separate entries.

The result is a dict whose insertion order is the order in which each
(ingredient_id, unit) key was first seen, walking recipes in the order
given and lines in recipe order.

Session Management Pattern:
- generate_shopping_list() accepts session=None
- If session provided, use it directly
- If session is None, create a new session via session_scope()
- aggregate_recipe_ingredients() is pure and works on loaded recipes
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Recipe
from src.services import recipe_lifecycle
from src.services.database import session_scope
from src.services.exceptions import DatabaseError, RecipeNotFound
from src.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)

# Type alias for aggregation key
IngredientKey = Tuple[int, str]  # (ingredient_id, unit)


@dataclass
class ShoppingListItem:
    """Aggregated quantity of one ingredient in one unit."""

    ingredient_id: int
    ingredient_name: str
    unit: str
    quantity: float


def aggregate_recipe_ingredients(
    recipes: Iterable[Recipe],
) -> Dict[IngredientKey, ShoppingListItem]:
    """
    Sum ingredient quantities across recipes.

    Args:
        recipes: Loaded recipes, in the order they should be walked

    Returns:
        Dict keyed by (ingredient_id, unit) with ShoppingListItem values,
        in first-occurrence order

    Raises:
        RecipeStateError: If any recipe is not PUBLISHED (nothing is returned)
    """
    items: Dict[IngredientKey, ShoppingListItem] = {}

    for recipe in recipes:
        recipe_lifecycle.ensure_published(recipe, "add to shopping list")

        for ri in recipe.recipe_ingredients:
            key = (ri.ingredient_id, ri.unit)
            item = items.get(key)
            if item is None:
                items[key] = ShoppingListItem(
                    ingredient_id=ri.ingredient_id,
                    ingredient_name=ri.ingredient.name if ri.ingredient else "",
                    unit=ri.unit,
                    quantity=ri.quantity,
                )
            else:
                item.quantity += ri.quantity

    return items


def _load_recipes(recipe_ids: Sequence[int], session: Session) -> List[Recipe]:
    """Load recipes in order, failing on the first missing or unpublished one."""
    recipes = []
    for recipe_id in recipe_ids:
        recipe = session.get(Recipe, recipe_id)
        if recipe is None:
            raise RecipeNotFound(recipe_id)
        recipe_lifecycle.ensure_published(recipe, "add to shopping list")
        recipes.append(recipe)
    return recipes


def _generate_impl(
    recipe_ids: Sequence[int],
    session: Session,
) -> Dict[IngredientKey, ShoppingListItem]:
    recipe_ids = list(recipe_ids)
    items = aggregate_recipe_ingredients(_load_recipes(recipe_ids, session))

    log_operation(
        logger,
        operation="generate_shopping_list",
        outcome="success",
        recipe_ids=recipe_ids,
        entry_count=len(items),
    )
    return items


def generate_shopping_list(
    recipe_ids: Sequence[int],
    session: Optional[Session] = None,
) -> Dict[IngredientKey, ShoppingListItem]:
    """
    Build a consolidated shopping list for a set of recipes.

    Recipes are loaded in the order given. The whole call fails on the
    first id that does not exist or is not published; no partial list is
    returned. The same recipe id may appear more than once and is then
    counted once per occurrence.

    Args:
        recipe_ids: Recipe IDs, in the order to aggregate
        session: Optional session for transaction sharing

    Returns:
        Dict keyed by (ingredient_id, unit) with ShoppingListItem values

    Raises:
        RecipeNotFound: If a recipe ID doesn't exist
        RecipeStateError: If a recipe is not PUBLISHED
        DatabaseError: If database operation fails
    """
    try:
        if session is not None:
            return _generate_impl(recipe_ids, session)

        with session_scope() as session:
            return _generate_impl(recipe_ids, session)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to generate shopping list", e)
