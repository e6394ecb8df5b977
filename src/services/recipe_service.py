"""
Recipe Service - Business logic for recipe management.

This service provides:
- Recipe CRUD with input validation and ingredient resolution
- Lifecycle operations (publish, archive) guarded by recipe_lifecycle
- Read path restricted to published recipes, with category and text search
- Derived views: serving-scaled ingredients and multi-recipe shopping lists

Session Management Pattern:
- All public functions accept optional `session` parameter
- If session is provided, use it directly (allows callers to manage transactions)
- If session is None, create a new session_scope for the operation

Ingredient resolution and the recipe write share one session, so a failed
create or update leaves no half-written recipe behind.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Recipe, RecipeIngredient, RecipeStatus
from src.services import (
    ingredient_service,
    recipe_category_service,
    recipe_lifecycle,
    recipe_scaling,
    shopping_list_service,
)
from src.services.database import session_scope
from src.services.exceptions import (
    DatabaseError,
    RecipeNotFound,
    RecipeNotPublished,
    ValidationError,
)
from src.services.logging_utils import get_service_logger, log_operation
from src.services.recipe_commands import (
    IngredientLineInput,
    parse_create_recipe,
    parse_update_recipe,
)
from src.utils.constants import ERROR_CATEGORY_NOT_FOUND

logger = get_service_logger(__name__)


# ============================================================================
# Helpers
# ============================================================================


def _get_recipe_or_raise(recipe_id: int, session: Session) -> Recipe:
    recipe = session.get(Recipe, recipe_id)
    if recipe is None:
        raise RecipeNotFound(recipe_id)
    return recipe


def _require_category(category_id: int, session: Session):
    category = recipe_category_service.find_category(category_id, session=session)
    if category is None:
        raise ValidationError([ERROR_CATEGORY_NOT_FOUND])
    return category


def _resolve_lines(
    lines: Sequence[IngredientLineInput],
    session: Session,
) -> List[RecipeIngredient]:
    # Resolve all names before building lines so no lookup autoflushes a detached line
    ingredients = [
        ingredient_service.resolve_ingredient(line.name, session=session) for line in lines
    ]
    return [
        RecipeIngredient(
            ingredient=ingredient,
            position=position,
            quantity=line.quantity,
            unit=line.unit,
        )
        for position, (line, ingredient) in enumerate(zip(lines, ingredients))
    ]


def _matches_search(recipe: Recipe, needle: str) -> bool:
    """True if the casefolded needle occurs in title, description or an ingredient name."""
    haystacks = [recipe.title, recipe.description or ""] + recipe.ingredient_names
    return any(needle in text.casefold() for text in haystacks)


def _load_relationships(recipe: Recipe) -> Recipe:
    # Touch relationships so the recipe stays usable after the session closes
    _ = recipe.category
    for ri in recipe.recipe_ingredients:
        _ = ri.ingredient
    return recipe


# ============================================================================
# CRUD Operations
# ============================================================================


def create_recipe(data: Mapping[str, Any], session: Optional[Session] = None) -> Recipe:
    """
    Create a new draft recipe.

    Args:
        data: Raw recipe fields:
            - title: str (required)
            - servings: number > 0 (required)
            - ingredients: non-empty list of dicts with name, quantity, unit
            - steps: list of str (optional)
            - description: str (optional)
            - category_id: int (optional, must exist)
        session: Optional database session

    Returns:
        Created Recipe in DRAFT state, with ingredient lines loaded

    Raises:
        ValidationError: If any field is invalid or the category doesn't exist
        DatabaseError: If database operation fails
    """
    command = parse_create_recipe(data)

    def _impl(sess: Session) -> Recipe:
        category = None
        if command.category_id is not None:
            category = _require_category(command.category_id, sess)

        recipe = Recipe(
            title=command.title,
            description=command.description,
            steps=list(command.steps),
            servings=command.servings,
            category=category,
            status=RecipeStatus.DRAFT,
            recipe_ingredients=_resolve_lines(command.ingredients, sess),
        )
        sess.add(recipe)
        sess.flush()
        sess.refresh(recipe)

        log_operation(
            logger,
            operation="create_recipe",
            outcome="success",
            recipe_id=recipe.id,
            ingredient_count=len(recipe.recipe_ingredients),
        )
        return _load_relationships(recipe)

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create recipe", e)


def get_recipe(recipe_id: int, session: Optional[Session] = None) -> Recipe:
    """
    Retrieve a published recipe by ID.

    Raises:
        RecipeNotFound: If recipe doesn't exist
        RecipeNotPublished: If recipe exists but is a draft or archived
        DatabaseError: If database operation fails
    """

    def _impl(sess: Session) -> Recipe:
        recipe = _get_recipe_or_raise(recipe_id, sess)
        if not recipe_lifecycle.is_visible(recipe):
            raise RecipeNotPublished(recipe_id, recipe.status)
        return _load_relationships(recipe)

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get recipe {recipe_id}", e)


def list_recipes(
    category_id: Optional[int] = None,
    category_name: Optional[str] = None,
    search: Optional[str] = None,
    session: Optional[Session] = None,
) -> List[Recipe]:
    """
    List published recipes with optional filtering.

    Args:
        category_id: Only recipes in this category
        category_name: Only recipes in the category with this exact name;
            an unknown name yields an empty list
        search: Case-insensitive substring matched against title,
            description and ingredient names (any of the three)
        session: Optional database session

    Returns:
        Published recipes in creation order

    Raises:
        DatabaseError: If database operation fails
    """

    def _impl(sess: Session) -> List[Recipe]:
        wanted_category_id = category_id

        if category_name is not None and category_name.strip():
            category = recipe_category_service.find_category_by_name(category_name, session=sess)
            if category is None:
                return []
            if wanted_category_id is not None and wanted_category_id != category.id:
                return []
            wanted_category_id = category.id

        query = sess.query(Recipe).filter(Recipe.status == RecipeStatus.PUBLISHED)

        if wanted_category_id is not None:
            query = query.filter(Recipe.category_id == wanted_category_id)

        recipes = query.order_by(Recipe.id).all()

        # SQLite lower() only folds ASCII, so text search runs on loaded rows
        needle = (search or "").strip().casefold()
        if needle:
            recipes = [recipe for recipe in recipes if _matches_search(recipe, needle)]

        for recipe in recipes:
            _load_relationships(recipe)
        return recipes

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to list recipes", e)


def update_recipe(
    recipe_id: int,
    data: Mapping[str, Any],
    session: Optional[Session] = None,
) -> Recipe:
    """
    Update a draft recipe.

    Only the fields present in data are changed. A supplied ingredients
    list replaces all existing lines (names are resolved again).

    Args:
        recipe_id: Recipe ID
        data: Raw fields to change (same keys as create_recipe)
        session: Optional database session

    Returns:
        Updated Recipe

    Raises:
        ValidationError: If a supplied field is invalid or the category doesn't exist
        RecipeNotFound: If recipe doesn't exist
        RecipeStateError: If recipe is not a draft
        DatabaseError: If database operation fails
    """
    command = parse_update_recipe(data)

    def _impl(sess: Session) -> Recipe:
        recipe = _get_recipe_or_raise(recipe_id, sess)
        recipe_lifecycle.ensure_editable(recipe)

        if command.is_supplied("category_id"):
            if command.category_id is None:
                recipe.category = None
            else:
                recipe.category = _require_category(command.category_id, sess)

        if command.is_supplied("title"):
            recipe.title = command.title

        if command.is_supplied("description"):
            recipe.description = command.description

        if command.is_supplied("steps"):
            recipe.steps = list(command.steps)

        if command.is_supplied("servings"):
            recipe.servings = command.servings

        if command.is_supplied("ingredients"):
            recipe.recipe_ingredients = _resolve_lines(command.ingredients, sess)

        sess.flush()
        sess.refresh(recipe)

        log_operation(
            logger,
            operation="update_recipe",
            outcome="success",
            recipe_id=recipe_id,
            fields=command.supplied_fields(),
        )
        return _load_relationships(recipe)

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update recipe {recipe_id}", e)


def delete_recipe(recipe_id: int, session: Optional[Session] = None) -> bool:
    """
    Delete a draft or archived recipe.

    Returns:
        True on success

    Raises:
        RecipeNotFound: If recipe doesn't exist
        RecipeStateError: If recipe is published
        DatabaseError: If database operation fails
    """

    def _impl(sess: Session) -> bool:
        recipe = _get_recipe_or_raise(recipe_id, sess)
        recipe_lifecycle.ensure_deletable(recipe)

        sess.delete(recipe)
        sess.flush()

        log_operation(logger, operation="delete_recipe", outcome="success", recipe_id=recipe_id)
        return True

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete recipe {recipe_id}", e)


# ============================================================================
# Lifecycle Operations
# ============================================================================


def publish_recipe(recipe_id: int, session: Optional[Session] = None) -> Recipe:
    """
    Transition a recipe from DRAFT to PUBLISHED.

    Raises:
        RecipeNotFound: If recipe doesn't exist
        RecipeStateError: If recipe is not a draft
        DatabaseError: If database operation fails
    """

    def _impl(sess: Session) -> Recipe:
        recipe = _get_recipe_or_raise(recipe_id, sess)
        recipe_lifecycle.publish(recipe)
        sess.flush()

        log_operation(logger, operation="publish_recipe", outcome="success", recipe_id=recipe_id)
        return _load_relationships(recipe)

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to publish recipe {recipe_id}", e)


def archive_recipe(recipe_id: int, session: Optional[Session] = None) -> Recipe:
    """
    Transition a recipe from PUBLISHED to ARCHIVED.

    Raises:
        RecipeNotFound: If recipe doesn't exist
        RecipeStateError: If recipe is not published
        DatabaseError: If database operation fails
    """

    def _impl(sess: Session) -> Recipe:
        recipe = _get_recipe_or_raise(recipe_id, sess)
        recipe_lifecycle.archive(recipe)
        sess.flush()

        log_operation(logger, operation="archive_recipe", outcome="success", recipe_id=recipe_id)
        return _load_relationships(recipe)

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to archive recipe {recipe_id}", e)


# ============================================================================
# Derived Views
# ============================================================================


def scale_recipe(
    recipe_id: int,
    servings,
    session: Optional[Session] = None,
) -> recipe_scaling.ScaledRecipe:
    """
    Scale a published recipe's ingredient quantities to a serving count.

    The stored recipe is not modified.

    Args:
        recipe_id: Recipe ID
        servings: Target servings (> 0)
        session: Optional database session

    Returns:
        ScaledRecipe view

    Raises:
        RecipeNotFound: If recipe doesn't exist
        RecipeStateError: If recipe is not published
        ValidationError: If servings is not a positive number
        DatabaseError: If database operation fails
    """

    def _impl(sess: Session) -> recipe_scaling.ScaledRecipe:
        recipe = _get_recipe_or_raise(recipe_id, sess)
        scaled = recipe_scaling.scale_recipe(recipe, servings)

        log_operation(
            logger,
            operation="scale_recipe",
            outcome="success",
            recipe_id=recipe_id,
            target_servings=scaled.servings,
        )
        return scaled

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to scale recipe {recipe_id}", e)


def generate_shopping_list(
    recipe_ids: Sequence[int],
    session: Optional[Session] = None,
) -> Dict[shopping_list_service.IngredientKey, shopping_list_service.ShoppingListItem]:
    """
    Aggregate ingredient quantities across published recipes.

    See shopping_list_service.generate_shopping_list().

    Raises:
        RecipeNotFound: If a recipe ID doesn't exist
        RecipeStateError: If a recipe is not published
        DatabaseError: If database operation fails
    """
    return shopping_list_service.generate_shopping_list(recipe_ids, session=session)
