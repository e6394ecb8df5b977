"""Ingredient Service - Resolution and catalog management for ingredients.

This module maps free-text ingredient names onto canonical Ingredient rows
and provides the small CRUD surface around them.

Session Management Pattern:
- All public functions accept optional `session` parameter
- If session is provided, use it directly (allows callers to manage transactions)
- If session is None, create a new session_scope for the operation

Resolution:
  resolve_ingredient() looks a name up by exact match and creates the
  ingredient when it is missing. The insert runs inside a savepoint; if the
  unique constraint on ingredients.name fires because another writer created
  the same name first, the savepoint is rolled back and the existing row is
  returned instead.

Example Usage:
  >>> from src.services import ingredient_service
  >>> flour = ingredient_service.resolve_ingredient("  flour ")
  >>> flour.name
  'flour'
  >>> ingredient_service.resolve_ingredient("flour").id == flour.id
  True
"""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Ingredient, RecipeIngredient
from src.services.database import session_scope
from src.services.exceptions import (
    DatabaseError,
    IngredientInUse,
    IngredientNameExists,
    IngredientNotFound,
)
from src.services.logging_utils import get_service_logger, log_operation
from src.utils.constants import MAX_NAME_LENGTH
from src.utils.validators import validate_required_string, validate_string_length

logger = get_service_logger(__name__)


def _normalize_name(name) -> str:
    name = validate_required_string(name, "Ingredient name")
    validate_string_length(name, MAX_NAME_LENGTH, "Ingredient name")
    return name


def _find_by_name(name: str, session: Session) -> Optional[Ingredient]:
    return session.query(Ingredient).filter(Ingredient.name == name).first()


# ============================================================================
# Resolution
# ============================================================================


def _resolve_impl(name: str, session: Session) -> Ingredient:
    existing = _find_by_name(name, session)
    if existing is not None:
        return existing

    try:
        with session.begin_nested():
            ingredient = Ingredient(name=name)
            session.add(ingredient)
    except IntegrityError:
        # Lost the race against a concurrent resolution of the same name
        winner = _find_by_name(name, session)
        if winner is None:
            raise
        return winner

    log_operation(
        logger,
        operation="resolve_ingredient",
        outcome="created",
        level=logging.DEBUG,
        ingredient_id=ingredient.id,
        ingredient_name=name,
    )
    return ingredient


def resolve_ingredient(name: str, session: Optional[Session] = None) -> Ingredient:
    """
    Map a free-text ingredient name to its canonical Ingredient.

    The name is trimmed and must be non-blank. Lookup is an exact,
    case-sensitive match; a missing ingredient is created.

    Args:
        name: Ingredient name as typed by the user
        session: Optional database session

    Returns:
        Existing or newly created Ingredient (flushed, so id is set)

    Raises:
        ValidationError: If name is blank or too long
        DatabaseError: If database operation fails
    """
    name = _normalize_name(name)

    try:
        if session is not None:
            return _resolve_impl(name, session)

        with session_scope() as sess:
            return _resolve_impl(name, sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to resolve ingredient", e)


# ============================================================================
# CRUD Operations
# ============================================================================


def create_ingredient(name: str, session: Optional[Session] = None) -> Ingredient:
    """
    Create a new ingredient.

    Args:
        name: Ingredient name (trimmed, must be unique)
        session: Optional database session

    Returns:
        Created Ingredient

    Raises:
        ValidationError: If name is blank or too long
        IngredientNameExists: If an ingredient with this name already exists
    """
    name = _normalize_name(name)

    def _impl(sess: Session) -> Ingredient:
        if _find_by_name(name, sess) is not None:
            raise IngredientNameExists(name)

        ingredient = Ingredient(name=name)
        sess.add(ingredient)
        sess.flush()
        log_operation(logger, operation="create_ingredient", outcome="success",
                      ingredient_id=ingredient.id)
        return ingredient

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create ingredient", e)


def get_ingredient(ingredient_id: int, session: Optional[Session] = None) -> Ingredient:
    """
    Get an ingredient by ID.

    Raises:
        IngredientNotFound: If ingredient doesn't exist
    """

    def _impl(sess: Session) -> Ingredient:
        ingredient = sess.get(Ingredient, ingredient_id)
        if ingredient is None:
            raise IngredientNotFound(ingredient_id)
        return ingredient

    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get ingredient {ingredient_id}", e)


def find_ingredient_by_name(name: str, session: Optional[Session] = None) -> Optional[Ingredient]:
    """
    Look up an ingredient by exact name.

    Returns:
        Ingredient or None if no ingredient has this name
    """
    if not isinstance(name, str) or not name.strip():
        return None
    name = name.strip()

    try:
        if session is not None:
            return _find_by_name(name, session)

        with session_scope() as sess:
            return _find_by_name(name, sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to look up ingredient", e)


def list_ingredients(session: Optional[Session] = None) -> List[Ingredient]:
    """List all ingredients ordered by name."""

    def _impl(sess: Session) -> List[Ingredient]:
        return sess.query(Ingredient).order_by(Ingredient.name).all()

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to list ingredients", e)


def update_ingredient(
    ingredient_id: int,
    name: str,
    session: Optional[Session] = None,
) -> Ingredient:
    """
    Rename an ingredient.

    Raises:
        ValidationError: If name is blank or too long
        IngredientNotFound: If ingredient doesn't exist
        IngredientNameExists: If another ingredient already has this name
    """
    name = _normalize_name(name)

    def _impl(sess: Session) -> Ingredient:
        ingredient = get_ingredient(ingredient_id, session=sess)

        existing = _find_by_name(name, sess)
        if existing is not None and existing.id != ingredient_id:
            raise IngredientNameExists(name)

        ingredient.name = name
        sess.flush()
        return ingredient

    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update ingredient {ingredient_id}", e)


def delete_ingredient(ingredient_id: int, session: Optional[Session] = None) -> bool:
    """
    Delete an ingredient that no recipe uses.

    Returns:
        True on success

    Raises:
        IngredientNotFound: If ingredient doesn't exist
        IngredientInUse: If any recipe line references the ingredient
    """

    def _impl(sess: Session) -> bool:
        ingredient = get_ingredient(ingredient_id, session=sess)

        recipe_count = (
            sess.query(func.count(func.distinct(RecipeIngredient.recipe_id)))
            .filter(RecipeIngredient.ingredient_id == ingredient_id)
            .scalar()
        )
        if recipe_count:
            raise IngredientInUse(ingredient_id, recipe_count)

        sess.delete(ingredient)
        sess.flush()
        log_operation(logger, operation="delete_ingredient", outcome="success",
                      ingredient_id=ingredient_id)
        return True

    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete ingredient {ingredient_id}", e)
