"""
Recipe Category Service - CRUD operations for recipe categories.

Categories are flat labels recipes may point at. The recipe service only
needs existence checks (find_category, find_category_by_name); the rest of
this module is the category collaborator's own CRUD with name uniqueness
and an in-use guard on delete.

Session Management Pattern:
- All functions accept optional `session` parameter
- If session is provided, use it directly (allows callers to manage transactions)
- If session is None, create a new session_scope for the operation
"""

import re
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Recipe, RecipeCategory
from src.services.database import session_scope
from src.services.exceptions import (
    CategoryNameExists,
    DatabaseError,
    RecipeCategoryInUse,
    RecipeCategoryNotFoundById,
    RecipeCategoryNotFoundByName,
)
from src.services.logging_utils import get_service_logger, log_operation
from src.utils.constants import MAX_CATEGORY_NAME_LENGTH
from src.utils.validators import validate_required_string, validate_string_length

logger = get_service_logger(__name__)


# ============================================================================
# Utility Functions
# ============================================================================


def _slugify(name: str) -> str:
    """
    Convert a name to a URL-friendly slug.

    "Quick Breakfasts" -> "quick-breakfasts"
    """
    slug = name.lower()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-") or "category"


def _generate_unique_slug(
    base_slug: str,
    session: Session,
    exclude_id: Optional[int] = None,
) -> str:
    """
    Generate a unique slug by appending a number suffix if needed.

    Returns:
        Unique slug (e.g., "desserts" or "desserts-2")
    """
    slug = base_slug
    counter = 1

    while True:
        query = session.query(RecipeCategory).filter(RecipeCategory.slug == slug)
        if exclude_id is not None:
            query = query.filter(RecipeCategory.id != exclude_id)

        if query.first() is None:
            return slug

        counter += 1
        slug = f"{base_slug}-{counter}"


def _normalize_name(name) -> str:
    name = validate_required_string(name, "Category name")
    validate_string_length(name, MAX_CATEGORY_NAME_LENGTH, "Category name")
    return name


def _get_or_raise(category_id: int, session: Session) -> RecipeCategory:
    category = session.get(RecipeCategory, category_id)
    if category is None:
        raise RecipeCategoryNotFoundById(category_id)
    return category


# ============================================================================
# Lookups used by the recipe service
# ============================================================================


def find_category(
    category_id: int,
    session: Optional[Session] = None,
) -> Optional[RecipeCategory]:
    """
    Look up a category by ID without raising.

    Returns:
        RecipeCategory or None if it doesn't exist
    """
    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get category {category_id}", e)


def find_category_by_name(
    name: str,
    session: Optional[Session] = None,
) -> Optional[RecipeCategory]:
    """
    Look up a category by exact (trimmed) name without raising.

    Returns:
        RecipeCategory or None if no category has this name
    """
    if not isinstance(name, str) or not name.strip():
        return None

    def _impl(sess: Session) -> Optional[RecipeCategory]:
        return sess.query(RecipeCategory).filter(RecipeCategory.name == name.strip()).first()

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to look up category", e)


# ============================================================================
# CRUD Operations
# ============================================================================


def list_categories(session: Optional[Session] = None) -> List[RecipeCategory]:
    """
    List all recipe categories ordered by sort_order, then name.
    """

    def _impl(sess: Session) -> List[RecipeCategory]:
        return (
            sess.query(RecipeCategory)
            .order_by(RecipeCategory.sort_order, RecipeCategory.name)
            .all()
        )

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to list categories", e)


def create_category(
    name: str,
    slug: Optional[str] = None,
    sort_order: int = 0,
    description: Optional[str] = None,
    session: Optional[Session] = None,
) -> RecipeCategory:
    """
    Create a new recipe category.

    Args:
        name: Category display name (e.g., "Desserts")
        slug: URL-friendly identifier (auto-generated if not provided)
        sort_order: Display ordering (default 0)
        description: Optional description
        session: Optional database session

    Returns:
        Created RecipeCategory instance

    Raises:
        ValidationError: If name is empty or too long
        CategoryNameExists: If a category with this name already exists
    """
    name = _normalize_name(name)

    def _impl(sess: Session) -> RecipeCategory:
        if find_category_by_name(name, session=sess) is not None:
            raise CategoryNameExists(name)

        category = RecipeCategory(
            name=name,
            slug=_generate_unique_slug(slug or _slugify(name), sess),
            sort_order=sort_order,
            description=description,
        )
        sess.add(category)
        sess.flush()
        log_operation(logger, operation="create_category", outcome="success",
                      category_id=category.id)
        return category

    try:
        if session is not None:
            return _impl(session)

        with session_scope() as sess:
            return _impl(sess)

    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create category", e)


def get_category_by_id(
    category_id: int,
    session: Optional[Session] = None,
) -> RecipeCategory:
    """
    Get a recipe category by ID.

    Raises:
        RecipeCategoryNotFoundById: If category doesn't exist
    """
    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to get category {category_id}", e)


def get_category_by_name(
    name: str,
    session: Optional[Session] = None,
) -> RecipeCategory:
    """
    Get a recipe category by name.

    Raises:
        RecipeCategoryNotFoundByName: If category doesn't exist
    """
    category = find_category_by_name(name, session=session)
    if category is None:
        raise RecipeCategoryNotFoundByName(name)
    return category


def update_category(
    category_id: int,
    name: Optional[str] = None,
    sort_order: Optional[int] = None,
    description: Optional[str] = None,
    session: Optional[Session] = None,
) -> RecipeCategory:
    """
    Update a recipe category's fields.

    Only arguments that are not None are applied. Renaming keeps the slug.

    Raises:
        RecipeCategoryNotFoundById: If category doesn't exist
        ValidationError: If name is empty
        CategoryNameExists: If another category already has the new name
    """
    new_name = _normalize_name(name) if name is not None else None

    def _impl(sess: Session) -> RecipeCategory:
        category = _get_or_raise(category_id, sess)

        if new_name is not None:
            existing = find_category_by_name(new_name, session=sess)
            if existing is not None and existing.id != category_id:
                raise CategoryNameExists(new_name)
            category.name = new_name

        if description is not None:
            category.description = description

        if sort_order is not None:
            category.sort_order = sort_order

        sess.flush()
        return category

    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to update category {category_id}", e)


def count_recipes_in_category(
    category_id: int,
    session: Optional[Session] = None,
) -> int:
    """
    Count recipes (in any lifecycle state) that reference a category.

    Raises:
        RecipeCategoryNotFoundById: If category doesn't exist
    """

    def _impl(sess: Session) -> int:
        _get_or_raise(category_id, sess)
        return sess.query(Recipe).filter(Recipe.category_id == category_id).count()

    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to count recipes in category {category_id}", e)


def delete_category(
    category_id: int,
    session: Optional[Session] = None,
) -> None:
    """
    Delete a recipe category.

    Raises:
        RecipeCategoryNotFoundById: If category doesn't exist
        RecipeCategoryInUse: If any recipe references the category
    """

    def _impl(sess: Session) -> None:
        category = _get_or_raise(category_id, sess)

        recipe_count = count_recipes_in_category(category_id, session=sess)
        if recipe_count > 0:
            raise RecipeCategoryInUse(category_id, recipe_count)

        sess.delete(category)
        sess.flush()
        log_operation(logger, operation="delete_category", outcome="success",
                      category_id=category_id)

    try:
        if session is not None:
            return ()

        with session_scope() as sess:
            return ()

    except SQLAlchemyError as e:
        raise DatabaseError(f"Failed to delete category {category_id}", e)
