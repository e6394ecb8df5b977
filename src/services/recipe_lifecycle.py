"""Recipe Lifecycle - publication state machine for recipes.

State machine: DRAFT -> PUBLISHED -> ARCHIVED

    publish   DRAFT -> PUBLISHED
    archive   PUBLISHED -> ARCHIVED
    edit      allowed only in DRAFT
    delete    allowed in DRAFT and ARCHIVED, never in PUBLISHED
    read      get/list/scale/shopping list see PUBLISHED recipes only

ARCHIVED is terminal: nothing moves a recipe out of it.

These functions operate on Recipe instances that the caller has already
loaded; they never query or commit. Transitions mutate recipe.status in
place and leave flushing to the caller's session.
"""

import logging

from src.models import Recipe, RecipeStatus
from src.services.exceptions import RecipeStateError
from src.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)

EDITABLE_STATES = frozenset({RecipeStatus.DRAFT})
DELETABLE_STATES = frozenset({RecipeStatus.DRAFT, RecipeStatus.ARCHIVED})
VISIBLE_STATES = frozenset({RecipeStatus.PUBLISHED})


def _require(recipe: Recipe, allowed: frozenset, operation: str) -> None:
    if recipe.status in allowed:
        return

    log_operation(
        logger,
        operation=operation.split(" ", 1)[0],
        outcome="invalid_state",
        level=logging.WARNING,
        recipe_id=recipe.id,
        current_state=RecipeStatus(recipe.status).value,
    )
    raise RecipeStateError(recipe.id, RecipeStatus(recipe.status), operation)


def publish(recipe: Recipe) -> Recipe:
    """Transition a recipe from DRAFT to PUBLISHED.

    Raises:
        RecipeStateError: If the recipe is not in DRAFT state
    """
    _require(recipe, EDITABLE_STATES, "publish (must be in DRAFT state)")
    recipe.status = RecipeStatus.PUBLISHED
    return recipe


def archive(recipe: Recipe) -> Recipe:
    """Transition a recipe from PUBLISHED to ARCHIVED.

    Raises:
        RecipeStateError: If the recipe is not in PUBLISHED state
    """
    _require(recipe, VISIBLE_STATES, "archive (must be in PUBLISHED state)")
    recipe.status = RecipeStatus.ARCHIVED
    return recipe


def ensure_editable(recipe: Recipe) -> None:
    """Raise RecipeStateError unless the recipe may be edited (DRAFT only)."""
    _require(recipe, EDITABLE_STATES, "edit (must be in DRAFT state)")


def ensure_deletable(recipe: Recipe) -> None:
    """Raise RecipeStateError if the recipe is PUBLISHED.

    DRAFT and ARCHIVED recipes may be removed.
    """
    _require(recipe, DELETABLE_STATES, "delete (must be in DRAFT or ARCHIVED state)")


def ensure_published(recipe: Recipe, operation: str = "use") -> None:
    """Raise RecipeStateError unless the recipe is PUBLISHED.

    Args:
        recipe: Recipe to check
        operation: Verb for the error message (e.g., "scale")
    """
    _require(recipe, VISIBLE_STATES, f"{operation} (must be in PUBLISHED state)")


def is_visible(recipe: Recipe) -> bool:
    """True if the recipe is visible through get/list."""
    return recipe.status in VISIBLE_STATES
