"""Service layer logging utilities.

Provides structured logging functions for service operations, so recipe
mutations, lifecycle transitions and derived-view requests are logged with
a consistent message format and machine-readable context.

Usage:
    from src.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    log_operation(
        logger,
        operation="publish_recipe",
        outcome="success",
        recipe_id=12,
    )

    log_operation(
        logger,
        operation="archive_recipe",
        outcome="invalid_state",
        level=logging.WARNING,
        recipe_id=12,
        current_state="draft",
    )
"""

import logging
from typing import Any

LOGGER_PREFIX = "recipe_box.services"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger for a service module.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger named '<prefix>.<module>'

    Example:
        >>> get_service_logger("src.services.recipe_service").name
        'recipe_box.services.recipe_service'
    """
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The message is "<operation>: <outcome>"; operation, outcome and every
    context field are attached to the record via ``extra``.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "create_recipe", "generate_shopping_list")
        outcome: Outcome description (e.g., "success", "invalid_state", "created")
        level: Log level (default: INFO). Use DEBUG for verbose/frequent logs.
        **context: Additional context fields. Common fields:
            - recipe_id: Recipe being processed
            - recipe_ids: Recipes included in a shopping list
            - ingredient_id: Ingredient created or resolved
            - current_state: Lifecycle state at the time of a rejected transition
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra)
