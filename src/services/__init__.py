"""Services package - Business logic layer for Recipe Box.

This package contains all service modules that provide business logic
and database operations for the application.

Architecture:
- Services: Stateless functions organized by domain (recipe, ingredient, category)
- Transactions: Managed via session_scope() context manager; every public
  function also accepts an optional session for transaction sharing
- Exceptions: Consistent error handling via ServiceError hierarchy
- Validation: Raw input is parsed into typed commands before it reaches
  the lifecycle, scaling and aggregation logic

Service Modules:
- recipe_service: Recipe CRUD, lifecycle operations and derived views
- recipe_commands: Input validation boundary for recipe create/update
- recipe_lifecycle: Draft -> published -> archived state machine
- recipe_scaling: Serving-based quantity scaling
- shopping_list_service: Ingredient aggregation across recipes
- ingredient_service: Ingredient resolution and CRUD
- recipe_category_service: Recipe category CRUD

Infrastructure:
- exceptions: Custom exception classes for service layer errors
- database: Session management and database utilities
- logging_utils: Structured logging helpers

Service modules are imported directly, e.g.
``from src.services import recipe_service``.
"""

from .exceptions import (
    ServiceError,
    ValidationError,
    NotFoundError,
    ConflictError,
    InvalidStateError,
    DatabaseError,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InvalidStateError",
    "DatabaseError",
]
