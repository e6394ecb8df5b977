"""Service layer exception classes for Recipe Box.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    ├── NotFoundError
    │   ├── RecipeNotFound
    │   ├── RecipeNotPublished
    │   ├── IngredientNotFound
    │   ├── RecipeCategoryNotFoundById
    │   └── RecipeCategoryNotFoundByName
    ├── ConflictError
    │   ├── IngredientNameExists
    │   ├── CategoryNameExists
    │   ├── IngredientInUse
    │   └── RecipeCategoryInUse
    ├── InvalidStateError
    │   └── RecipeStateError
    └── DatabaseError
"""


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class ValidationError(ServiceError):
    """Raised when input data validation fails.

    Args:
        errors: List of human-readable error messages

    Example:
        >>> raise ValidationError(["Title: This field is required"])
        ValidationError: Validation failed: Title: This field is required
    """

    def __init__(self, errors: list):
        self.errors = list(errors)
        error_msg = "; ".join(self.errors)
        super().__init__(f"Validation failed: {error_msg}")


# ============================================================================
# Not found
# ============================================================================


class NotFoundError(ServiceError):
    """Base class for lookups that found nothing the caller may see."""

    pass


class RecipeNotFound(NotFoundError):
    """Raised when a recipe cannot be found by ID."""

    def __init__(self, recipe_id: int):
        self.recipe_id = recipe_id
        super().__init__(f"Recipe with ID {recipe_id} not found")


class RecipeNotPublished(NotFoundError):
    """Raised when a recipe exists but is not visible through the read path.

    Only published recipes can be fetched with get_recipe(); drafts and
    archived recipes surface as this error rather than RecipeNotFound so
    callers can tell the two apart.

    Args:
        recipe_id: The recipe that was requested
        status: Its current lifecycle state
    """

    def __init__(self, recipe_id: int, status):
        self.recipe_id = recipe_id
        self.status = status
        status_value = getattr(status, "value", status)
        super().__init__(
            f"Recipe with ID {recipe_id} is not published (status: {status_value})"
        )


class IngredientNotFound(NotFoundError):
    """Raised when an ingredient cannot be found by ID."""

    def __init__(self, ingredient_id: int):
        self.ingredient_id = ingredient_id
        super().__init__(f"Ingredient with ID {ingredient_id} not found")


class RecipeCategoryNotFoundById(NotFoundError):
    """Raised when a recipe category cannot be found by ID."""

    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(f"Recipe category with ID {category_id} not found")


class RecipeCategoryNotFoundByName(NotFoundError):
    """Raised when a recipe category cannot be found by name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Recipe category '{name}' not found")


# ============================================================================
# Conflicts
# ============================================================================


class ConflictError(ServiceError):
    """Base class for uniqueness and referential conflicts."""

    pass


class IngredientNameExists(ConflictError):
    """Raised when creating or renaming an ingredient to a name already in use.

    Example:
        >>> raise IngredientNameExists("flour")
        IngredientNameExists: Ingredient named 'flour' already exists
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Ingredient named '{name}' already exists")


class CategoryNameExists(ConflictError):
    """Raised when creating or renaming a category to a name already in use."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Category with name '{name}' already exists")


class IngredientInUse(ConflictError):
    """Raised when attempting to delete an ingredient referenced by recipes.

    Args:
        ingredient_id: The ingredient being deleted
        recipe_count: Number of recipes that still use it
    """

    def __init__(self, ingredient_id: int, recipe_count: int):
        self.ingredient_id = ingredient_id
        self.recipe_count = recipe_count
        super().__init__(
            f"Cannot delete ingredient {ingredient_id}: used in {recipe_count} recipe(s)"
        )


class RecipeCategoryInUse(ConflictError):
    """Raised when attempting to delete a category referenced by recipes."""

    def __init__(self, category_id: int, recipe_count: int):
        self.category_id = category_id
        self.recipe_count = recipe_count
        super().__init__(
            f"Cannot delete category {category_id}: used by {recipe_count} recipe(s)"
        )


# ============================================================================
# Lifecycle
# ============================================================================


class InvalidStateError(ServiceError):
    """Base class for operations not permitted in the current lifecycle state."""

    pass


class RecipeStateError(InvalidStateError):
    """Raised when a recipe operation is not allowed in the recipe's state.

    Args:
        recipe_id: The recipe being operated on
        current_state: Its current RecipeStatus
        operation: Description of the attempted operation, including the
            state it requires

    Example:
        >>> raise RecipeStateError(7, RecipeStatus.ARCHIVED, "publish (must be in DRAFT state)")
        RecipeStateError: Cannot publish (must be in DRAFT state): recipe 7 is archived
    """

    def __init__(self, recipe_id: int, current_state, operation: str):
        self.recipe_id = recipe_id
        self.current_state = current_state
        self.operation = operation
        state_value = getattr(current_state, "value", current_state)
        super().__init__(f"Cannot {operation}: recipe {recipe_id} is {state_value}")


# ============================================================================
# Infrastructure
# ============================================================================


class DatabaseError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
