"""
Constants for the Recipe Box application.

This module defines system-wide constants including:
- Application metadata
- Validation limits
- Database file naming
- Error message fragments shared by validators and services
"""

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "Recipe Box"
APP_VERSION = "0.1.0"

# ============================================================================
# Validation Constants
# ============================================================================

# String length limits
MAX_TITLE_LENGTH = 200
MAX_NAME_LENGTH = 200
MAX_CATEGORY_NAME_LENGTH = 100
MAX_UNIT_LENGTH = 50

# ============================================================================
# Database Constants
# ============================================================================

DATABASE_FILENAME = "recipe_box.db"

# Environment variables
ENV_VAR_ENVIRONMENT = "RECIPE_BOX_ENV"
ENV_VAR_DATABASE_URL = "RECIPE_BOX_DATABASE_URL"
ENV_VAR_LOG_LEVEL = "RECIPE_BOX_LOG_LEVEL"

# ============================================================================
# Error Messages
# ============================================================================

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_NUMBER = "Please enter a valid number"
ERROR_INVALID_POSITIVE = "Value must be greater than zero"
ERROR_CATEGORY_NOT_FOUND = "Category does not exist"
ERROR_INGREDIENTS_REQUIRED = "At least one ingredient is required"
