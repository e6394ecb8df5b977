"""
Enumerations shared by the recipe models.

This module contains:
- RecipeStatus: Publication lifecycle state of a recipe
"""

from enum import Enum


class RecipeStatus(str, Enum):
    """
    Publication lifecycle state of a recipe.

    Recipes are created as DRAFT, become visible to readers once
    PUBLISHED, and are retired by moving to ARCHIVED. ARCHIVED is terminal.

    Values:
        DRAFT: Editable, hidden from get/list
        PUBLISHED: Read-only, visible, usable for scaling and shopping lists
        ARCHIVED: Read-only, hidden, cannot be republished
    """

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"
