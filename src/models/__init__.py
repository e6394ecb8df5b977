"""
Database models package.

This package contains all SQLAlchemy ORM models for the application.
"""

from .base import Base, BaseModel
from .enums import RecipeStatus
from .ingredient import Ingredient
from .recipe import Recipe, RecipeIngredient
from .recipe_category import RecipeCategory

__all__ = [
    "Base",
    "BaseModel",
    "RecipeStatus",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "RecipeCategory",
]
