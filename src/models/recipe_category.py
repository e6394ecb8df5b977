"""
RecipeCategory model for recipe grouping.

Categories are flat labels (e.g., "Breakfast", "Desserts") that recipes may
optionally reference. A category cannot be removed while recipes point at it.
"""

from sqlalchemy import Column, String, Text, Integer, Index
from sqlalchemy.orm import relationship

from .base import BaseModel


class RecipeCategory(BaseModel):
    """
    RecipeCategory model representing recipe grouping.

    Attributes:
        name: Category display name (unique)
        slug: URL-friendly identifier (unique, generated from name)
        description: Optional description text
        sort_order: Display ordering (default 0)
    """

    __tablename__ = "recipe_categories"

    name = Column(String(100), nullable=False, unique=True)
    slug = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    recipes = relationship("Recipe", back_populates="category", lazy="select")

    __table_args__ = (
        Index("idx_recipe_category_name", "name"),
        Index("idx_recipe_category_slug", "slug"),
    )

    def __repr__(self) -> str:
        """String representation of recipe category."""
        return f"<RecipeCategory(name='{self.name}')>"
