"""
Ingredient model for canonical ingredient identities.

An Ingredient is the shared identity behind every free-text ingredient
name used in a recipe. Recipes reference ingredients through
RecipeIngredient lines, and shopping lists aggregate on ingredient id.
"""

from sqlalchemy import Column, String, Index
from sqlalchemy.orm import relationship

from .base import BaseModel


class Ingredient(BaseModel):
    """
    Ingredient model.

    Names are unique and compared exactly (no case folding), so
    "Flour" and "flour" are two different ingredients.

    Attributes:
        name: Ingredient name, stored trimmed (e.g., "flour")
    """

    __tablename__ = "ingredients"

    name = Column(String(200), nullable=False, unique=True)

    recipe_ingredients = relationship(
        "RecipeIngredient",
        back_populates="ingredient",
        lazy="select",
    )

    __table_args__ = (Index("idx_ingredient_name", "name"),)

    def __repr__(self) -> str:
        """String representation of ingredient."""
        return f"Ingredient(id={self.id}, name='{self.name}')"
