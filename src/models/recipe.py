"""
Recipe models.

This module contains:
- Recipe: Recipe metadata, steps and lifecycle status
- RecipeIngredient: Ordered ingredient line (ingredient, quantity, unit) of a recipe
"""

from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Text,
    JSON,
    Enum as SAEnum,
    ForeignKey,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from .base import BaseModel
from .enums import RecipeStatus


class Recipe(BaseModel):
    """
    Recipe model.

    Attributes:
        title: Recipe title (required, trimmed)
        description: Optional free-text description
        steps: Ordered list of instruction strings (JSON array)
        servings: Number of servings the quantities are written for (> 0)
        category_id: Optional foreign key to RecipeCategory
        status: Lifecycle state (draft, published, archived)
        recipe_ingredients: Ordered ingredient lines
    """

    __tablename__ = "recipes"

    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    steps = Column(JSON, nullable=False, default=list)
    servings = Column(Float, nullable=False)

    category_id = Column(
        Integer, ForeignKey("recipe_categories.id", ondelete="RESTRICT"), nullable=True
    )

    status = Column(
        SAEnum(RecipeStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RecipeStatus.DRAFT,
    )

    # Relationships
    recipe_ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position",
        lazy="joined",
    )
    category = relationship("RecipeCategory", back_populates="recipes", lazy="joined")

    __table_args__ = (
        Index("idx_recipe_status", "status"),
        Index("idx_recipe_category", "category_id"),
        CheckConstraint("servings > 0", name="ck_recipe_servings_positive"),
    )

    def __repr__(self) -> str:
        """String representation of recipe."""
        return f"Recipe(id={self.id}, title='{self.title}', status='{self.status}')"

    @property
    def ingredient_names(self):
        """Resolved ingredient names in line order."""
        return [ri.ingredient.name for ri in self.recipe_ingredients if ri.ingredient]

    def to_dict(self, include_relationships: bool = False) -> dict:
        """
        Convert recipe to dictionary.

        Ingredient lines are always included since a recipe is meaningless
        without them; include_relationships adds the category as well.
        """
        result = super().to_dict(include_relationships=False)
        result["ingredients"] = [ri.to_dict() for ri in self.recipe_ingredients]
        if include_relationships:
            result["category"] = self.category.to_dict() if self.category else None
        return result


class RecipeIngredient(BaseModel):
    """
    One ingredient line of a recipe.

    Lines only exist inside a recipe and are replaced wholesale when the
    recipe's ingredient list is updated.

    Attributes:
        recipe_id: Foreign key to Recipe
        ingredient_id: Foreign key to Ingredient
        position: 0-based order of the line within the recipe
        quantity: Amount needed for the recipe's servings (> 0)
        unit: Unit of measurement, kept verbatim (never converted)
    """

    __tablename__ = "recipe_ingredients"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    ingredient_id = Column(
        Integer, ForeignKey("ingredients.id", ondelete="RESTRICT"), nullable=False
    )
    position = Column(Integer, nullable=False, default=0)

    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)

    recipe = relationship("Recipe", back_populates="recipe_ingredients")
    ingredient = relationship("Ingredient", back_populates="recipe_ingredients", lazy="joined")

    __table_args__ = (
        Index("idx_recipe_ingredient_recipe", "recipe_id"),
        Index("idx_recipe_ingredient_ingredient", "ingredient_id"),
        CheckConstraint("quantity > 0", name="ck_recipe_ingredient_quantity_positive"),
    )

    def __repr__(self) -> str:
        """String representation of recipe ingredient."""
        return (
            f"RecipeIngredient(recipe_id={self.recipe_id}, "
            f"ingredient_id={self.ingredient_id}, "
            f"quantity={self.quantity}, unit='{self.unit}')"
        )

    def to_dict(self, include_relationships: bool = False) -> dict:
        result = {
            "ingredient_id": self.ingredient_id,
            "quantity": self.quantity,
            "unit": self.unit,
        }
        if self.ingredient is not None:
            result["ingredient_name"] = self.ingredient.name
        return result
