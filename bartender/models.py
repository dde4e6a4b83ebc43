from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .db import Base


class Ingredient(Base):
    __tablename__ = "ingredients"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # normalize_ingredient(name); the unique constraint stops racing inserts
    # and folds non-ASCII case, which SQLite's lower() does not
    name_key = Column(String(255), nullable=False, unique=True)


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    instructions = Column(Text, nullable=False, default="")
    is_custom = Column(Boolean, nullable=False, default=True)

    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        order_by="RecipeIngredient.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class RecipeIngredient(Base):
    __tablename__ = "recipe_ingredients"
    id = Column(Integer, primary_key=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False, default=0)
    # free-text label, matched against Ingredient.name by value only
    name = Column(String(255), nullable=False)
    quantity = Column(String(50), nullable=False)
    unit = Column(String(50), nullable=False, default="")

    recipe = relationship("Recipe", back_populates="ingredients")
