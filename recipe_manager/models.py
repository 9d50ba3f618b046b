# models.py
# Defines the SQLAlchemy ORM models for the recipe schema tables.

from sqlalchemy import (
    Column, ForeignKey, Integer, String, Text, Table, Numeric, DateTime, Time, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from recipe_manager.db.session import Base


# Join relation between recipes and categories
recipe_category = Table(
    "recipe_category",
    Base.metadata,
    Column("recipe_id", Integer, ForeignKey("recipe.recipe_id", ondelete="CASCADE"), nullable=False),
    Column("category_id", Integer, ForeignKey("category.category_id"), nullable=False),
    UniqueConstraint("recipe_id", "category_id"),
)


class Unit(Base):
    """
    Unit model for the 'unit' table, e.g. 'teaspoon' / 'teaspoons'.
    """
    __tablename__ = "unit"

    unit_id = Column(Integer, primary_key=True, autoincrement=True)
    unit_name_singular = Column(String(32), nullable=False)
    unit_name_plural = Column(String(34), nullable=False)


class Category(Base):
    __tablename__ = "category"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    category_name = Column(String(64), unique=True, nullable=False)


class Recipe(Base):
    """
    Recipe model for the 'recipe' table. Aggregate root for ingredients,
    steps and category links.
    """
    __tablename__ = "recipe"

    recipe_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_name = Column(String(128), nullable=False)
    notes = Column(Text, nullable=True)
    num_servings = Column(Integer, nullable=True)

    # Elapsed hours:minutes stored as a time of day
    prep_time = Column(Time, nullable=True)
    cook_time = Column(Time, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships. Deletes cascade in the database (ON DELETE CASCADE).
    ingredients = relationship(
        "Ingredient", back_populates="recipe", order_by="Ingredient.ingredient_order",
        cascade="all, delete-orphan", passive_deletes=True
    )
    steps = relationship(
        "Step", back_populates="recipe", order_by="Step.step_order",
        cascade="all, delete-orphan", passive_deletes=True
    )
    categories = relationship("Category", secondary=recipe_category, passive_deletes=True)

    def __str__(self):
        return f"{self.recipe_id}: {self.recipe_name}"


class Ingredient(Base):
    __tablename__ = "ingredient"

    ingredient_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(Integer, ForeignKey("recipe.recipe_id", ondelete="CASCADE"), nullable=False)
    unit_id = Column(Integer, ForeignKey("unit.unit_id"), nullable=True)
    ingredient_name = Column(String(64), nullable=False)
    instruction = Column(String(64), nullable=True)
    ingredient_order = Column(Integer, nullable=False)
    amount = Column(Numeric(7, 2), nullable=True)

    recipe = relationship("Recipe", back_populates="ingredients")
    unit = relationship("Unit")


class Step(Base):
    """
    An instruction step for a recipe.
    """
    __tablename__ = "step"

    step_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(Integer, ForeignKey("recipe.recipe_id", ondelete="CASCADE"), nullable=False)
    step_order = Column(Integer, nullable=False)
    step_text = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="steps")
