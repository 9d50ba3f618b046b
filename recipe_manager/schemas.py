# schemas.py
# Defines the Pydantic models (schemas) exchanged between the repository, the service and the shell.

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Any
from decimal import Decimal
from datetime import datetime, time

MINUTES_PER_HOUR = 60


def minutes_to_time(num_minutes: Optional[int]) -> time:
    """
    Converts a number of minutes to a time of day holding hours and minutes.
    None counts as zero minutes. Raises ValueError for 24 hours or more.
    """
    minutes = 0 if num_minutes is None else num_minutes
    if minutes < 0:
        raise ValueError(f"{minutes} is not a valid number of minutes")
    return time(minutes // MINUTES_PER_HOUR, minutes % MINUTES_PER_HOUR)


# --- Unit Schemas ---
class Unit(BaseModel):
    unit_id: Optional[int] = None
    unit_name_singular: Optional[str] = None
    unit_name_plural: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# --- Category Schemas ---
class Category(BaseModel):
    category_id: Optional[int] = None
    category_name: str

    model_config = ConfigDict(from_attributes=True)


# --- Ingredient Schemas ---
class IngredientBase(BaseModel):
    recipe_id: int
    ingredient_name: str
    instruction: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, decimal_places=2)

class IngredientCreate(IngredientBase):
    unit_id: Optional[int] = None

class Ingredient(IngredientBase):
    ingredient_id: int
    ingredient_order: int
    unit: Optional[Unit] = None

    model_config = ConfigDict(from_attributes=True)


# --- Step Schemas ---
class StepCreate(BaseModel):
    recipe_id: int
    step_text: str

class StepUpdate(BaseModel):
    # Only the text of a step can change
    step_id: int
    step_text: str

class Step(BaseModel):
    step_id: int
    recipe_id: int
    step_order: int
    step_text: str

    model_config = ConfigDict(from_attributes=True)


# --- Recipe Schemas ---
class RecipeBase(BaseModel):
    recipe_name: str
    notes: Optional[str] = None
    num_servings: Optional[int] = None
    prep_time: Optional[time] = None
    cook_time: Optional[time] = None

    @field_validator("prep_time", "cook_time", mode="before")
    @classmethod
    def convert_minutes(cls, value: Any) -> Any:
        # Plain integers are minutes, not seconds
        if isinstance(value, int) and not isinstance(value, bool):
            return minutes_to_time(value)
        return value

class RecipeCreate(RecipeBase):
    pass

class Recipe(RecipeBase):
    recipe_id: int
    created_at: Optional[datetime] = None
    ingredients: List[Ingredient] = Field(default_factory=list)
    steps: List[Step] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
