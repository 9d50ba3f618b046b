# services.py
# Recipe-centric operations on top of the record repository.
# Absent rows become NotFoundError here; database failures pass through untouched.

import logging
from pathlib import Path
from typing import List

from recipe_manager import crud
from recipe_manager import schemas
from recipe_manager.core.exceptions import NotFoundError
from recipe_manager.core.sql_script import convert_content_to_sql_statements
from recipe_manager.db.session import engine

logger = logging.getLogger(__name__)

RESOURCE_DIR = Path(__file__).resolve().parent / "resources"
SCHEMA_FILE = "recipe_schema.{dialect}.sql"
DATA_FILE = "recipe_data.sql"


# --- Schema bootstrap ---

def create_and_populate_tables() -> None:
    """
    Drop and recreate every table, then load the reference and sample data.
    """
    load_from_file(SCHEMA_FILE.format(dialect=engine.dialect.name))
    load_from_file(DATA_FILE)
    logger.info("Tables created and populated")


def load_from_file(file_name: str) -> None:
    path = RESOURCE_DIR / file_name
    logger.debug(f"Loading SQL from {path}")
    content = path.read_text(encoding="utf-8")
    crud.execute_batch(convert_content_to_sql_statements(content))


# --- Recipes ---

def add_recipe(recipe: schemas.RecipeCreate) -> schemas.Recipe:
    return crud.insert_recipe(recipe)


def fetch_recipes() -> List[schemas.Recipe]:
    # The repository orders by name; callers list recipes by ID.
    return sorted(crud.fetch_all_recipes(), key=lambda recipe: recipe.recipe_id)


def fetch_recipe_by_id(recipe_id: int) -> schemas.Recipe:
    recipe = crud.fetch_recipe_by_id(recipe_id)
    if recipe is None:
        logger.warning(f"Recipe with ID {recipe_id} not found.")
        raise NotFoundError(f"Recipe with id={recipe_id} does not exist")
    return recipe


def delete_recipe(recipe_id: int) -> None:
    if not crud.delete_recipe(recipe_id):
        logger.warning(f"Recipe with ID {recipe_id} not found.")
        raise NotFoundError(f"Recipe with ID={recipe_id} does not exist.")


# --- Ingredients, steps and categories ---

def add_ingredient(ingredient: schemas.IngredientCreate) -> None:
    crud.add_ingredient_to_recipe(ingredient)


def add_step(step: schemas.StepCreate) -> None:
    crud.add_step_to_recipe(step)


def fetch_steps(recipe_id: int) -> List[schemas.Step]:
    return crud.fetch_recipe_steps(recipe_id)


def modify_step(step: schemas.StepUpdate) -> None:
    if not crud.modify_recipe_step(step):
        logger.warning(f"Step with ID {step.step_id} not found.")
        raise NotFoundError(f"Step with ID={step.step_id} does not exist.")


def add_category_to_recipe(recipe_id: int, category_name: str) -> None:
    """
    Link an existing category to a recipe. The repository quietly inserts
    nothing for an unknown name, so that case is reported here.
    """
    if not crud.add_category_to_recipe(recipe_id, category_name):
        logger.warning(f"Category {category_name!r} not found.")
        raise NotFoundError(f"Category '{category_name}' does not exist.")


def fetch_units() -> List[schemas.Unit]:
    return crud.fetch_all_units()


def fetch_categories() -> List[schemas.Category]:
    return crud.fetch_all_categories()
