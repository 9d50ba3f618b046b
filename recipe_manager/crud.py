# crud.py
# Record repository: every Create, Read, Update and Delete operation on the recipe schema.
#
# Each public function runs in exactly one transaction obtained from
# db.session.transaction(). Helpers that take a Session run inside the caller's
# transaction and never open their own.

import logging
from typing import Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, func, insert, inspect, literal, select, text, update
from sqlalchemy.orm import Session, joinedload

from recipe_manager import models
from recipe_manager import schemas
from recipe_manager.db.session import transaction

# Get a logger instance
logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _columns_to_schema(schema: Type[SchemaT], db_obj) -> SchemaT:
    """
    Copy only the column attributes of an ORM object into a schema, so that
    relationships are never lazily loaded behind our back.
    """
    values = {attr.key: getattr(db_obj, attr.key) for attr in inspect(db_obj).mapper.column_attrs}
    return schema.model_validate(values)


def _next_sequence_number(db: Session, model, recipe_id: int) -> int:
    """
    Next 1-based position of a child row within its recipe.
    Not safe against concurrent writers; two appends can read the same count.
    """
    count = db.scalar(select(func.count()).select_from(model).where(model.recipe_id == recipe_id))
    return (count or 0) + 1


# --- Read helpers (run inside an open transaction) ---

def _fetch_recipe_ingredients(db: Session, recipe_id: int) -> List[schemas.Ingredient]:
    # joinedload emits a LEFT OUTER JOIN, so ingredients without a unit are kept
    rows = db.scalars(
        select(models.Ingredient)
        .options(joinedload(models.Ingredient.unit))
        .where(models.Ingredient.recipe_id == recipe_id)
        .order_by(models.Ingredient.ingredient_order)
    ).all()

    ingredients = []
    for row in rows:
        ingredient = _columns_to_schema(schemas.Ingredient, row)
        if row.unit is not None:
            ingredient.unit = _columns_to_schema(schemas.Unit, row.unit)
        ingredients.append(ingredient)
    return ingredients


def _fetch_recipe_steps(db: Session, recipe_id: int) -> List[schemas.Step]:
    rows = db.scalars(
        select(models.Step)
        .where(models.Step.recipe_id == recipe_id)
        .order_by(models.Step.step_order)
    ).all()
    return [_columns_to_schema(schemas.Step, row) for row in rows]


def _fetch_recipe_categories(db: Session, recipe_id: int) -> List[schemas.Category]:
    rows = db.scalars(
        select(models.Category)
        .join(models.recipe_category, models.recipe_category.c.category_id == models.Category.category_id)
        .where(models.recipe_category.c.recipe_id == recipe_id)
    ).all()
    return [_columns_to_schema(schemas.Category, row) for row in rows]


# --- Recipe CRUD Functions ---

def fetch_all_recipes() -> List[schemas.Recipe]:
    """
    Retrieve every recipe without ingredients, steps or categories, ordered by name.
    """
    logger.debug("Retrieving all recipes")
    with transaction() as db:
        rows = db.scalars(select(models.Recipe).order_by(models.Recipe.recipe_name)).all()
        return [_columns_to_schema(schemas.Recipe, row) for row in rows]


def fetch_recipe_by_id(recipe_id: int) -> Optional[schemas.Recipe]:
    """
    Retrieve a single recipe with its ingredients, steps and categories.
    Returns None if there is no recipe with the given ID.
    """
    logger.debug(f"Retrieving recipe with id {recipe_id}")
    with transaction() as db:
        db_recipe = db.get(models.Recipe, recipe_id)
        if db_recipe is None:
            return None

        recipe = _columns_to_schema(schemas.Recipe, db_recipe)
        recipe.ingredients.extend(_fetch_recipe_ingredients(db, recipe_id))
        recipe.steps.extend(_fetch_recipe_steps(db, recipe_id))
        recipe.categories.extend(_fetch_recipe_categories(db, recipe_id))
        return recipe


def fetch_recipe_steps(recipe_id: int) -> List[schemas.Step]:
    logger.debug(f"Retrieving steps for recipe {recipe_id}")
    with transaction() as db:
        return _fetch_recipe_steps(db, recipe_id)


def insert_recipe(recipe: schemas.RecipeCreate) -> schemas.Recipe:
    """
    Insert a bare recipe (no ingredients, steps or categories).
    The returned recipe carries the generated ID. created_at is assigned by
    the database and is not filled in; fetch the recipe again to see it.
    """
    logger.debug(f"Creating recipe: {recipe}")
    with transaction() as db:
        db_recipe = models.Recipe(
            recipe_name=recipe.recipe_name,
            notes=recipe.notes,
            num_servings=recipe.num_servings,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
        )
        db.add(db_recipe)
        db.flush()  # Flush to get the generated ID inside this transaction
        recipe_id = db_recipe.recipe_id

    return schemas.Recipe(**recipe.model_dump(), recipe_id=recipe_id)


def add_ingredient_to_recipe(ingredient: schemas.IngredientCreate) -> None:
    """
    Append an ingredient to a recipe. The position is the number of existing
    ingredients plus one; counting and inserting happen in one transaction.
    """
    logger.debug(f"Adding ingredient {ingredient.ingredient_name!r} to recipe {ingredient.recipe_id}")
    with transaction() as db:
        order = _next_sequence_number(db, models.Ingredient, ingredient.recipe_id)
        db.add(models.Ingredient(
            recipe_id=ingredient.recipe_id,
            unit_id=ingredient.unit_id,
            ingredient_name=ingredient.ingredient_name,
            instruction=ingredient.instruction,
            ingredient_order=order,
            amount=ingredient.amount,
        ))
        db.flush()


def add_step_to_recipe(step: schemas.StepCreate) -> None:
    logger.debug(f"Adding step to recipe {step.recipe_id}")
    with transaction() as db:
        order = _next_sequence_number(db, models.Step, step.recipe_id)
        db.add(models.Step(recipe_id=step.recipe_id, step_order=order, step_text=step.step_text))
        db.flush()


def add_category_to_recipe(recipe_id: int, category_name: str) -> bool:
    """
    Link a recipe to an existing category, looked up by name with a subquery.
    An unknown category name inserts nothing; the return value tells whether
    a link was actually created.
    """
    logger.debug(f"Adding category {category_name!r} to recipe {recipe_id}")
    category_id = (
        select(literal(recipe_id), models.Category.category_id)
        .where(models.Category.category_name == category_name)
    )
    stmt = insert(models.recipe_category).from_select(["recipe_id", "category_id"], category_id)
    with transaction() as db:
        result = db.execute(stmt)
        inserted = result.rowcount == 1

    if not inserted:
        logger.debug(f"Category {category_name!r} did not match any category")
    return inserted


def modify_recipe_step(step: schemas.StepUpdate) -> bool:
    """
    Change the text of a step. Its order and recipe never change.
    Returns True if exactly one row was updated, even when the text is unchanged.
    """
    logger.debug(f"Modifying step {step.step_id}")
    stmt = (
        update(models.Step)
        .where(models.Step.step_id == step.step_id)
        .values(step_text=step.step_text)
        .execution_options(synchronize_session=False)
    )
    with transaction() as db:
        return db.execute(stmt).rowcount == 1


def delete_recipe(recipe_id: int) -> bool:
    """
    Delete a recipe. Ingredients, steps and category links are removed by
    ON DELETE CASCADE. Returns True if exactly one recipe row was deleted.
    """
    logger.debug(f"Deleting recipe {recipe_id}")
    stmt = (
        delete(models.Recipe)
        .where(models.Recipe.recipe_id == recipe_id)
        .execution_options(synchronize_session=False)
    )
    with transaction() as db:
        deleted = db.execute(stmt).rowcount == 1

    if not deleted:
        logger.debug(f"Recipe {recipe_id} not found - nothing to delete")
    return deleted


def execute_batch(statements: Iterable[str]) -> None:
    """
    Run raw SQL statements in order in a single transaction.
    Used to create and populate the tables, never on the recipe data path.
    """
    statements = list(statements)
    logger.debug(f"Executing batch of {len(statements)} statements")
    with transaction() as db:
        for sql in statements:
            db.execute(text(sql))


# --- Reference data ---

def fetch_all_units() -> List[schemas.Unit]:
    with transaction() as db:
        rows = db.scalars(select(models.Unit).order_by(models.Unit.unit_name_singular)).all()
        return [_columns_to_schema(schemas.Unit, row) for row in rows]


def fetch_all_categories() -> List[schemas.Category]:
    with transaction() as db:
        rows = db.scalars(select(models.Category).order_by(models.Category.category_name)).all()
        return [_columns_to_schema(schemas.Category, row) for row in rows]
