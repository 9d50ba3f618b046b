# main.py
# Console menu for the recipe manager.
#
# The recipe being worked on is passed into every menu handler, and each
# handler returns the recipe that should be current afterward.

import argparse
import functools
import logging
import logging.config
import os
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Callable, Dict, List, Optional

from recipe_manager import schemas
from recipe_manager import services
from recipe_manager.core.config import settings
from recipe_manager.core.exceptions import InputValidationError

# Get the logger instance
logger = logging.getLogger(__name__)

CurrentRecipe = Optional[schemas.Recipe]

OPERATIONS = [
    "1) Create and populate all tables",
    "2) Add a recipe",
    "3) List recipes",
    "4) Select current recipe",
    "5) Add ingredient to current recipe",
    "6) Add step to current recipe",
    "7) Add category to current recipe",
    "8) Modify step in current recipe",
    "9) Delete a recipe",
]

EXIT = -1


# --- Console input ---

def get_string_input(prompt: str) -> Optional[str]:
    """Returns the trimmed input, or None if the user entered nothing."""
    line = input(f"{prompt}: ")
    return line.strip() or None


def get_int_input(prompt: str) -> Optional[int]:
    value = get_string_input(prompt)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise InputValidationError(f"{value} is not a valid number.")


def get_decimal_input(prompt: str) -> Optional[Decimal]:
    value = get_string_input(prompt)
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        raise InputValidationError(f"{value} is not a valid number.")


# --- Rendering ---

def format_amount(amount: Optional[Decimal]) -> str:
    """
    Renders an amount as a mixed fraction followed by a space, e.g. 1.5 -> '1 1/2 '.
    """
    if amount is None:
        return ""
    fraction = Fraction(amount).limit_denominator(16)
    whole, remainder = divmod(fraction.numerator, fraction.denominator)
    if remainder == 0:
        return f"{whole} "
    part = f"{remainder}/{fraction.denominator}"
    return f"{whole} {part} " if whole else f"{part} "


def format_ingredient(ingredient: schemas.Ingredient) -> str:
    text = f"ID={ingredient.ingredient_id}: {format_amount(ingredient.amount)}"
    unit = ingredient.unit
    if unit is not None and unit.unit_id is not None:
        plural = ingredient.amount is not None and ingredient.amount > 1
        text += f"{unit.unit_name_plural if plural else unit.unit_name_singular} "
    text += ingredient.ingredient_name
    if ingredient.instruction:
        text += f", {ingredient.instruction}"
    return text


def format_step(step: schemas.Step) -> str:
    return f"ID={step.step_id}, stepOrder={step.step_order}, stepText={step.step_text}"


def format_recipe(recipe: schemas.Recipe) -> str:
    lines = [
        f"ID={recipe.recipe_id}, recipeName={recipe.recipe_name}",
        f"   notes={recipe.notes}",
        f"   numServings={recipe.num_servings}, prepTime={recipe.prep_time}, cookTime={recipe.cook_time}",
        f"   createdAt={recipe.created_at}",
        "   Ingredients:",
    ]
    lines += [f"      {format_ingredient(i)}" for i in recipe.ingredients]
    lines.append("   Steps:")
    lines += [f"      {format_step(s)}" for s in recipe.steps]
    lines.append("   Categories:")
    lines += [f"      ID={c.category_id}, categoryName={c.category_name}" for c in recipe.categories]
    return "\n".join(lines)


# --- Menu handlers ---

def create_tables(current: CurrentRecipe) -> CurrentRecipe:
    services.create_and_populate_tables()
    print("\nTables created and populated!")
    # Every table was recreated, so nothing can still be selected
    return None


def add_recipe(current: CurrentRecipe) -> CurrentRecipe:
    name = get_string_input("Enter the recipe name")
    notes = get_string_input("Enter the recipe notes")
    num_servings = get_int_input("Enter number of servings")
    prep_minutes = get_int_input("Enter prep time in minutes")
    cook_minutes = get_int_input("Enter cook time in minutes")

    recipe = schemas.RecipeCreate(
        recipe_name=name,
        notes=notes,
        num_servings=num_servings,
        prep_time=schemas.minutes_to_time(prep_minutes),
        cook_time=schemas.minutes_to_time(cook_minutes),
    )
    db_recipe = services.add_recipe(recipe)
    print(f"You added this recipe:\n{format_recipe(db_recipe)}")
    return services.fetch_recipe_by_id(db_recipe.recipe_id)


def list_recipes() -> List[schemas.Recipe]:
    recipes = services.fetch_recipes()
    print("\nRecipes:")
    for recipe in recipes:
        print(f"   {recipe.recipe_id}: {recipe.recipe_name}")
    return recipes


def show_recipes(current: CurrentRecipe) -> CurrentRecipe:
    list_recipes()
    return current


def select_current_recipe(current: CurrentRecipe) -> CurrentRecipe:
    recipes = list_recipes()
    recipe_id = get_int_input("Select a recipe ID")
    if any(recipe.recipe_id == recipe_id for recipe in recipes):
        return services.fetch_recipe_by_id(recipe_id)
    print("\nInvalid recipe selected.")
    return None


def _require_recipe(handler: Callable[[schemas.Recipe], CurrentRecipe]):
    @functools.wraps(handler)
    def wrapper(current: CurrentRecipe) -> CurrentRecipe:
        if current is None:
            print("\nPlease select a recipe first.")
            return current
        return handler(current)
    return wrapper


@_require_recipe
def add_ingredient_to_current_recipe(current: schemas.Recipe) -> CurrentRecipe:
    name = get_string_input("Enter the ingredient name")
    instruction = get_string_input("Enter string instruction if any (like finely chopped)")
    amount = get_decimal_input("Enter the ingredient input amount (like .25)")
    if amount is not None:
        amount = amount.quantize(Decimal("0.01"))

    print("Units:")
    for unit in services.fetch_units():
        print(f"    {unit.unit_id}: {unit.unit_name_singular}({unit.unit_name_plural})")
    unit_id = get_int_input("Enter a unit ID (press Enter for none)")

    ingredient = schemas.IngredientCreate(
        recipe_id=current.recipe_id,
        unit_id=unit_id,
        ingredient_name=name,
        instruction=instruction,
        amount=amount,
    )
    services.add_ingredient(ingredient)
    return services.fetch_recipe_by_id(current.recipe_id)


@_require_recipe
def add_step_to_current_recipe(current: schemas.Recipe) -> CurrentRecipe:
    step_text = get_string_input("Enter the step text")
    if step_text is None:
        return current
    services.add_step(schemas.StepCreate(recipe_id=current.recipe_id, step_text=step_text))
    return services.fetch_recipe_by_id(current.recipe_id)


@_require_recipe
def add_category_to_current_recipe(current: schemas.Recipe) -> CurrentRecipe:
    for category in services.fetch_categories():
        print(f"     {category.category_name}")
    category_name = get_string_input("Enter the category to add")
    if category_name is None:
        return current
    services.add_category_to_recipe(current.recipe_id, category_name)
    return services.fetch_recipe_by_id(current.recipe_id)


@_require_recipe
def modify_step_in_current_recipe(current: schemas.Recipe) -> CurrentRecipe:
    print("\nSteps for current recipe")
    for step in services.fetch_steps(current.recipe_id):
        print(f"     {format_step(step)}")

    step_id = get_int_input("Enter step ID of step to modify")
    if step_id is None:
        return current
    step_text = get_string_input("Enter new step text")
    if step_text is None:
        return current
    services.modify_step(schemas.StepUpdate(step_id=step_id, step_text=step_text))
    return services.fetch_recipe_by_id(current.recipe_id)


def delete_recipe(current: CurrentRecipe) -> CurrentRecipe:
    list_recipes()
    recipe_id = get_int_input("Enter the ID of the recipe to delete")
    if recipe_id is None:
        return current
    services.delete_recipe(recipe_id)
    print(f"You have deleted recipe {recipe_id}")
    if current is not None and current.recipe_id == recipe_id:
        return None
    return current


MENU_HANDLERS: Dict[int, Callable[[CurrentRecipe], CurrentRecipe]] = {
    1: create_tables,
    2: add_recipe,
    3: show_recipes,
    4: select_current_recipe,
    5: add_ingredient_to_current_recipe,
    6: add_step_to_current_recipe,
    7: add_category_to_current_recipe,
    8: modify_step_in_current_recipe,
    9: delete_recipe,
}


# --- Menu loop ---

def print_operations(current: CurrentRecipe) -> None:
    print()
    print("Here's what you can do:")
    for operation in OPERATIONS:
        print(f"   {operation}")
    if current is None:
        print("\nYou are not working with a recipe.")
    else:
        print(f"\nYou are working with recipe {format_recipe(current)}")


def get_operation(current: CurrentRecipe) -> int:
    print_operations(current)
    operation = get_int_input("\nEnter an operation number (press Enter to quit)")
    return EXIT if operation is None else operation


def display_menu(current: CurrentRecipe = None) -> None:
    """
    Runs the menu until the user presses Enter without choosing an operation.
    A failed operation is reported and the menu carries on.
    """
    while True:
        try:
            operation = get_operation(current)
            if operation == EXIT:
                break
            handler = MENU_HANDLERS.get(operation)
            if handler is None:
                print(f"\n{operation} is not valid. Try again.")
                continue
            current = handler(current)
        except EOFError:
            break
        except Exception as e:
            logger.debug(f"Menu operation failed: {e!r}")
            print(f"\nError: {e} Try again.")

    print("\nExiting the menu. TTFN!")


def configure_logging() -> None:
    if os.path.exists(settings.LOGGING_CONFIG):
        logging.config.fileConfig(settings.LOGGING_CONFIG, disable_existing_loggers=False)
    else:
        logging.basicConfig(level=logging.WARNING)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=settings.PROJECT_NAME)
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Drop, recreate and populate all tables before showing the menu",
    )
    args = parser.parse_args(argv)

    configure_logging()

    if args.create_tables:
        services.create_and_populate_tables()
        print("Tables created and populated!")

    display_menu()


if __name__ == "__main__":
    main()
