from datetime import time

import pytest
from pydantic import ValidationError

from recipe_manager import schemas


def test_minutes_to_time():
    assert schemas.minutes_to_time(15) == time(0, 15)
    assert schemas.minutes_to_time(90) == time(1, 30)
    assert schemas.minutes_to_time(None) == time(0, 0)


def test_minutes_to_time_rejects_a_full_day_or_more():
    with pytest.raises(ValueError):
        schemas.minutes_to_time(24 * 60)
    with pytest.raises(ValueError):
        schemas.minutes_to_time(-5)


def test_recipe_create_reads_integers_as_minutes():
    recipe = schemas.RecipeCreate(recipe_name="Soup", prep_time=15, cook_time=75)
    assert recipe.prep_time == time(0, 15)
    assert recipe.cook_time == time(1, 15)


def test_recipe_create_accepts_times():
    recipe = schemas.RecipeCreate(recipe_name="Soup", prep_time=time(0, 5))
    assert recipe.prep_time == time(0, 5)
    assert recipe.cook_time is None


def test_recipe_create_requires_a_name():
    with pytest.raises(ValidationError):
        schemas.RecipeCreate(recipe_name=None)


def test_recipe_children_default_to_empty():
    recipe = schemas.Recipe(recipe_id=1, recipe_name="Soup")
    assert recipe.ingredients == [] and recipe.steps == [] and recipe.categories == []
