import pytest
from typing import Dict, Generator
from sqlalchemy.orm import Session

# It is important to set environment variables before importing app modules
import os
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.pop("DB_HOST", None)

from recipe_manager import crud, models, schemas
from recipe_manager.db.session import Base, engine


@pytest.fixture(scope="session", autouse=True)
def db_engine():
    yield engine
    engine.dispose()
    if os.path.exists("./test.db"):
        os.remove("./test.db")


@pytest.fixture(scope="function", autouse=True)
def tables(db_engine) -> Generator:
    # Fresh tables for every test; the code under test opens its own connections
    Base.metadata.create_all(bind=db_engine)
    yield
    Base.metadata.drop_all(bind=db_engine)


@pytest.fixture
def db(db_engine) -> Generator:
    """A separate session for arranging and inspecting rows directly."""
    session = Session(bind=db_engine)
    yield session
    session.close()


@pytest.fixture
def units(db) -> Dict[str, int]:
    rows = [
        models.Unit(unit_name_singular="cup", unit_name_plural="cups"),
        models.Unit(unit_name_singular="teaspoon", unit_name_plural="teaspoons"),
    ]
    db.add_all(rows)
    db.commit()
    return {row.unit_name_singular: row.unit_id for row in rows}


@pytest.fixture
def categories(db) -> Dict[str, int]:
    rows = [models.Category(category_name=name) for name in ("Soup", "Vegetarian", "Dessert")]
    db.add_all(rows)
    db.commit()
    return {row.category_name: row.category_id for row in rows}


@pytest.fixture
def soup() -> schemas.Recipe:
    return crud.insert_recipe(
        schemas.RecipeCreate(
            recipe_name="Soup",
            notes="simple",
            num_servings=4,
            prep_time=15,
            cook_time=30,
        )
    )
