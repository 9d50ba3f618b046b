import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import NullPool

from recipe_manager import crud, models, schemas
from recipe_manager.core.exceptions import (
    ConnectivityError, ErrorKind, NotFoundError, OperationError, RecipeError
)
from recipe_manager.db import session


@pytest.fixture
def unreachable_engine(monkeypatch, tmp_path):
    bad_engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'recipes.db'}", poolclass=NullPool)
    monkeypatch.setattr(session, "engine", bad_engine)
    return bad_engine


def test_unreachable_database_raises_connectivity_error(unreachable_engine):
    with pytest.raises(ConnectivityError) as exc_info:
        crud.fetch_all_recipes()

    error = exc_info.value
    assert error.kind == ErrorKind.CONNECTIVITY
    assert isinstance(error.__cause__, OperationalError)
    # Callers handling OperationError also see connectivity failures
    assert isinstance(error, OperationError)


def test_unreachable_database_fails_writes_too(unreachable_engine):
    with pytest.raises(ConnectivityError):
        crud.insert_recipe(schemas.RecipeCreate(recipe_name="Soup"))


def test_each_connection_is_fresh():
    with session.get_connection() as first:
        pass
    with session.get_connection() as second:
        pass
    assert first is not second
    assert first.closed and second.closed


def test_foreign_keys_are_enforced_on_sqlite():
    with session.get_connection() as connection:
        assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_transaction_commits_on_success():
    with session.transaction() as db:
        db.add(models.Category(category_name="Soup"))

    assert [c.category_name for c in crud.fetch_all_categories()] == ["Soup"]


def test_transaction_rolls_back_and_wraps_errors():
    with pytest.raises(OperationError) as exc_info:
        with session.transaction() as db:
            db.add(models.Category(category_name="Soup"))
            db.flush()
            raise ValueError("boom")

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert crud.fetch_all_categories() == []


def test_transaction_rolls_back_and_keeps_domain_errors():
    with pytest.raises(NotFoundError):
        with session.transaction() as db:
            db.add(models.Category(category_name="Soup"))
            db.flush()
            raise NotFoundError("nothing here")

    assert crud.fetch_all_categories() == []


def test_missing_tables_surface_as_operation_error():
    models.Base.metadata.drop_all(bind=session.engine)
    try:
        with pytest.raises(OperationError) as exc_info:
            crud.fetch_all_recipes()
        assert not isinstance(exc_info.value, ConnectivityError)
        assert isinstance(exc_info.value.__cause__, OperationalError)
    finally:
        models.Base.metadata.create_all(bind=session.engine)


def test_error_messages_carry_their_kind():
    error = NotFoundError("Recipe with id=7 does not exist")
    assert isinstance(error, RecipeError)
    assert str(error) == "not_found: Recipe with id=7 does not exist"
    assert error.message == "Recipe with id=7 does not exist"
