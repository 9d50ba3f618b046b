# session.py
# Configures the database connection and transaction handling using SQLAlchemy.

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

from recipe_manager.core.config import settings
from recipe_manager.core.exceptions import ConnectivityError, OperationError, RecipeError

logger = logging.getLogger(__name__)

# NullPool: every connect() opens a brand new DBAPI connection and close() really closes it.
engine = create_engine(settings.database_url, poolclass=NullPool)

# expire_on_commit=False so rows read in a transaction stay readable after commit.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)

Base = declarative_base()


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores foreign keys (and ON DELETE CASCADE) unless asked per connection.
    if engine.dialect.name == "sqlite":
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@contextmanager
def get_connection() -> Iterator[Connection]:
    """
    Yields a fresh connection and closes it afterward.
    Raises ConnectivityError if the database cannot be reached. There is no retry.
    """
    try:
        connection = engine.connect()
    except SQLAlchemyError as e:
        logger.error(f"Error getting connection to {engine.url!r}: {e}")
        raise ConnectivityError(f"Unable to connect to the database: {e}") from e

    logger.debug("Connected!")
    try:
        yield connection
    finally:
        connection.close()


@contextmanager
def transaction() -> Iterator[Session]:
    """
    Yields a session bound to a fresh connection inside a single transaction.
    Commits when the block exits normally. Any exception rolls the transaction
    back; package errors propagate as-is, everything else becomes an OperationError.
    """
    with get_connection() as connection:
        db = SessionLocal(bind=connection)
        try:
            with db.begin():
                yield db
        except RecipeError:
            raise
        except Exception as e:
            logger.error(f"Transaction rolled back: {e}")
            raise OperationError(str(e)) from e
        finally:
            db.close()
