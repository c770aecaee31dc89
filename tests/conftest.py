"""Shared pytest fixtures.

Environment variables are set before any ``greenlight`` module is
imported so the settings singleton is built for the test environment
(no log files, test environment name).
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_DIR"] = ""

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402

from greenlight.core.movie import MovieInput  # noqa: E402
from greenlight.database.connection import DatabaseConnection  # noqa: E402
from greenlight.database.repositories import MovieStore  # noqa: E402


@pytest.fixture
def database() -> Generator[DatabaseConnection, None, None]:
    """Fresh in-memory SQLite database with the schema created."""
    db = DatabaseConnection.in_memory()
    yield db
    db.dispose()


@pytest.fixture
def store(database: DatabaseConnection) -> MovieStore:
    """Movie store over the in-memory database."""
    return MovieStore(database)


@pytest.fixture
def up_input() -> MovieInput:
    """Create payload for 'Up'."""
    return MovieInput(
        title="Up",
        year=2009,
        runtime=96,
        genres=["animation", "adventure"],
    )


@pytest.fixture
def movie_payload() -> dict:
    """JSON create payload."""
    return {
        "title": "Moana",
        "year": 2016,
        "runtime": 107,
        "genres": ["animation", "adventure"],
    }
