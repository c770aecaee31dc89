"""Database package for Greenlight.

Provides connection management, the ORM model and the movie store.
"""

from greenlight.database.connection import DatabaseConnection
from greenlight.database.errors import (
    EditConflictError,
    RecordNotFoundError,
    StoreError,
    StoreTimeoutError,
)
from greenlight.database.models import Base, MovieRecord
from greenlight.database.repositories import MovieStore

__all__ = [
    # Connection
    "DatabaseConnection",
    # Models
    "Base",
    "MovieRecord",
    # Repositories
    "MovieStore",
    # Errors
    "RecordNotFoundError",
    "EditConflictError",
    "StoreError",
    "StoreTimeoutError",
]
