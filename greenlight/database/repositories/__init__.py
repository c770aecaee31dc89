"""Database repositories for Greenlight.

Usage:
    from greenlight.database import DatabaseConnection, MovieStore

    store = MovieStore(DatabaseConnection.from_settings(settings.database))
    movie = store.get(1)
"""

from greenlight.database.repositories.movie import MovieStore

__all__ = ["MovieStore"]
