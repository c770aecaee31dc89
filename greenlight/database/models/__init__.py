"""ORM models for Greenlight."""

from greenlight.database.models.base import Base, CreatedAtMixin
from greenlight.database.models.movie import MovieRecord

__all__ = ["Base", "CreatedAtMixin", "MovieRecord"]
