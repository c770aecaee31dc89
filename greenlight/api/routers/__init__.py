"""API routers."""

from greenlight.api.routers import health, movies

__all__ = ["health", "movies"]
