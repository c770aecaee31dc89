"""FastAPI dependencies: injected store and request decoding."""

import re
from typing import Annotated

from fastapi import Depends, Request

from greenlight.api.decoding import read_json
from greenlight.core.movie import MovieInput, MoviePatch
from greenlight.database.connection import DatabaseConnection
from greenlight.database.errors import RecordNotFoundError
from greenlight.database.repositories import MovieStore
from greenlight.settings import settings

_ID_PATTERN = re.compile(r"[+-]?\d+")
_MAX_ID = 2**63 - 1


def get_database(request: Request) -> DatabaseConnection:
    """Connection pool built at application startup."""
    return request.app.state.database


def get_movie_store(request: Request) -> MovieStore:
    """Movie store built at application startup."""
    return request.app.state.movie_store


def get_max_body_bytes() -> int:
    """Largest accepted JSON body."""
    return settings.api.max_body_bytes


def read_id_param(movie_id: str) -> int:
    """Parse the ``{movie_id}`` path segment.

    Args:
        movie_id: Raw path segment.

    Returns:
        Parsed id (may still be < 1; the store rejects those).

    Raises:
        RecordNotFoundError: If the segment is not a 64-bit integer.
    """
    if not _ID_PATTERN.fullmatch(movie_id):
        raise RecordNotFoundError("invalid id parameter")
    value = int(movie_id)
    if abs(value) > _MAX_ID:
        raise RecordNotFoundError("invalid id parameter")
    return value


async def read_movie_input(
    request: Request,
    max_bytes: Annotated[int, Depends(get_max_body_bytes)],
) -> MovieInput:
    """Decode a create payload."""
    return await read_json(request, MovieInput, max_bytes)


async def read_movie_patch(
    request: Request,
    max_bytes: Annotated[int, Depends(get_max_body_bytes)],
) -> MoviePatch:
    """Decode a partial update payload."""
    return await read_json(request, MoviePatch, max_bytes)


MovieStoreDep = Annotated[MovieStore, Depends(get_movie_store)]
DatabaseDep = Annotated[DatabaseConnection, Depends(get_database)]
MovieIdDep = Annotated[int, Depends(read_id_param)]
