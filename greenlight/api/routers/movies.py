"""Movie endpoints for REST API.

Each handler sequences decode, validate, (merge), store and respond.
Decoding happens in dependencies; every failure is raised as a
domain error and turned into a response by the exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from greenlight.api.dependencies import (
    MovieIdDep,
    MovieStoreDep,
    read_movie_input,
    read_movie_patch,
)
from greenlight.api.schemas import (
    ErrorResponse,
    MessageResponse,
    MovieEnvelope,
    MovieListEnvelope,
    MovieResponse,
)
from greenlight.core.movie import Movie, MovieInput, MoviePatch, ensure_valid_movie, merge_patch

router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.get(
    "",
    response_model=MovieListEnvelope,
    summary="List movies",
)
def list_movies(store: MovieStoreDep) -> MovieListEnvelope:
    """Return every movie.

    Args:
        store: Movie store.

    Returns:
        All movies, possibly none.
    """
    return MovieListEnvelope(movies=[_to_response(m) for m in store.get_all()])


@router.post(
    "",
    response_model=MovieEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create movie",
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def create_movie(
    request: Request,
    response: Response,
    payload: Annotated[MovieInput, Depends(read_movie_input)],
    store: MovieStoreDep,
) -> MovieEnvelope:
    """Validate and insert a new movie.

    Args:
        request: Incoming request (used to build the Location header).
        response: Outgoing response.
        payload: Decoded create payload.
        store: Movie store.

    Returns:
        The stored movie with its id and version.

    Raises:
        FailedValidationError: If the payload breaks a field rule.
    """
    ensure_valid_movie(payload)
    movie = store.insert(payload)
    response.headers["Location"] = str(
        request.app.url_path_for("get_movie", movie_id=str(movie.id))
    )
    return MovieEnvelope(movie=_to_response(movie))


@router.get(
    "/{movie_id}",
    response_model=MovieEnvelope,
    summary="Get movie",
)
def get_movie(movie_pk: MovieIdDep, store: MovieStoreDep) -> MovieEnvelope:
    """Fetch one movie.

    Raises:
        RecordNotFoundError: If no movie has this id.
    """
    return MovieEnvelope(movie=_to_response(store.get(movie_pk)))


@router.patch(
    "/{movie_id}",
    response_model=MovieEnvelope,
    summary="Update movie",
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def update_movie(
    movie_pk: MovieIdDep,
    patch: Annotated[MoviePatch, Depends(read_movie_patch)],
    store: MovieStoreDep,
) -> MovieEnvelope:
    """Apply a partial update under optimistic concurrency.

    The stored movie is read, the patch merged onto it, the result
    validated as a whole and written back against the version that was
    read. A concurrent writer makes the write fail with a conflict; the
    client decides whether to retry.

    Args:
        movie_pk: Movie primary key.
        patch: Decoded partial payload.
        store: Movie store.

    Returns:
        The updated movie with its new version.

    Raises:
        RecordNotFoundError: If no movie has this id.
        FailedValidationError: If the merged movie breaks a field rule.
        EditConflictError: If the movie changed since it was read.
    """
    current = store.get(movie_pk)
    candidate = merge_patch(current, patch)
    ensure_valid_movie(candidate)
    updated = store.update(candidate)
    return MovieEnvelope(movie=_to_response(updated))


@router.delete(
    "/{movie_id}",
    response_model=MessageResponse,
    summary="Delete movie",
)
def delete_movie(movie_pk: MovieIdDep, store: MovieStoreDep) -> MessageResponse:
    """Hard-delete one movie.

    Raises:
        RecordNotFoundError: If no movie has this id.
    """
    store.delete(movie_pk)
    return MessageResponse(message="movie successfully deleted")


# =============================================================================
# PRIVATE HELPERS
# =============================================================================


def _to_response(movie: Movie) -> MovieResponse:
    return MovieResponse.model_validate(movie)
