"""Movie entity, request payloads, validation rules and patch merge.

Movie is the canonical record handed out by the store. MovieInput and
MoviePatch are the decode targets for create and partial-update
payloads; their fields are all optional at decode time so that missing
values are reported by validation rather than by the decoder.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from greenlight.core.validator import Validator, unique

MIN_YEAR = 1888
MAX_TITLE_BYTES = 500
MIN_GENRES = 1
MAX_GENRES = 5
# runtime is stored in a 32-bit integer column
MAX_RUNTIME = 2**31 - 1


# =============================================================================
# ENTITY
# =============================================================================


@dataclass
class Movie:
    """Persisted movie record.

    Attributes:
        id: Store-assigned primary key.
        created_at: Store-assigned insert timestamp.
        title: Movie title.
        year: Release year.
        runtime: Runtime in minutes.
        genres: Ordered, distinct genre names.
        version: Optimistic concurrency token, 1 on insert.
    """

    id: int
    created_at: datetime | None
    title: str
    year: int
    runtime: int
    genres: list[str] = field(default_factory=list)
    version: int = 1


# =============================================================================
# PAYLOADS
# =============================================================================


class MovieInput(BaseModel):
    """Create payload."""

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str | None = None
    year: int | None = None
    runtime: int | None = None
    genres: list[str] | None = None


class MoviePatch(MovieInput):
    """Partial update payload.

    Only the fields listed in ``model_fields_set`` were sent by the
    client; those replace the stored values, everything else is kept.
    """


# =============================================================================
# RULES
# =============================================================================


def validate_movie(v: Validator, movie: Movie | MovieInput) -> None:
    """Apply the movie field rules to ``movie``.

    Args:
        v: Validator collecting the failures.
        movie: Candidate record or create payload.
    """
    title = movie.title
    v.check(bool(title), "title", "must be provided")
    v.check(
        title is None or len(title.encode("utf-8")) <= MAX_TITLE_BYTES,
        "title",
        f"must not be more than {MAX_TITLE_BYTES} bytes long",
    )

    year = movie.year
    v.check(year is not None, "year", "must be provided")
    if year is not None:
        v.check(year >= MIN_YEAR, "year", f"must be greater than or equal to {MIN_YEAR}")
        v.check(year <= date.today().year, "year", "must not be in the future")

    runtime = movie.runtime
    v.check(runtime is not None, "runtime", "must be provided")
    if runtime is not None:
        v.check(runtime > 0, "runtime", "must be a positive integer")
        v.check(runtime <= MAX_RUNTIME, "runtime", f"must not be greater than {MAX_RUNTIME}")

    genres = movie.genres
    v.check(genres is not None, "genres", "must be provided")
    if genres is not None:
        v.check(len(genres) >= MIN_GENRES, "genres", f"must contain at least {MIN_GENRES} genre")
        v.check(
            len(genres) <= MAX_GENRES,
            "genres",
            f"must not contain more than {MAX_GENRES} genres",
        )
        v.check(unique(genres), "genres", "must not contain duplicate values")


def ensure_valid_movie(movie: Movie | MovieInput) -> None:
    """Run a fresh validation pass over ``movie``.

    Raises:
        FailedValidationError: If any rule fails.
    """
    v = Validator()
    validate_movie(v, movie)
    v.raise_if_invalid()


def merge_patch(movie: Movie, patch: MoviePatch) -> Movie:
    """Build the candidate record for a partial update.

    Fields present in ``patch`` replace the stored values; ``genres``
    is replaced as a whole. The stored ``movie`` is left untouched and
    the candidate keeps its id, created_at and version.

    Args:
        movie: Record as read from the store.
        patch: Decoded update payload.

    Returns:
        New Movie with the patch applied.
    """
    changes: dict[str, object] = {"genres": list(movie.genres)}
    for name in patch.model_fields_set:
        changes[name] = getattr(patch, name)
    return replace(movie, **changes)
