"""Movie domain: entity, payloads, validation and merge rules."""

from greenlight.core.movie import (
    Movie,
    MovieInput,
    MoviePatch,
    ensure_valid_movie,
    merge_patch,
    validate_movie,
)
from greenlight.core.validator import FailedValidationError, Validator, unique

__all__ = [
    "Movie",
    "MovieInput",
    "MoviePatch",
    "ensure_valid_movie",
    "merge_patch",
    "validate_movie",
    "FailedValidationError",
    "Validator",
    "unique",
]
