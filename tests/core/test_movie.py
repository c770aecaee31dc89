"""Unit tests for movie validation rules and patch merge."""

from datetime import date, datetime, timezone

import pytest

from greenlight.core.movie import (
    Movie,
    MovieInput,
    MoviePatch,
    ensure_valid_movie,
    merge_patch,
    validate_movie,
)
from greenlight.core.validator import FailedValidationError, Validator


def _errors(**fields: object) -> dict[str, str]:
    payload = {
        "title": "Up",
        "year": 2009,
        "runtime": 96,
        "genres": ["animation", "adventure"],
    }
    payload.update(fields)
    v = Validator()
    validate_movie(v, MovieInput.model_construct(**payload))
    return v.errors


@pytest.fixture
def stored_movie() -> Movie:
    """Movie as it would come back from the store."""
    return Movie(
        id=7,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        title="Up",
        year=2009,
        runtime=96,
        genres=["animation", "adventure"],
        version=3,
    )


# =============================================================================
# VALIDATION
# =============================================================================


class TestValidateMovie:
    """Field rules applied to create payloads and merged records."""

    @staticmethod
    def test_valid_movie() -> None:
        assert _errors() == {}

    @staticmethod
    def test_missing_everything() -> None:
        v = Validator()
        validate_movie(v, MovieInput())
        assert v.errors == {
            "title": "must be provided",
            "year": "must be provided",
            "runtime": "must be provided",
            "genres": "must be provided",
        }

    @staticmethod
    def test_empty_title() -> None:
        assert _errors(title="") == {"title": "must be provided"}

    @staticmethod
    def test_title_limit_is_in_bytes() -> None:
        assert _errors(title="a" * 500) == {}
        assert _errors(title="a" * 501) == {"title": "must not be more than 500 bytes long"}
        # 250 two-byte characters fit, 251 do not
        assert _errors(title="é" * 250) == {}
        assert "title" in _errors(title="é" * 251)

    @staticmethod
    def test_year_bounds() -> None:
        this_year = date.today().year
        assert _errors(year=1888) == {}
        assert _errors(year=this_year) == {}
        assert _errors(year=1887) == {"year": "must be greater than or equal to 1888"}
        assert _errors(year=this_year + 1) == {"year": "must not be in the future"}

    @staticmethod
    @pytest.mark.parametrize("runtime", [0, -1, -90])
    def test_runtime_must_be_positive(runtime: int) -> None:
        assert _errors(runtime=runtime) == {"runtime": "must be a positive integer"}

    @staticmethod
    def test_runtime_fits_32_bit_column() -> None:
        assert _errors(runtime=2**31 - 1) == {}
        assert _errors(runtime=2**31) == {"runtime": "must not be greater than 2147483647"}
        assert _errors(runtime=2**64) == {"runtime": "must not be greater than 2147483647"}

    @staticmethod
    def test_genres_count() -> None:
        assert _errors(genres=[]) == {"genres": "must contain at least 1 genre"}
        assert _errors(genres=["a", "b", "c", "d", "e"]) == {}
        assert _errors(genres=["a", "b", "c", "d", "e", "f"]) == {
            "genres": "must not contain more than 5 genres"
        }

    @staticmethod
    def test_duplicate_genres() -> None:
        assert _errors(genres=["a", "a"]) == {"genres": "must not contain duplicate values"}

    @staticmethod
    def test_ensure_valid_movie_raises() -> None:
        with pytest.raises(FailedValidationError) as exc_info:
            ensure_valid_movie(MovieInput(title="X", year=2020, runtime=100, genres=["a", "a"]))
        assert exc_info.value.errors == {"genres": "must not contain duplicate values"}


# =============================================================================
# MERGE
# =============================================================================


class TestMergePatch:
    """Presence-based partial update merge."""

    @staticmethod
    def test_patch_shares_create_fields() -> None:
        assert MoviePatch.model_fields.keys() == MovieInput.model_fields.keys()
        assert MoviePatch.model_config["extra"] == "forbid"
        assert MoviePatch.model_config["strict"] is True

    @staticmethod
    def test_empty_patch_leaves_movie_unchanged(stored_movie: Movie) -> None:
        merged = merge_patch(stored_movie, MoviePatch())
        assert merged == stored_movie

    @staticmethod
    def test_only_present_fields_replace(stored_movie: Movie) -> None:
        merged = merge_patch(stored_movie, MoviePatch(runtime=100))
        assert merged.runtime == 100
        assert merged.title == stored_movie.title
        assert merged.year == stored_movie.year
        assert merged.genres == stored_movie.genres

    @staticmethod
    def test_identity_fields_are_kept(stored_movie: Movie) -> None:
        merged = merge_patch(stored_movie, MoviePatch(title="Down", year=2010))
        assert merged.id == 7
        assert merged.version == 3
        assert merged.created_at == stored_movie.created_at

    @staticmethod
    def test_genres_replaced_wholesale(stored_movie: Movie) -> None:
        merged = merge_patch(stored_movie, MoviePatch(genres=["family"]))
        assert merged.genres == ["family"]

    @staticmethod
    def test_stored_movie_not_mutated(stored_movie: Movie) -> None:
        merged = merge_patch(stored_movie, MoviePatch(title="Down"))
        merged.genres.append("drama")
        assert stored_movie.title == "Up"
        assert stored_movie.genres == ["animation", "adventure"]

    @staticmethod
    def test_explicit_null_is_present(stored_movie: Movie) -> None:
        """A null value replaces the field and then fails validation."""
        patch = MoviePatch.model_validate({"title": None})
        merged = merge_patch(stored_movie, patch)
        assert merged.title is None
        with pytest.raises(FailedValidationError) as exc_info:
            ensure_valid_movie(merged)
        assert exc_info.value.errors == {"title": "must be provided"}

    @staticmethod
    def test_merged_record_validated_as_a_whole(stored_movie: Movie) -> None:
        """A patch valid on its own can produce an invalid record."""
        merged = merge_patch(stored_movie, MoviePatch(genres=["animation", "animation"]))
        with pytest.raises(FailedValidationError):
            ensure_valid_movie(merged)
