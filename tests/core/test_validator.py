"""Unit tests for the Validator."""

import pytest

from greenlight.core.validator import FailedValidationError, Validator, unique


class TestValidator:
    """Tests for Validator."""

    @staticmethod
    def test_new_validator_is_valid() -> None:
        v = Validator()
        assert v.valid()
        assert v.errors == {}

    @staticmethod
    def test_passing_check_records_nothing() -> None:
        v = Validator()
        v.check(True, "title", "must be provided")
        assert v.valid()

    @staticmethod
    def test_failing_check_records_message() -> None:
        v = Validator()
        v.check(False, "title", "must be provided")
        assert not v.valid()
        assert v.errors == {"title": "must be provided"}

    @staticmethod
    def test_errors_report_first_message_per_field() -> None:
        """Several failures on one field keep call order; errors shows the first."""
        v = Validator()
        v.check(False, "year", "must be provided")
        v.check(False, "year", "must not be in the future")
        v.check(False, "runtime", "must be a positive integer")

        assert v.errors == {
            "year": "must be provided",
            "runtime": "must be a positive integer",
        }
        assert v.failures["year"] == ["must be provided", "must not be in the future"]

    @staticmethod
    def test_errors_is_a_copy() -> None:
        v = Validator()
        v.check(False, "title", "must be provided")
        v.errors["title"] = "changed"
        assert v.errors["title"] == "must be provided"

    @staticmethod
    def test_raise_if_invalid() -> None:
        v = Validator()
        v.check(False, "genres", "must be provided")
        with pytest.raises(FailedValidationError) as exc_info:
            v.raise_if_invalid()
        assert exc_info.value.errors == {"genres": "must be provided"}

    @staticmethod
    def test_raise_if_invalid_noop_when_valid() -> None:
        Validator().raise_if_invalid()


class TestUnique:
    """Tests for unique()."""

    @staticmethod
    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            ([], True),
            (["drama"], True),
            (["drama", "comedy"], True),
            (["drama", "comedy", "drama"], False),
            (["Drama", "drama"], True),
        ],
    )
    def test_unique(values: list[str], expected: bool) -> None:
        assert unique(values) is expected
