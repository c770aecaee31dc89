"""Field-level validation primitives.

A Validator collects failed checks per field for a single
validation pass. Create a new instance for every payload.
"""

from collections.abc import Hashable, Iterable


class FailedValidationError(Exception):
    """Raised when a validation pass recorded at least one failure.

    Attributes:
        errors: Mapping of field name to its first failure message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("failed validation")
        self.errors = dict(errors)


class Validator:
    """Accumulates named field errors.

    Every failed check is kept in call order; ``errors`` reports the
    first message per field.

    Example:
        v = Validator()
        v.check(title != "", "title", "must be provided")
        if not v.valid():
            raise FailedValidationError(v.errors)
    """

    def __init__(self) -> None:
        self._failures: dict[str, list[str]] = {}

    def check(self, ok: bool, field: str, message: str) -> None:
        """Record ``message`` under ``field`` when ``ok`` is false."""
        if not ok:
            self._failures.setdefault(field, []).append(message)

    def valid(self) -> bool:
        """Return True when no check has failed."""
        return not self._failures

    @property
    def errors(self) -> dict[str, str]:
        """First recorded message for each failing field."""
        return {field: messages[0] for field, messages in self._failures.items()}

    @property
    def failures(self) -> dict[str, list[str]]:
        """All recorded messages for each failing field, in call order."""
        return {field: list(messages) for field, messages in self._failures.items()}

    def raise_if_invalid(self) -> None:
        """Raise FailedValidationError if any check failed.

        Raises:
            FailedValidationError: With the per-field error map.
        """
        if not self.valid():
            raise FailedValidationError(self.errors)


def unique(values: Iterable[Hashable]) -> bool:
    """Return True if every value in ``values`` is distinct."""
    seen = set()
    for value in values:
        if value in seen:
            return False
        seen.add(value)
    return True
