"""Errors raised by the persistence layer."""


class RecordNotFoundError(Exception):
    """No record matches the requested id."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


class EditConflictError(Exception):
    """The record changed (or vanished) since the caller read it."""

    def __init__(self, message: str = "edit conflict") -> None:
        super().__init__(message)


class StoreError(Exception):
    """Unclassified failure of the underlying database."""


class StoreTimeoutError(StoreError):
    """A store call exceeded its timeout."""
