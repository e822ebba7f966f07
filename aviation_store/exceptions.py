"""Exception hierarchy for the aviation record store."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all record store errors."""


class StorageUnavailable(StoreError):
    """Raised when a store file cannot be opened, created or written."""


class ConstraintViolation(StoreError):
    """Raised when a statement breaks a table constraint (e.g. duplicate id)."""


class NotFound(StoreError):
    """Raised when a record required by id does not exist."""


class MalformedInput(StoreError):
    """Raised when caller-supplied field text cannot be turned into a record."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")
