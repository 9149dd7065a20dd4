"""
Error taxonomy for recordgrid.

Structural errors (duplicate ids, unknown ids, bad parameters, unparsable CSV)
are raised synchronously by the offending command and leave state untouched.
Row validation errors are never raised by the import command; they are
collected into an `ImportResult` so every failing row is reported in one pass.
"""

from __future__ import annotations


class RecordGridError(Exception):
    """Base class for every error raised by recordgrid."""


class DuplicateIdError(RecordGridError):
    """A record id is already present in the store (or was used before)."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record id '{record_id}' already exists")
        self.record_id = record_id


class DuplicateColumnError(RecordGridError):
    """A column id is already registered."""

    def __init__(self, column_id: str) -> None:
        super().__init__(f"Column '{column_id}' already exists")
        self.column_id = column_id


class NotFoundError(RecordGridError, KeyError):
    """An unknown record or column id was referenced."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} '{identifier}' not found")
        self.kind = kind
        self.identifier = identifier

    def __str__(self) -> str:
        # KeyError quotes its argument by default
        return str(self.args[0])


class InvalidParameterError(RecordGridError, ValueError):
    """A query parameter is outside its allowed range."""


class MalformedInputError(RecordGridError, ValueError):
    """The CSV payload could not be parsed at all."""


class RowValidationError(RecordGridError):
    """
    A single CSV data row failed validation.

    Instances are collected, not raised. `row` is 1-indexed over data rows
    (the header is not counted).
    """

    reason: str = "Invalid row"

    def __init__(self, row: int, reason: str | None = None) -> None:
        self.row = row
        if reason is not None:
            self.reason = reason
        super().__init__(f"Row {row}: {self.reason}")


class MissingRequiredFieldError(RowValidationError):
    reason = "Missing required fields (name, email)"


class InvalidEmailFormatError(RowValidationError):
    reason = "Invalid email format"


class InvalidAgeError(RowValidationError):
    reason = "Invalid age (must be a number between 0-120)"


class InvalidNumberError(RowValidationError):
    reason = "Invalid number"


__all__ = [
    "RecordGridError",
    "DuplicateIdError",
    "DuplicateColumnError",
    "NotFoundError",
    "InvalidParameterError",
    "MalformedInputError",
    "RowValidationError",
    "MissingRequiredFieldError",
    "InvalidEmailFormatError",
    "InvalidAgeError",
    "InvalidNumberError",
]
