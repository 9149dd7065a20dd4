"""
Domain package for recordgrid.

Exports the record/column models, the error taxonomy and form validation.
Keep this package focused on data definitions and validation concerns.
"""

from recordgrid.domain.errors import (
    DuplicateColumnError,
    DuplicateIdError,
    InvalidAgeError,
    InvalidEmailFormatError,
    InvalidNumberError,
    InvalidParameterError,
    MalformedInputError,
    MissingRequiredFieldError,
    NotFoundError,
    RecordGridError,
    RowValidationError,
)
from recordgrid.domain.forms import RecordForm
from recordgrid.domain.models import (
    BASE_COLUMN_IDS,
    Column,
    ColumnType,
    QueryParams,
    Record,
    SortConfig,
    SortDirection,
    default_columns,
    sample_records,
)

__all__ = [
    # Models
    "BASE_COLUMN_IDS",
    "Column",
    "ColumnType",
    "QueryParams",
    "Record",
    "SortConfig",
    "SortDirection",
    "default_columns",
    "sample_records",
    "RecordForm",
    # Errors
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
