"""
recordgrid - in-memory tabular data manager.

Holds a collection of records under a user-extensible column schema and
provides:

- Live case-insensitive search across every field
- Single-key stable sorting and pagination
- Record CRUD with multi-row selection and bulk delete
- Dynamic column add / show / hide
- CSV import with all-or-nothing per-row validation, and CSV export

Everything is driven through an explicit `DataTableSession` object.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from recordgrid.config import Settings, get_settings
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
from recordgrid.domain.models import Column, ColumnType, QueryParams, Record, SortConfig, SortDirection
from recordgrid.engine.importer import ImportResult
from recordgrid.engine.query import QueryView
from recordgrid.session import DataTableSession, create_session
from recordgrid.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Session
    "DataTableSession",
    "create_session",
    "QueryView",
    "ImportResult",
    # Models
    "Column",
    "ColumnType",
    "QueryParams",
    "Record",
    "RecordForm",
    "SortConfig",
    "SortDirection",
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
    # Logging
    "configure_logging",
    "get_logger",
]
