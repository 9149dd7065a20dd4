"""
CSV import validation.

Two phases: every data row is validated and either becomes a candidate
record or a row error; only when no row failed does the result carry the
batch. Installing the batch (`RecordStore.replace_all`) is the caller's job,
so nothing here can partially apply an import.

Rules per row, first failure wins:
1. name and email present and non-empty after trimming
2. email looks like local@domain.tld
3. age is an integer in [0, 120]
4. values of registered custom columns match the column type
"""

from __future__ import annotations

import csv
import io
import math
import re
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from recordgrid.domain.errors import (
    InvalidAgeError,
    InvalidEmailFormatError,
    InvalidNumberError,
    MalformedInputError,
    MissingRequiredFieldError,
    RowValidationError,
)
from recordgrid.domain.models import (
    EMAIL_PATTERN,
    FIXED_FIELDS,
    Column,
    ColumnType,
    FieldValue,
    Record,
)
from recordgrid.utils.logging import get_logger

log = get_logger(__name__)

MIN_AGE = 0
MAX_AGE = 120
DEFAULT_ROLE = "Not specified"

_INTEGER = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")


@dataclass
class ImportResult:
    """
    Outcome of validating a CSV payload.

    Exactly one of `records` / `errors` is non-empty, except for a payload
    with a header and no data rows, which is valid and empty.
    """

    records: List[Record] = field(default_factory=list)
    errors: List[RowValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return [str(error) for error in self.errors]


def _new_import_id() -> str:
    return f"imported_{uuid.uuid4().hex}"


def label_header_map(columns: Iterable[Column]) -> Dict[str, str]:
    """Map column labels to ids, e.g. to re-import an export (`Name` -> `name`)."""
    return {column.label: column.id for column in columns}


def _read_rows(text: str, header_map: Optional[Mapping[str, str]]) -> List[Dict[str, str]]:
    if not text or not text.strip():
        raise MalformedInputError("CSV payload is empty")

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff"), newline=""), strict=True)
    try:
        lines = [line for line in reader if line]
    except csv.Error as exc:
        raise MalformedInputError(f"CSV parsing error: {exc}") from exc

    if not lines:
        raise MalformedInputError("CSV payload has no header row")

    header = [cell.strip() for cell in lines[0]]
    if header_map:
        header = [header_map.get(cell, cell) for cell in header]
    if not any(header):
        raise MalformedInputError("CSV header row is empty")
    duplicates = sorted({cell for cell in header if cell and header.count(cell) > 1})
    if duplicates:
        raise MalformedInputError(f"Duplicate CSV headers: {', '.join(duplicates)}")

    rows: List[Dict[str, str]] = []
    for number, line in enumerate(lines[1:], start=1):
        if len(line) > len(header):
            raise MalformedInputError(
                f"Row {number}: expected at most {len(header)} fields, found {len(line)}"
            )
        rows.append({key: value for key, value in zip(header, line) if key})
    return rows


def _parse_age(raw: Optional[str]) -> Optional[int]:
    text = (raw or "").strip()
    if not _INTEGER.match(text):
        return None
    age = int(text)
    return age if MIN_AGE <= age <= MAX_AGE else None


def _parse_number(text: str) -> Optional[Union[int, float]]:
    if _INTEGER.match(text):
        return int(text)
    if not _DECIMAL.match(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def _validate_custom(
    number: int, raw: Mapping[str, str], columns: List[Column]
) -> Union[Dict[str, FieldValue], RowValidationError]:
    values: Dict[str, FieldValue] = {}
    for column in columns:
        cell = (raw.get(column.id) or "").strip()
        if not cell:
            continue
        if column.type is ColumnType.NUMBER:
            parsed = _parse_number(cell)
            if parsed is None:
                return InvalidNumberError(number, f"Invalid number for column '{column.label}'")
            values[column.id] = parsed
        elif column.type is ColumnType.EMAIL:
            if not EMAIL_PATTERN.match(cell):
                return InvalidEmailFormatError(
                    number, f"Invalid email format for column '{column.label}'"
                )
            values[column.id] = cell.lower()
        else:
            values[column.id] = cell
    return values


def validate_row(
    number: int,
    raw: Mapping[str, str],
    custom_columns: List[Column],
    id_factory: Callable[[], str] = _new_import_id,
) -> Union[Record, RowValidationError]:
    """Validate one data row; return the record or the first error found."""
    name = (raw.get("name") or "").strip()
    email = (raw.get("email") or "").strip()
    if not name or not email:
        return MissingRequiredFieldError(number)

    if not EMAIL_PATTERN.match(email):
        return InvalidEmailFormatError(number)

    age = _parse_age(raw.get("age"))
    if age is None:
        return InvalidAgeError(number)

    extra = _validate_custom(number, raw, custom_columns)
    if isinstance(extra, RowValidationError):
        return extra

    return Record(
        id=id_factory(),
        name=name,
        email=email.lower(),
        age=age,
        role=(raw.get("role") or "").strip() or DEFAULT_ROLE,
        department=(raw.get("department") or "").strip(),
        location=(raw.get("location") or "").strip(),
        extra=extra,
    )


def parse_csv(
    text: str,
    columns: Optional[Iterable[Column]] = None,
    header_map: Optional[Mapping[str, str]] = None,
    id_factory: Callable[[], str] = _new_import_id,
) -> ImportResult:
    """
    Validate a CSV payload with a header row.

    Parameters
    ----------
    text : str
        Raw CSV text.
    columns : iterable[Column] | None
        Registered columns; custom (non-fixed) ones are imported into `extra`.
    header_map : mapping | None
        Optional CSV header -> column id translation applied before matching.
    id_factory : callable
        Produces a fresh id for each accepted record.

    Raises
    ------
    MalformedInputError
        When the payload cannot be parsed; no row is validated in that case.
    """
    rows = _read_rows(text, header_map)
    custom_columns = [column for column in columns or () if column.id not in FIXED_FIELDS]

    records: List[Record] = []
    errors: List[RowValidationError] = []
    for number, raw in enumerate(rows, start=1):
        outcome = validate_row(number, raw, custom_columns, id_factory)
        if isinstance(outcome, RowValidationError):
            errors.append(outcome)
        else:
            records.append(outcome)

    if errors:
        log.warning(
            "CSV import rejected",
            extra={"rows": len(rows), "failed_rows": len(errors)},
        )
        return ImportResult(errors=errors)

    log.info("CSV import validated", extra={"rows": len(records)})
    return ImportResult(records=records)


__all__ = [
    "ImportResult",
    "DEFAULT_ROLE",
    "label_header_map",
    "parse_csv",
    "validate_row",
]
