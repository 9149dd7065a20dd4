"""
Domain models for recordgrid.

A `Record` is a fixed set of typed fields (the ones every row carries) plus an
open `extra` mapping for values of columns added at runtime. `Column`,
`SortConfig` and `QueryParams` describe the schema and the current query.
All models are frozen; owners replace instances instead of mutating them.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

# Tagged value for custom columns: a number or a string.
FieldValue = Union[StrictInt, StrictFloat, str]

FIXED_FIELDS = ("id", "name", "email", "age", "role", "department", "location")
BASE_COLUMN_IDS = frozenset({"name", "email", "age", "role"})

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def format_value(value: Any) -> str:
    """
    Canonical string form of a stored value.

    Integral floats drop their fraction (30.0 -> "30"); None becomes "".
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ColumnType(str, Enum):
    """Value type of a column; only import validation and rendering look at it."""

    STRING = "string"
    NUMBER = "number"
    EMAIL = "email"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Record(BaseModel):
    """
    One row of managed data.
    """

    id: str = Field(..., min_length=1, description="Opaque unique identifier, immutable.")
    name: str = Field(..., description="Display name.")
    email: str = Field(..., description="Contact email address.")
    age: int = Field(..., description="Age in years.")
    role: str = Field(..., description="Job role.")
    department: Optional[str] = Field(None, description="Optional department.")
    location: Optional[str] = Field(None, description="Optional location.")
    extra: Dict[str, FieldValue] = Field(
        default_factory=dict, description="Values of runtime-added columns keyed by column id."
    )

    model_config = {
        "frozen": True,
    }

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "Record":
        """
        Build a record from a flat column-id -> value mapping.

        Keys that are not fixed fields land in `extra`; `None` extras are dropped.
        """
        typed = {key: value for key, value in fields.items() if key in FIXED_FIELDS}
        extra = {
            key: value
            for key, value in fields.items()
            if key not in FIXED_FIELDS and value is not None
        }
        return cls.model_validate({**typed, "extra": extra})

    def get(self, column_id: str, default: Any = None) -> Any:
        """Return the value stored for `column_id`, or `default` when absent."""
        if column_id in FIXED_FIELDS:
            value = getattr(self, column_id)
        else:
            value = self.extra.get(column_id)
        return default if value is None else value

    def field_values(self) -> Iterator[FieldValue]:
        """Yield every value present on the record, fixed fields first."""
        for name in FIXED_FIELDS:
            value = getattr(self, name)
            if value is not None:
                yield value
        yield from self.extra.values()

    def to_dict(self) -> Dict[str, FieldValue]:
        """Flatten to a column-id -> value mapping, omitting absent values."""
        data: Dict[str, FieldValue] = {
            name: getattr(self, name) for name in FIXED_FIELDS if getattr(self, name) is not None
        }
        data.update(self.extra)
        return data

    def merged(self, fields: Mapping[str, Any]) -> "Record":
        """
        Return a copy with `fields` merged in. An `id` key is ignored.
        """
        data: Dict[str, Any] = self.to_dict()
        data.update({key: value for key, value in fields.items() if key != "id"})
        data["id"] = self.id
        return Record.from_fields(data)


class Column(BaseModel):
    """Definition of one addressable attribute shared by all records."""

    id: str = Field(..., min_length=1)
    label: str
    visible: bool = True
    sortable: bool = True
    type: ColumnType = ColumnType.STRING

    model_config = {
        "frozen": True,
    }


class SortConfig(BaseModel):
    column_id: str
    direction: SortDirection = SortDirection.ASC

    model_config = {
        "frozen": True,
    }

    def flipped(self) -> "SortConfig":
        direction = SortDirection.DESC if self.direction is SortDirection.ASC else SortDirection.ASC
        return SortConfig(column_id=self.column_id, direction=direction)


class QueryParams(BaseModel):
    """Search text, sort key and pagination cursor applied to derive a view."""

    search_term: str = ""
    sort: Optional[SortConfig] = None
    current_page: int = Field(0, ge=0)
    rows_per_page: int = Field(10, gt=0)

    model_config = {
        "frozen": True,
    }


def default_columns() -> List[Column]:
    """Columns seeded at initialization; department and location start hidden."""
    return [
        Column(id="name", label="Name", type=ColumnType.STRING),
        Column(id="email", label="Email", type=ColumnType.EMAIL),
        Column(id="age", label="Age", type=ColumnType.NUMBER),
        Column(id="role", label="Role", type=ColumnType.STRING),
        Column(id="department", label="Department", visible=False, type=ColumnType.STRING),
        Column(id="location", label="Location", visible=False, type=ColumnType.STRING),
    ]


def sample_records() -> List[Record]:
    """The five-row dataset a fresh session starts with."""
    rows = [
        ("1", "John Doe", "john.doe@company.com", 28, "Frontend Developer", "Engineering", "San Francisco"),
        ("2", "Jane Smith", "jane.smith@company.com", 32, "Product Manager", "Product", "New York"),
        ("3", "Bob Johnson", "bob.johnson@company.com", 45, "Senior Engineer", "Engineering", "Austin"),
        ("4", "Alice Brown", "alice.brown@company.com", 29, "UX Designer", "Design", "Seattle"),
        ("5", "Charlie Wilson", "charlie.wilson@company.com", 38, "DevOps Engineer", "Engineering", "Portland"),
    ]
    return [
        Record(
            id=record_id,
            name=name,
            email=email,
            age=age,
            role=role,
            department=department,
            location=location,
        )
        for record_id, name, email, age, role, department, location in rows
    ]


__all__ = [
    "FieldValue",
    "FIXED_FIELDS",
    "BASE_COLUMN_IDS",
    "EMAIL_PATTERN",
    "format_value",
    "ColumnType",
    "SortDirection",
    "Record",
    "Column",
    "SortConfig",
    "QueryParams",
    "default_columns",
    "sample_records",
]
