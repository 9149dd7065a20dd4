"""
Schema registry: the ordered set of column definitions.

Columns are appended, never removed or reordered; only their visibility
changes. The four base columns must always be present.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Optional

from recordgrid.domain.errors import DuplicateColumnError, InvalidParameterError
from recordgrid.domain.models import BASE_COLUMN_IDS, Column, ColumnType, default_columns
from recordgrid.utils.logging import get_logger

log = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def slugify_label(label: str) -> str:
    """
    Derive a column id from a user-entered label.

    "  Start  Date " -> "start_date"
    """
    return _WHITESPACE.sub("_", label.strip().lower())


class SchemaRegistry:
    """Owns column definitions in insertion order."""

    def __init__(self, columns: Optional[Iterable[Column]] = None) -> None:
        self._columns: Dict[str, Column] = {}
        for column in default_columns() if columns is None else columns:
            if column.id in self._columns:
                raise DuplicateColumnError(column.id)
            self._columns[column.id] = column

        missing = BASE_COLUMN_IDS - self._columns.keys()
        if missing:
            raise ValueError(f"Base columns missing from schema: {', '.join(sorted(missing))}")

    def __contains__(self, column_id: object) -> bool:
        return column_id in self._columns

    def __iter__(self) -> Iterator[Column]:
        return iter(list(self._columns.values()))

    def __len__(self) -> int:
        return len(self._columns)

    def get(self, column_id: str) -> Optional[Column]:
        return self._columns.get(column_id)

    def list_columns(self) -> List[Column]:
        return list(self._columns.values())

    def visible_columns(self) -> List[Column]:
        return [column for column in self._columns.values() if column.visible]

    def toggle_visibility(self, column_id: str) -> Optional[Column]:
        """
        Flip the visibility of `column_id` and return the updated column.

        Unknown ids are a no-op and return None.
        """
        column = self._columns.get(column_id)
        if column is None:
            log.debug("Ignoring visibility toggle for unknown column", extra={"column_id": column_id})
            return None

        updated = column.model_copy(update={"visible": not column.visible})
        self._columns[column_id] = updated
        log.info(
            "Column visibility toggled",
            extra={"column_id": column_id, "visible": updated.visible},
        )
        return updated

    def add_column(
        self,
        column_id: Optional[str],
        label: str,
        column_type: ColumnType = ColumnType.STRING,
    ) -> Column:
        """
        Append a new visible, sortable column.

        When `column_id` is None it is derived from `label` with `slugify_label`.
        """
        resolved_id = column_id if column_id is not None else slugify_label(label)
        if not resolved_id or not label.strip():
            raise InvalidParameterError("Column id and label must not be empty")
        if resolved_id in self._columns:
            raise DuplicateColumnError(resolved_id)

        column = Column(
            id=resolved_id,
            label=label,
            visible=True,
            sortable=True,
            type=ColumnType(column_type),
        )
        self._columns[resolved_id] = column
        log.info("Column added", extra={"column_id": resolved_id, "type": column.type.value})
        return column


__all__ = ["SchemaRegistry", "slugify_label"]
