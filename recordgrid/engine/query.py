"""
Query pipeline: filter -> sort -> paginate.

The view is a pure function of (records, columns, query parameters). Callers
recompute it after every command; nothing here is cached.

Usage:
    from recordgrid.engine.query import build_view

    view = build_view(store.list_records(), registry.list_columns(), params)
    print(view.total_matched, [r.id for r in view.page_records])
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Number
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from recordgrid.domain.models import Column, QueryParams, Record, SortConfig, SortDirection, format_value


@dataclass(frozen=True)
class QueryView:
    """
    Derived view of the store for one set of query parameters.

    `total_matched` counts filtered records before pagination.
    """

    total_matched: int
    page_records: Tuple[Record, ...]
    current_page: int
    rows_per_page: int

    @property
    def page_ids(self) -> List[str]:
        return [record.id for record in self.page_records]

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_matched / self.rows_per_page) if self.rows_per_page else 0

    @property
    def first_row(self) -> int:
        """1-based position of the first record on the page (0 when empty)."""
        if not self.page_records:
            return 0
        return self.current_page * self.rows_per_page + 1

    @property
    def last_row(self) -> int:
        if not self.page_records:
            return 0
        return self.first_row + len(self.page_records) - 1


def matches(record: Record, term: str) -> bool:
    """Case-insensitive substring match against every value on the record."""
    needle = term.lower()
    return any(needle in format_value(value).lower() for value in record.field_values())


def filter_records(records: Iterable[Record], search_term: str) -> List[Record]:
    if not search_term:
        return list(records)
    return [record for record in records if matches(record, search_term)]


def _sort_key(value: Any) -> Tuple[int, Any]:
    # numbers order before strings so mixed columns never compare across types
    if isinstance(value, Number) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


def sort_records(
    records: Sequence[Record],
    sort: Optional[SortConfig],
    column: Optional[Column],
) -> List[Record]:
    """
    Stable sort by a single column.

    No-op when `sort` is None or `column` is unknown or not sortable. Records
    without a value for the column keep their relative order at the end.
    """
    if sort is None or column is None or not column.sortable or column.id != sort.column_id:
        return list(records)

    present: List[Record] = []
    missing: List[Record] = []
    for record in records:
        (missing if record.get(column.id) is None else present).append(record)

    # sorted() keeps equal keys in input order even with reverse=True
    ordered = sorted(
        present,
        key=lambda record: _sort_key(record.get(column.id)),
        reverse=sort.direction is SortDirection.DESC,
    )
    return ordered + missing


def paginate(records: Sequence[Record], current_page: int, rows_per_page: int) -> List[Record]:
    """Slice one page; a page past the end is empty, not an error."""
    start = current_page * rows_per_page
    return list(records[start : start + rows_per_page])


def build_view(
    records: Iterable[Record],
    columns: Iterable[Column],
    params: QueryParams,
) -> QueryView:
    filtered = filter_records(records, params.search_term)

    column = None
    if params.sort is not None:
        column = next((c for c in columns if c.id == params.sort.column_id), None)
    ordered = sort_records(filtered, params.sort, column)

    page = paginate(ordered, params.current_page, params.rows_per_page)
    return QueryView(
        total_matched=len(ordered),
        page_records=tuple(page),
        current_page=params.current_page,
        rows_per_page=params.rows_per_page,
    )


__all__ = [
    "QueryView",
    "matches",
    "filter_records",
    "sort_records",
    "paginate",
    "build_view",
]
