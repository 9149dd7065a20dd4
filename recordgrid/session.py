"""
Session: the command surface over the schema, store, selection and query.

One `DataTableSession` is created per application session and passed to
whatever drives it (CLI, UI, tests). Each command runs to completion and
either returns a result or raises without changing state; cross-component
rules (deleting prunes the selection, importing resets the page and clears
the selection) are applied inside the same command.

Usage:
    from recordgrid.session import create_session

    session = create_session()
    session.set_search_term("eng")
    view = session.view()
    print(view.total_matched, view.page_ids)
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from recordgrid.config import Settings, get_settings
from recordgrid.domain.errors import InvalidParameterError
from recordgrid.domain.forms import RecordForm
from recordgrid.domain.models import (
    Column,
    ColumnType,
    QueryParams,
    Record,
    SortConfig,
    SortDirection,
    sample_records,
)
from recordgrid.engine.exporter import export_csv, export_filename
from recordgrid.engine.importer import ImportResult, parse_csv
from recordgrid.engine.query import QueryView, build_view
from recordgrid.engine.schema import SchemaRegistry
from recordgrid.engine.selection import SelectionTracker
from recordgrid.engine.store import RecordStore
from recordgrid.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_ROWS_PER_PAGE_OPTIONS = (5, 10, 25, 50)


class DataTableSession:
    def __init__(
        self,
        records: Optional[Iterable[Record]] = None,
        columns: Optional[Iterable[Column]] = None,
        rows_per_page: int = 10,
        rows_per_page_options: Sequence[int] = DEFAULT_ROWS_PER_PAGE_OPTIONS,
    ) -> None:
        self._page_size_options = tuple(rows_per_page_options)
        if rows_per_page not in self._page_size_options:
            raise InvalidParameterError(
                f"rows_per_page={rows_per_page} is not one of {list(self._page_size_options)}"
            )
        self._schema = SchemaRegistry(columns)
        self._store = RecordStore(records)
        self._selection = SelectionTracker()
        self._query = QueryParams(rows_per_page=rows_per_page)

    # ------------------------------------------------------------------
    # Read model
    # ------------------------------------------------------------------
    @property
    def records(self) -> List[Record]:
        return self._store.list_records()

    @property
    def columns(self) -> List[Column]:
        return self._schema.list_columns()

    @property
    def visible_columns(self) -> List[Column]:
        return self._schema.visible_columns()

    @property
    def query(self) -> QueryParams:
        return self._query

    @property
    def rows_per_page_options(self) -> List[int]:
        return list(self._page_size_options)

    @property
    def selected_ids(self) -> List[str]:
        return self._selection.ids()

    @property
    def selected_count(self) -> int:
        return self._selection.count

    @property
    def can_bulk_delete(self) -> bool:
        return self._selection.count > 0

    @property
    def page_count(self) -> int:
        return self.view().page_count

    def get(self, record_id: str) -> Record:
        return self._store.get(record_id)

    def is_selected(self, record_id: str) -> bool:
        return self._selection.is_selected(record_id)

    def view(self) -> QueryView:
        """Recompute the filtered, sorted, paginated view."""
        return build_view(self._store.list_records(), self._schema.list_columns(), self._query)

    # ------------------------------------------------------------------
    # Record commands
    # ------------------------------------------------------------------
    def add(self, record: Record) -> Record:
        return self._store.add(record)

    def add_record(self, fields: Mapping[str, Any]) -> Record:
        """Create a record from field values with a freshly generated id."""
        record = Record.from_fields({**fields, "id": f"new_{uuid.uuid4().hex}"})
        return self._store.add(record)

    def update(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        return self._store.update(record_id, fields)

    def delete(self, record_id: str) -> Record:
        record = self._store.delete(record_id)
        self._selection.discard([record_id])
        return record

    def delete_many(self, record_ids: Iterable[str]) -> List[Record]:
        removed = self._store.delete_many(record_ids)
        self._selection.clear()
        return removed

    def delete_selected(self) -> List[Record]:
        """Bulk-delete the current selection; nothing happens when it is empty."""
        if not self.can_bulk_delete:
            return []
        return self.delete_many(self._selection.ids())

    def submit_form(self, form: RecordForm, record_id: Optional[str] = None) -> Record:
        """Save the add/edit form: update `record_id` if given, otherwise add."""
        if record_id is not None:
            return self.update(record_id, form.to_fields())
        return self.add_record(form.to_fields())

    # ------------------------------------------------------------------
    # Query commands
    # ------------------------------------------------------------------
    def set_search_term(self, search_term: str) -> None:
        self._query = self._query.model_copy(update={"search_term": search_term, "current_page": 0})
        log.info("Search term set", extra={"search_term": search_term})

    def set_sort_config(self, sort: Optional[SortConfig]) -> None:
        self._query = self._query.model_copy(update={"sort": sort})
        log.info(
            "Sort set",
            extra={
                "column_id": sort.column_id if sort else None,
                "direction": sort.direction.value if sort else None,
            },
        )

    def toggle_sort(self, column_id: str) -> Optional[SortConfig]:
        """
        Header-click sorting: the active column flips direction, any other
        sortable column sorts ascending. Unknown or unsortable columns are ignored.
        """
        column = self._schema.get(column_id)
        if column is None or not column.sortable:
            return self._query.sort

        current = self._query.sort
        if current is not None and current.column_id == column_id:
            sort = current.flipped()
        else:
            sort = SortConfig(column_id=column_id, direction=SortDirection.ASC)
        self.set_sort_config(sort)
        return sort

    def set_current_page(self, page: int) -> None:
        if page < 0:
            raise InvalidParameterError(f"Page must be >= 0, got {page}")
        self._query = self._query.model_copy(update={"current_page": page})
        log.info("Page set", extra={"page": page})

    def set_rows_per_page(self, rows_per_page: int) -> None:
        if rows_per_page not in self._page_size_options:
            raise InvalidParameterError(
                f"rows_per_page={rows_per_page} is not one of {list(self._page_size_options)}"
            )
        self._query = self._query.model_copy(
            update={"rows_per_page": rows_per_page, "current_page": 0}
        )
        log.info("Rows per page set", extra={"rows_per_page": rows_per_page})

    # ------------------------------------------------------------------
    # Schema commands
    # ------------------------------------------------------------------
    def toggle_column_visibility(self, column_id: str) -> Optional[Column]:
        return self._schema.toggle_visibility(column_id)

    def add_column(
        self,
        column_id: Optional[str],
        label: str,
        column_type: ColumnType = ColumnType.STRING,
    ) -> Column:
        return self._schema.add_column(column_id, label, column_type)

    # ------------------------------------------------------------------
    # Selection commands
    # ------------------------------------------------------------------
    def toggle_select(self, record_id: str) -> bool:
        selected = self._selection.toggle(record_id, self.view().page_ids)
        log.info(
            "Selection toggled",
            extra={"record_id": record_id, "selected": selected, "total": self._selection.count},
        )
        return selected

    def select_all(self, page_ids: Optional[Iterable[str]] = None) -> List[str]:
        """
        Select every record on the current page.

        When `page_ids` is given, only those also on the current page are kept.
        """
        current = self.view().page_ids
        if page_ids is not None:
            wanted = set(page_ids)
            current = [record_id for record_id in current if record_id in wanted]
        self._selection.select_all(current)
        log.info("Page selected", extra={"total": self._selection.count})
        return current

    def clear_selection(self) -> None:
        self._selection.clear()
        log.info("Selection cleared")

    # ------------------------------------------------------------------
    # CSV interchange
    # ------------------------------------------------------------------
    def import_from_csv(
        self, text: str, header_map: Optional[Mapping[str, str]] = None
    ) -> ImportResult:
        """
        Validate `text` and, only if every row is valid, replace all records.

        Raises MalformedInputError for unparsable input. Row errors are
        returned in the result and leave the session untouched.
        """
        result = parse_csv(text, columns=self._schema.list_columns(), header_map=header_map)
        if not result.ok:
            return result

        self._store.replace_all(result.records)
        self._selection.clear()
        self._query = self._query.model_copy(update={"current_page": 0})
        log.info("Import applied", extra={"total": len(self._store)})
        return result

    def export_to_csv(self) -> str:
        return export_csv(self._store.list_records(), self._schema.list_columns())

    def export_filename(self, day: Optional[date] = None) -> str:
        return export_filename(day)


def create_session(settings: Optional[Settings] = None) -> DataTableSession:
    """Build a session from settings, seeded with the sample dataset if enabled."""
    settings = settings or get_settings()
    return DataTableSession(
        records=sample_records() if settings.seed_sample_data else None,
        rows_per_page=settings.rows_per_page,
        rows_per_page_options=settings.rows_per_page_options,
    )


__all__ = ["DataTableSession", "create_session", "DEFAULT_ROWS_PER_PAGE_OPTIONS"]
