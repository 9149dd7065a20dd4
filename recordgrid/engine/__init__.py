"""
Engine package for recordgrid.

Re-exports the schema registry, record store, selection tracker, query
pipeline and CSV import/export so callers can import from `recordgrid.engine`.
"""

from recordgrid.engine.exporter import export_csv, export_filename
from recordgrid.engine.importer import ImportResult, label_header_map, parse_csv
from recordgrid.engine.query import QueryView, build_view, filter_records, paginate, sort_records
from recordgrid.engine.schema import SchemaRegistry, slugify_label
from recordgrid.engine.selection import SelectionTracker
from recordgrid.engine.store import RecordStore

__all__ = [
    # State owners
    "RecordStore",
    "SchemaRegistry",
    "SelectionTracker",
    "slugify_label",
    # Derived view
    "QueryView",
    "build_view",
    "filter_records",
    "paginate",
    "sort_records",
    # CSV interchange
    "ImportResult",
    "export_csv",
    "export_filename",
    "label_header_map",
    "parse_csv",
]
