"""
CSV export of the full record store, restricted to visible columns.

Export ignores the current search, sort and page; rows follow the store's
raw order and the header uses column labels.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from recordgrid.domain.models import Column, Record, format_value


def export_filename(day: Optional[date] = None) -> str:
    """`data_export_<ISO-date>.csv` for `day` (today by default)."""
    return f"data_export_{(day or date.today()).isoformat()}.csv"


def export_csv(records: Iterable[Record], columns: Iterable[Column]) -> str:
    """
    Serialize records to CSV text.

    Only visible columns are written, in registry order. Missing values become
    empty strings; quoting is applied where a value needs it.
    """
    visible: List[Column] = [column for column in columns if column.visible]

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL)
    writer.writerow([column.label for column in visible])
    for record in records:
        writer.writerow([format_value(record.get(column.id)) for column in visible])
    return buffer.getvalue()


__all__ = ["export_csv", "export_filename", "format_value"]
