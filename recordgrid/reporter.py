from __future__ import annotations

from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from recordgrid.domain.models import Column, ColumnType, QueryParams, SortDirection, format_value
from recordgrid.engine.query import QueryView

MAX_LISTED_ERRORS = 5


def _header(column: Column, query: QueryParams) -> str:
    if query.sort is not None and query.sort.column_id == column.id:
        arrow = "▲" if query.sort.direction is SortDirection.ASC else "▼"
        return f"{column.label} {arrow}"
    return column.label


def print_view(
    view: QueryView,
    columns: Sequence[Column],
    query: QueryParams,
    selected: Sequence[str] = (),
    console: Optional[Console] = None,
) -> None:
    """
    Render one page of records as a rich table.

    Only visible columns are shown. Numeric columns are right-aligned and
    selected rows are marked in the first column.
    """
    console = console or Console()
    visible = [column for column in columns if column.visible]

    title = "Records"
    if query.search_term:
        title = f"{title}\n[dim]Search: {query.search_term!r}[/dim]"

    table = Table(
        title=title,
        box=box.ROUNDED,
        caption=(
            f"Rows {view.first_row}-{view.last_row} of {view.total_matched} "
            f"(page {view.current_page + 1}/{max(view.page_count, 1)})"
        ),
    )
    table.add_column("", no_wrap=True, style="bold yellow")
    for column in visible:
        justify = "right" if column.type is ColumnType.NUMBER else "left"
        style = "cyan" if column.type is ColumnType.EMAIL else None
        table.add_column(_header(column, query), justify=justify, style=style)

    selected_ids = set(selected)
    for record in view.page_records:
        marker = "✔" if record.id in selected_ids else ""
        table.add_row(marker, *(format_value(record.get(column.id)) for column in visible))

    if not view.page_records:
        console.print("[yellow]No records to display.[/yellow]")
    console.print(table)


def print_columns(columns: Sequence[Column], console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="Columns", box=box.ROUNDED)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Type", style="magenta")
    table.add_column("Visible", justify="center")
    table.add_column("Sortable", justify="center")
    for column in columns:
        table.add_row(
            column.id,
            column.label,
            column.type.value,
            "Yes" if column.visible else "No",
            "Yes" if column.sortable else "No",
        )
    console.print(table)


def print_import_errors(messages: List[str], console: Optional[Console] = None) -> None:
    """Show the first few row errors, then a count of the rest."""
    console = console or Console()
    console.print(f"[bold red]Import failed with {len(messages)} errors:[/bold red]")
    for message in messages[:MAX_LISTED_ERRORS]:
        console.print(f"  [red]•[/red] {message}")
    if len(messages) > MAX_LISTED_ERRORS:
        console.print(f"[dim]... and {len(messages) - MAX_LISTED_ERRORS} more errors[/dim]")


__all__ = ["print_view", "print_columns", "print_import_errors"]
