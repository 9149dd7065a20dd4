from __future__ import annotations

import contextlib
import sys
from pathlib import Path
from typing import Iterator, List, Optional

import typer

from recordgrid.config import get_settings
from recordgrid.domain.errors import NotFoundError, RecordGridError
from recordgrid.domain.models import SortConfig, SortDirection
from recordgrid.engine.importer import label_header_map, parse_csv
from recordgrid.reporter import print_columns, print_import_errors, print_view
from recordgrid.session import DataTableSession, create_session
from recordgrid.utils.logging import configure_logging

app = typer.Typer(help="recordgrid: in-memory record table with search, sort, paging and CSV I/O.")

INPUT_OPTION = typer.Option(
    None,
    "--input",
    "-i",
    help="CSV file to import instead of the built-in sample data.",
    exists=True,
    dir_okay=False,
)
LABELS_OPTION = typer.Option(
    False,
    "--labels",
    help="CSV headers are column labels (e.g. an earlier export) rather than column ids.",
)
COLUMN_OPTION = typer.Option(
    None,
    "--column",
    "-c",
    help="Toggle visibility of a column id (repeatable).",
)


@contextlib.contextmanager
def _errors_to_exit() -> Iterator[None]:
    try:
        yield
    except RecordGridError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _load_session(
    input_path: Optional[Path], labels: bool, toggles: Optional[List[str]]
) -> DataTableSession:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    session = create_session(settings)

    if input_path is not None:
        header_map = label_header_map(session.columns) if labels else None
        result = session.import_from_csv(input_path.read_text(encoding="utf-8"), header_map)
        if not result.ok:
            print_import_errors(result.messages)
            raise typer.Exit(code=1)
        typer.echo(f"Imported {len(result.records)} rows from {input_path}.")

    for column_id in toggles or []:
        if session.toggle_column_visibility(column_id) is None:
            raise NotFoundError("Column", column_id)
    return session


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"rows_per_page={settings.rows_per_page} options={settings.rows_per_page_options} | "
        f"sample_data={settings.seed_sample_data} export_dir={settings.export_dir} | "
        f"log_level={settings.log_level} json={settings.log_json}"
    )


@app.command()
def show(
    input_path: Optional[Path] = INPUT_OPTION,
    labels: bool = LABELS_OPTION,
    column: Optional[List[str]] = COLUMN_OPTION,
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive substring filter."),
    sort: Optional[str] = typer.Option(None, "--sort", help="Column id to sort by."),
    desc: bool = typer.Option(False, "--desc", help="Sort descending."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number (1-based)."),
    rows: Optional[int] = typer.Option(None, "--rows", "-r", help="Rows per page."),
    select: Optional[List[str]] = typer.Option(
        None, "--select", help="Mark a record id on the shown page as selected (repeatable)."
    ),
) -> None:
    """
    Print one page of records after applying search, sort and pagination.
    """
    with _errors_to_exit():
        session = _load_session(input_path, labels, column)
        if rows is not None:
            session.set_rows_per_page(rows)
        session.set_search_term(search)
        if sort is not None:
            if sort not in {c.id for c in session.columns}:
                raise NotFoundError("Column", sort)
            direction = SortDirection.DESC if desc else SortDirection.ASC
            session.set_sort_config(SortConfig(column_id=sort, direction=direction))
        session.set_current_page(page - 1)
        for record_id in select or []:
            session.toggle_select(record_id)
        print_view(session.view(), session.columns, session.query, selected=session.selected_ids)


@app.command()
def columns(
    input_path: Optional[Path] = INPUT_OPTION,
    labels: bool = LABELS_OPTION,
    column: Optional[List[str]] = COLUMN_OPTION,
) -> None:
    """
    List column definitions and their visibility.
    """
    with _errors_to_exit():
        session = _load_session(input_path, labels, column)
        print_columns(session.columns)


@app.command()
def validate(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file to check."),
    labels: bool = LABELS_OPTION,
) -> None:
    """
    Validate a CSV file without importing it and list every failing row.
    """
    with _errors_to_exit():
        session = _load_session(None, False, None)
        header_map = label_header_map(session.columns) if labels else None
        result = parse_csv(
            csv_path.read_text(encoding="utf-8"), columns=session.columns, header_map=header_map
        )
        if not result.ok:
            print_import_errors(result.messages)
            raise typer.Exit(code=1)
        typer.echo(f"{csv_path}: {len(result.records)} rows valid.")


@app.command()
def export(
    input_path: Optional[Path] = INPUT_OPTION,
    labels: bool = LABELS_OPTION,
    column: Optional[List[str]] = COLUMN_OPTION,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Destination file (default: <EXPORT_DIR>/data_export_<date>.csv).",
    ),
) -> None:
    """
    Export all records (visible columns only) to CSV.
    """
    with _errors_to_exit():
        session = _load_session(input_path, labels, column)
        target = output or Path(get_settings().export_dir) / session.export_filename()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(session.export_to_csv(), encoding="utf-8", newline="")
        typer.echo(
            f"Exported {len(session.records)} rows x {len(session.visible_columns)} columns -> {target}"
        )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
