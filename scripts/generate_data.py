"""
Sample CSV generator for recordgrid.

Writes deterministic pseudo-random people records using the import headers
(`name,email,age,role,department,location`). Optionally corrupts a few rows
so the import validator's error reporting can be tried out.
"""

from __future__ import annotations

import csv
import random
import sys
import time
from pathlib import Path

import typer

app = typer.Typer(help="Generate a sample CSV file for `recordgrid show --input`.")

HEADER = ["name", "email", "age", "role", "department", "location"]

FIRST_NAMES = ["John", "Jane", "Bob", "Alice", "Charlie", "Dana", "Eve", "Frank", "Grace", "Hiro"]
LAST_NAMES = ["Doe", "Smith", "Johnson", "Brown", "Wilson", "Garcia", "Lee", "Khan", "Novak", "Ito"]
ROLES = {
    "Engineering": ["Frontend Developer", "Senior Engineer", "DevOps Engineer", "QA Engineer"],
    "Product": ["Product Manager", "Product Analyst"],
    "Design": ["UX Designer", "Visual Designer"],
    "Sales": ["Account Executive", "Sales Engineer"],
}
LOCATIONS = ["San Francisco", "New York", "Austin", "Seattle", "Portland", "Remote"]

# (column index, bad value) pairs used when --invalid is set
_CORRUPTIONS = [(0, ""), (1, "not-an-email"), (2, "abc"), (2, "150")]


def _generate_rows_csv(csv_path: Path, rows: int, seed: int, invalid: int = 0) -> None:
    rng = random.Random(seed)
    bad_rows = set(rng.sample(range(rows), min(invalid, rows)))

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        for i in range(rows):
            first = rng.choice(FIRST_NAMES)
            last = rng.choice(LAST_NAMES)
            department = rng.choice(sorted(ROLES))
            row = [
                f"{first} {last}",
                f"{first}.{last}{i}@example.com".lower(),
                str(rng.randint(21, 65)),
                rng.choice(ROLES[department]),
                department,
                rng.choice(LOCATIONS),
            ]
            if i in bad_rows:
                index, value = rng.choice(_CORRUPTIONS)
                row[index] = value
            writer.writerow(row)


@app.command()
def main(
    rows: int = typer.Option(
        50,
        "--rows",
        "-r",
        min=0,
        help="Number of data rows to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    invalid: int = typer.Option(
        0,
        "--invalid",
        min=0,
        help="Number of rows to corrupt (missing name, bad email or bad age).",
    ),
    output: Path = typer.Option(
        Path("sample_import.csv"),
        "--output",
        "-o",
        help="CSV output path.",
    ),
) -> None:
    """
    Generate a sample import CSV.
    """
    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)

    typer.echo(f"Generating {rows:,} rows -> {output} (seed={seed}, invalid={invalid})")
    _generate_rows_csv(output, rows=rows, seed=seed, invalid=invalid)
    typer.echo(f"CSV generation completed in {time.perf_counter() - start:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
