"""
Pytest configuration for recordgrid.

Provides fixtures for:
- A fresh session seeded with the five sample records
- An empty session with the default columns
- CSV payloads used across importer and session tests
"""

from __future__ import annotations

from typing import List

import pytest

from recordgrid.domain.models import Record, sample_records
from recordgrid.session import DataTableSession


@pytest.fixture
def records() -> List[Record]:
    return sample_records()


@pytest.fixture
def session(records: List[Record]) -> DataTableSession:
    """
    Session with the default columns and the sample dataset, 10 rows per page.
    """
    return DataTableSession(records=records)


@pytest.fixture
def empty_session() -> DataTableSession:
    return DataTableSession()


@pytest.fixture
def valid_csv() -> str:
    return (
        "name,email,age,role,department,location\n"
        "  Ada Lovelace ,ADA@Example.com,36,Analyst,Research,London\n"
        "Alan Turing,alan@example.org,41,,,\n"
        "Grace Hopper,grace@navy.mil,85,Admiral,Navy, Arlington \n"
    )


@pytest.fixture
def csv_with_bad_age() -> str:
    return (
        "name,email,age,role\n"
        "Ada Lovelace,ada@example.com,36,Analyst\n"
        "Alan Turing,alan@example.org,abc,Mathematician\n"
        "Grace Hopper,grace@navy.mil,85,Admiral\n"
    )
