from __future__ import annotations

import itertools

import pytest

from recordgrid.domain.errors import (
    InvalidAgeError,
    InvalidEmailFormatError,
    InvalidNumberError,
    MalformedInputError,
    MissingRequiredFieldError,
)
from recordgrid.domain.models import Column, ColumnType, default_columns
from recordgrid.engine.importer import DEFAULT_ROLE, label_header_map, parse_csv

HEADER = "name,email,age,role\n"


def _single_row_error(row: str):
    result = parse_csv(HEADER + row + "\n")
    assert not result.ok
    assert len(result.errors) == 1
    return result.errors[0]


def test_valid_rows_are_normalized(valid_csv: str):
    result = parse_csv(valid_csv)

    assert result.ok
    assert len(result.records) == 3
    ada, alan, grace = result.records
    assert ada.name == "Ada Lovelace"
    assert ada.email == "ada@example.com"
    assert ada.age == 36
    assert ada.department == "Research"
    assert alan.role == DEFAULT_ROLE
    assert alan.department == ""
    assert alan.location == ""
    assert grace.location == "Arlington"


def test_imported_records_get_fresh_unique_ids(valid_csv: str):
    result = parse_csv(valid_csv)
    ids = [r.id for r in result.records]
    assert len(set(ids)) == 3
    assert all(record_id.startswith("imported_") for record_id in ids)


def test_id_factory_is_used(valid_csv: str):
    counter = itertools.count(1)
    result = parse_csv(valid_csv, id_factory=lambda: f"row-{next(counter)}")
    assert [r.id for r in result.records] == ["row-1", "row-2", "row-3"]


def test_bad_age_rejects_whole_import(csv_with_bad_age: str):
    result = parse_csv(csv_with_bad_age)

    assert result.records == []
    assert len(result.errors) == 1
    error = result.errors[0]
    assert isinstance(error, InvalidAgeError)
    assert error.row == 2
    assert result.messages == ["Row 2: Invalid age (must be a number between 0-120)"]


def test_every_failing_row_is_reported():
    text = HEADER + ",a@b.co,30,x\nok,bad-email,30,x\nok,a@b.co,200,x\nok,a@b.co,30,x\n"
    result = parse_csv(text)

    assert [type(e) for e in result.errors] == [
        MissingRequiredFieldError,
        InvalidEmailFormatError,
        InvalidAgeError,
    ]
    assert [e.row for e in result.errors] == [1, 2, 3]


def test_rules_short_circuit_in_order():
    # missing name wins over bad email and bad age
    assert isinstance(_single_row_error("  ,not-an-email,abc,x"), MissingRequiredFieldError)
    # bad email wins over bad age
    assert isinstance(_single_row_error("Ann,ann@nowhere,abc,x"), InvalidEmailFormatError)


@pytest.mark.parametrize("email", ["ann@localhost", "an n@example.com", "ann@@example.com", "ann.example.com"])
def test_invalid_email_formats(email: str):
    assert isinstance(_single_row_error(f"Ann,{email},30,x"), InvalidEmailFormatError)


@pytest.mark.parametrize("age", ["-1", "121", "30.5", "abc", "", "\uff13\uff10", "3_0"])
def test_invalid_ages(age: str):
    assert isinstance(_single_row_error(f"Ann,ann@example.com,{age},x"), InvalidAgeError)


@pytest.mark.parametrize("age, expected", [("0", 0), ("120", 120), (" 42 ", 42)])
def test_age_boundaries_are_accepted(age: str, expected: int):
    result = parse_csv(HEADER + f"Ann,ann@example.com,{age},x\n")
    assert result.ok
    assert result.records[0].age == expected


def test_missing_email_column_is_a_missing_field():
    result = parse_csv("name,age\nAnn,30\n")
    assert isinstance(result.errors[0], MissingRequiredFieldError)


def test_header_only_payload_is_valid_and_empty():
    result = parse_csv(HEADER)
    assert result.ok
    assert result.records == []


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   \n",
        'name,email,age\n"Ann,ann@example.com,30\n',
        "name,email,age\nAnn,ann@example.com,30,extra\n",
        "name,name,age\nAnn,Bob,30\n",
    ],
)
def test_malformed_payloads_raise(text: str):
    with pytest.raises(MalformedInputError):
        parse_csv(text)


def test_header_map_translates_labels():
    text = "Name,Email,Age,Role\nAnn,ann@example.com,30,Lead\n"

    without_map = parse_csv(text)
    with_map = parse_csv(text, header_map=label_header_map(default_columns()))

    assert isinstance(without_map.errors[0], MissingRequiredFieldError)
    assert with_map.ok
    assert with_map.records[0].role == "Lead"


def test_header_names_are_case_exact():
    result = parse_csv("NAME,email,age\nAnn,ann@example.com,30\n")
    assert isinstance(result.errors[0], MissingRequiredFieldError)


def test_registered_custom_columns_are_imported_and_typed():
    columns = default_columns() + [
        Column(id="salary", label="Salary", type=ColumnType.NUMBER),
        Column(id="manager", label="Manager", type=ColumnType.EMAIL),
        Column(id="team", label="Team"),
    ]
    text = (
        "name,email,age,salary,manager,team,unknown\n"
        "Ann,ann@example.com,30,1000,Boss@Example.com,Core,ignored\n"
        "Bob,bob@example.com,31,,,,\n"
    )

    result = parse_csv(text, columns=columns)

    assert result.ok
    ann, bob = result.records
    assert ann.extra == {"salary": 1000, "manager": "boss@example.com", "team": "Core"}
    assert bob.extra == {}


def test_custom_column_type_errors_are_collected():
    columns = default_columns() + [
        Column(id="salary", label="Salary", type=ColumnType.NUMBER),
        Column(id="manager", label="Manager", type=ColumnType.EMAIL),
    ]
    text = (
        "name,email,age,salary,manager\n"
        "Ann,ann@example.com,30,lots,\n"
        "Bob,bob@example.com,31,2.5,nobody\n"
    )

    result = parse_csv(text, columns=columns)

    assert isinstance(result.errors[0], InvalidNumberError)
    assert isinstance(result.errors[1], InvalidEmailFormatError)
    assert result.messages == [
        "Row 1: Invalid number for column 'Salary'",
        "Row 2: Invalid email format for column 'Manager'",
    ]


@pytest.mark.parametrize("value", ["1_000", "\uff11\uff10", "nan", "inf", "1e999", "0x10"])
def test_number_columns_reject_non_decimal_text(value: str):
    columns = default_columns() + [Column(id="n", label="N", type=ColumnType.NUMBER)]
    result = parse_csv(f"name,email,age,n\nAnn,ann@example.com,30,{value}\n", columns=columns)

    assert result.records == []
    assert isinstance(result.errors[0], InvalidNumberError)


@pytest.mark.parametrize("value, expected", [("-7", -7), ("2.5", 2.5), (".5", 0.5), ("1e3", 1000.0)])
def test_number_columns_accept_decimal_text(value: str, expected: float):
    columns = default_columns() + [Column(id="n", label="N", type=ColumnType.NUMBER)]
    result = parse_csv(f"name,email,age,n\nAnn,ann@example.com,30,{value}\n", columns=columns)

    assert result.ok
    assert result.records[0].extra == {"n": expected}
