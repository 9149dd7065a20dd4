from __future__ import annotations

import json
import logging

from recordgrid.utils.logging import _json_formatter

EXPECTED_TOTAL = 5
EXPECTED_ROWS = 1000


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.total = EXPECTED_TOTAL
    record.record_id = "42"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["total"] == EXPECTED_TOTAL
    assert payload["record_id"] == "42"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"rows": EXPECTED_ROWS}

    payload = json.loads(_json_formatter(record))

    assert payload["rows"] == EXPECTED_ROWS
    assert "extra" not in payload


def test_json_formatter_stringifies_unserializable_values() -> None:
    record = _record()
    record.fields = {"name"}

    payload = json.loads(_json_formatter(record))

    assert payload["fields"] == "{'name'}"
