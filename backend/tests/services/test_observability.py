"""Structured Logging — JSON formatter surfaces chore context fields."""

import json
import logging

from choretrack.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "choretrack.test", logging.WARNING, __file__, 1, "Chore complete rejected", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context_fields():
    line = JSONFormatter().format(_record(chore_id="c-1", expected_version=2, error_code="VERSION_CONFLICT"))
    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Chore complete rejected"
    assert payload["chore_id"] == "c-1"
    assert payload["expected_version"] == 2
    assert payload["error_code"] == "VERSION_CONFLICT"


def test_json_formatter_omits_missing_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert "household_id" not in payload
    assert "user_id" not in payload
