"""Structured Logging — JSON output fields and handler installation."""

import json
import logging

from smp_directory.infrastructure.observability import (
    JSONFormatter, SMPContextFilter, setup_logging,
)


def _record(**extra):
    record = logging.LogRecord(
        "smp_directory.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_has_message_and_context_fields():
    record = _record(operation="getBusinessCard", service_group_id="s::v")
    SMPContextFilter("SMP-1").filter(record)
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "hello world"
    assert entry["level"] == "WARNING"
    assert entry["operation"] == "getBusinessCard"
    assert entry["service_group_id"] == "s::v"
    assert entry["smp_id"] == "SMP-1"


def test_absent_fields_are_omitted():
    entry = json.loads(JSONFormatter().format(_record()))
    assert "operation" not in entry
    assert "error_code" not in entry


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        first = setup_logging("DEBUG", "text", "SMP-1")
        second = setup_logging("INFO", "json", "SMP-1")
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.INFO
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(level)
