"""Structured logging tests — JSON formatter fields and idempotent setup."""

import json
import logging

from console_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "console_api.api.operation_set", logging.INFO, __file__, 1,
        "nodes: Operation 'x' not found", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "console_api.api.operation_set"
    assert log["message"] == "nodes: Operation 'x' not found"
    assert "timestamp" in log


def test_json_formatter_surfaces_extras():
    log = json.loads(JSONFormatter().format(
        _record(service="nodes", operation="x", status_code=404, session=None),
    ))
    assert log["service"] == "nodes"
    assert log["status_code"] == 404
    assert "session" not in log


def test_setup_logging_replaces_its_own_handler():
    before = list(logging.root.handlers)
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        ours = [h for h in logging.root.handlers if h.get_name() == "console_api"]
        assert len(ours) == 1
        assert logging.root.level == logging.WARNING
    finally:
        for handler in list(logging.root.handlers):
            if handler not in before:
                logging.root.removeHandler(handler)
