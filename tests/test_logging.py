from __future__ import annotations

import json
import logging
import sys

import pytest

from ads_dashboard.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("ads_dashboard.service", logging.INFO, __file__, 1, "report %s", ("refreshed",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    line = JsonFormatter().format(_record(records=12, insights=9))
    payload = json.loads(line)

    assert payload["message"] == "report refreshed"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "ads_dashboard.service"
    assert payload["records"] == 12
    assert payload["insights"] == 9
    assert "lineno" not in payload
    assert "args" not in payload


def test_json_formatter_renders_exceptions() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in payload["exc_info"]


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_follows_argument_not_environment(monkeypatch, restore_root_logger) -> None:
    monkeypatch.setenv("ADS_LOG_FORMAT", "text")

    configure_logging(log_format="json")

    assert isinstance(restore_root_logger.handlers[-1].formatter, JsonFormatter)


def test_configure_logging_text_format(restore_root_logger) -> None:
    configure_logging(verbose=True, log_format="text")

    formatter = restore_root_logger.handlers[-1].formatter
    assert not isinstance(formatter, JsonFormatter)
    assert restore_root_logger.level == logging.DEBUG
