"""Tests for logging configuration and formatters."""

import json
import logging
import sys

import pytest

from faculty_records.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from faculty_records.logging.context import log_context


@pytest.fixture
def logger():
    """Create a test logger with handler for capturing output."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield root_logger

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def key_value_formatter():
    return KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ============================================================================
# JSON formatter
# ============================================================================


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["logger"] == "test"
    assert log_obj["message"] == "Test message"
    assert "name" not in log_obj


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter keeps structured extras as JSON values."""
    record = logger.makeRecord(
        "test",
        logging.WARNING,
        "test.py",
        1,
        "2 directory entries",
        (),
        None,
        extra={
            "event": "directory.lookup.ambiguous",
            "candidates": ["wchen", "wc2"],
            "row_count": 42,
            "from_cache": False,
        },
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "directory.lookup.ambiguous"
    assert log_obj["candidates"] == ["wchen", "wc2"]
    assert log_obj["row_count"] == 42
    assert log_obj["from_cache"] is False


def test_json_formatter_stringifies_other_objects(logger):
    """Test values JSON cannot encode are rendered with str()."""
    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "msg", (), None, extra={"document": object()}
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["document"].startswith("<object object")


def test_json_formatter_with_context(logger):
    """Test full pipeline: context + filter + JSON formatter."""
    formatter = JSONFormatter()
    filter = ContextualFilter(environment="test")

    with log_context(run_id="abc123", academic_year="2015-16"):
        record = logger.makeRecord(
            "test",
            logging.INFO,
            "test.py",
            1,
            "Processing year",
            (),
            None,
            extra={"event": "year.run.started"},
        )
        filter.filter(record)
        log_obj = json.loads(formatter.format(record))

    assert log_obj["event"] == "year.run.started"
    assert log_obj["service"] == "faculty-records"
    assert log_obj["environment"] == "test"
    assert log_obj["run_id"] == "abc123"
    assert log_obj["academic_year"] == "2015-16"


def test_timestamp_format_in_json(logger):
    """Test that JSON formatter produces ISO-8601 UTC timestamps."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    timestamp = json.loads(JSONFormatter().format(record))["timestamp"]

    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24  # 2016-09-01T10:30:00.123Z


def test_json_formatter_includes_exception(logger):
    """Test exception text is carried in exc_info."""
    try:
        raise RuntimeError("catalog unreadable")
    except RuntimeError:
        record = logger.makeRecord(
            "test", logging.ERROR, "test.py", 1, "failed", (), sys.exc_info()
        )

    log_obj = json.loads(JSONFormatter().format(record))

    assert "catalog unreadable" in log_obj["exc_info"]


# ============================================================================
# Key-value formatter
# ============================================================================


def test_key_value_formatter_basic(logger):
    """Test KeyValueFormatter produces readable output."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    output = key_value_formatter().format(record)

    assert "[INFO]" in output
    assert "Test message" in output


def test_key_value_formatter_with_extras(logger):
    """Test KeyValueFormatter renders extras as sorted key=value pairs."""
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Lookup",
        (),
        None,
        extra={
            "event": "directory.lookup.failed",
            "faculty_name": "Wei Chen",
            "had_errors": True,
            "identifier": None,
        },
    )

    output = key_value_formatter().format(record)

    assert "event=directory.lookup.failed" in output
    assert 'faculty_name="Wei Chen"' in output
    assert "had_errors=true" in output
    assert "identifier=null" in output
    assert output.index("event=") < output.index("faculty_name=")


def test_key_value_formatter_skips_static_fields(logger):
    """Test service and environment are left out of human-readable lines."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "msg", (), None)
    ContextualFilter(environment="test").filter(record)

    output = key_value_formatter().format(record)

    assert "service=" not in output
    assert "environment=" not in output


# ============================================================================
# configure_logging
# ============================================================================


def test_configure_logging_invalid_level():
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format(restore_root_logger):
    """Test configure_logging installs one stderr handler with the JSON formatter."""
    configure_logging(level="DEBUG", format_type="json", environment="test")

    root_logger = restore_root_logger
    assert len(root_logger.handlers) == 1
    handler = root_logger.handlers[0]
    assert isinstance(handler.formatter, JSONFormatter)
    assert handler.stream is sys.stderr
    assert root_logger.level == logging.DEBUG


def test_configure_logging_key_value_format(restore_root_logger):
    """Test configure_logging with key-value format."""
    configure_logging(level="info", format_type="key-value", environment="test")

    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, KeyValueFormatter)
    assert any(isinstance(f, ContextualFilter) for f in handler.filters)
    assert restore_root_logger.level == logging.INFO


def test_configure_logging_quiets_urllib3(restore_root_logger):
    """Test HTTP client debug chatter stays at WARNING."""
    configure_logging(level="DEBUG", format_type="key-value")

    assert logging.getLogger("urllib3").level == logging.WARNING
