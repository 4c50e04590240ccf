"""
Unit tests for structured logging utilities.
"""

import json
import logging
from io import StringIO

import pytest

from errchain import cause, new, wrap
from errchain.utils.logging import (
    setup_logging,
    get_logger,
    JSONFormatter,
    log_error_chain,
)


@pytest.fixture
def captured():
    """Logger adapter writing JSON lines into a buffer."""
    logger = get_logger("errchain.test", request_id="req_1")
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.logger.addHandler(handler)
    logger.logger.setLevel(logging.INFO)
    logger.logger.propagate = False

    yield logger, stream

    logger.logger.removeHandler(handler)
    logger.logger.propagate = True


def test_json_formatter(captured):
    """Test JSON formatter produces valid JSON output."""
    logger, stream = captured

    logger.info("Test message", extra={"job": "nightly"})

    log_data = json.loads(stream.getvalue())
    assert "timestamp" in log_data
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "errchain.test"
    assert log_data["message"] == "Test message"
    assert log_data["context"]["job"] == "nightly"
    assert log_data["context"]["request_id"] == "req_1"
    assert log_data["source"]["file"].endswith("test_logging.py")


def test_json_formatter_renders_error_chain(captured):
    """Test a logged chain is rendered through its string form."""
    logger, stream = captured
    err = wrap(new("disk full"), "save report")

    try:
        raise err
    except Exception:
        logger.exception("Request failed")

    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "ERROR"
    assert log_data["error"]["type"] == "ErrorChain"
    assert log_data["error"]["message"] == str(err)
    assert log_data["error"]["depth"] == 2
    assert log_data["error"]["cause"] == "disk full"


def test_json_formatter_foreign_error(captured):
    """Test other exceptions keep their stack trace."""
    logger, stream = captured

    try:
        raise ValueError("bad input")
    except ValueError:
        logger.exception("Request failed")

    log_data = json.loads(stream.getvalue())
    assert log_data["error"]["type"] == "ValueError"
    assert log_data["error"]["message"] == "bad input"
    assert "Traceback" in log_data["error"]["stack_trace"]


def test_get_logger_with_context():
    """Test getting logger with context."""
    logger = get_logger("test_module", request_id="abc")

    assert logger.extra["request_id"] == "abc"


def test_with_context_merges_fields():
    """Test with_context returns a new adapter with merged fields."""
    logger = get_logger("test_module", request_id="abc")

    child = logger.with_context(user="bob")

    assert child.extra == {"request_id": "abc", "user": "bob"}
    assert logger.extra == {"request_id": "abc"}


def test_adapter_leaves_caller_extra_unchanged(captured):
    """Test the adapter does not modify the extra dict it is given."""
    logger, stream = captured
    shared = {"job": "nightly"}

    logger.error("First", extra=shared)

    assert shared == {"job": "nightly"}
    log_data = json.loads(stream.getvalue())
    assert log_data["context"] == {"job": "nightly", "request_id": "req_1"}


def test_call_extra_overrides_adapter_context(captured):
    """Test fields passed on the call win over the adapter's context."""
    logger, stream = captured

    logger.info("Retry", extra={"request_id": "req_2"})

    log_data = json.loads(stream.getvalue())
    assert log_data["context"]["request_id"] == "req_2"
    assert logger.extra["request_id"] == "req_1"


def test_log_error_chain(captured):
    """Test error chain logging includes depth and root cause."""
    logger, stream = captured
    err = new("connection refused")
    wrap(err, "fetch %s", "/users")
    wrap(err, "render page")

    log_error_chain(logger, "Page failed", err, page="home")

    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "ERROR"
    assert log_data["message"] == "Page failed"
    assert log_data["context"]["error_chain"] == str(err)
    assert log_data["context"]["error_depth"] == 3
    assert log_data["context"]["root_cause"] == str(cause(err))
    assert log_data["context"]["error_context"] == {"page": "home"}


def test_log_error_chain_foreign_error(captured):
    """Test a plain exception is logged as a chain of one."""
    logger, stream = captured

    log_error_chain(logger, "Lookup failed", KeyError("id"))

    log_data = json.loads(stream.getvalue())
    assert log_data["context"]["error_depth"] == 1
    assert log_data["context"]["root_cause"] == "'id'"


def test_log_error_chain_accepts_record_attribute_names(captured):
    """Test context keys named like LogRecord attributes are logged."""
    logger, stream = captured

    log_error_chain(
        logger, "Import failed", new("no such module"), module="billing", filename="rates.csv"
    )

    log_data = json.loads(stream.getvalue())
    assert log_data["message"] == "Import failed"
    assert log_data["context"]["error_context"] == {"module": "billing", "filename": "rates.csv"}


def test_setup_logging():
    """Test root logger configuration."""
    root_logger = logging.getLogger()
    old_handlers = root_logger.handlers[:]
    old_level = root_logger.level

    try:
        setup_logging("debug", json_logs=False)
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert not isinstance(root_logger.handlers[0].formatter, JSONFormatter)

        setup_logging("warning", json_logs=True)
        assert root_logger.level == logging.WARNING
        assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
    finally:
        root_logger.handlers[:] = old_handlers
        root_logger.setLevel(old_level)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
