"""
Tests for the logging helpers.
"""

import pytest
import structlog
from structlog.testing import capture_logs

from teamup.logging import LogContext, bind_context, clear_context, get_logger, log_timing


@log_timing("sample")
def _succeed(value):
    return value * 2


@log_timing("sample")
def _fail():
    raise KeyError("missing")


def test_log_timing_success():
    with capture_logs() as logs:
        assert _succeed(21) == 42

    events = [entry for entry in logs if entry["event"] == "sample_complete"]
    assert len(events) == 1
    assert events[0]["elapsed_ms"] >= 0


def test_log_timing_failure_reraises():
    with capture_logs() as logs:
        with pytest.raises(KeyError):
            _fail()

    events = [entry for entry in logs if entry["event"] == "sample_failed"]
    assert events[0]["error_type"] == "KeyError"


def test_log_context_binds_and_unbinds():
    clear_context()
    bind_context(request_id="r1")

    with LogContext(connection_id="c1"):
        assert structlog.contextvars.get_contextvars() == {"request_id": "r1", "connection_id": "c1"}

    assert structlog.contextvars.get_contextvars() == {"request_id": "r1"}
    clear_context()
    assert structlog.contextvars.get_contextvars() == {}


def test_get_logger_returns_bound_logger():
    logger = get_logger("tests")
    with capture_logs() as logs:
        logger.info("something_happened", answer=42)
    assert logs == [{"event": "something_happened", "answer": 42, "log_level": "info"}]
