"""Unit tests for structured logging helpers."""

import logging

import pytest
import structlog

from utils.logging import (
    add_request_id,
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)


@pytest.mark.unit
class TestRequestContext:
    """Tests for request id correlation."""

    def test_request_id_injected(self):
        set_request_context("req-123")
        try:
            event = add_request_id(None, "info", {"event": "hello"})
        finally:
            clear_request_context()

        assert event["request_id"] == "req-123"

    def test_extra_fields_bound_and_cleared(self):
        clear_request_context()
        set_request_context("req-1", path="/api/health", method="GET")

        assert structlog.contextvars.get_contextvars() == {"path": "/api/health", "method": "GET"}

        clear_request_context()

        assert structlog.contextvars.get_contextvars() == {}

    def test_no_request_id(self):
        clear_request_context()

        assert "request_id" not in add_request_id(None, "info", {"event": "hello"})


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_levels(self):
        setup_logging("DEBUG", json_output=True)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert get_logger("tests") is not None
