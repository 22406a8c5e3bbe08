"""Unit tests for logging configuration."""

import io
import json
import logging

import pytest
import structlog

from threatlocker_api.observability.logging import (
    LogLevel,
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)


class TestLogLevel:
    """Tests for verbosity tier parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("ERROR", LogLevel.ERROR),
            ("info", LogLevel.INFO),
            ("Debug", LogLevel.DEBUG),
            ("TRACE", LogLevel.INFO),
            ("", LogLevel.INFO),
            (None, LogLevel.INFO),
        ],
    )
    def test_parse(self, raw: str | None, expected: LogLevel) -> None:
        """Test parsing with INFO fallback."""
        assert LogLevel.parse(raw) == expected

    def test_stdlib_levels(self) -> None:
        """Test mapping to standard library levels."""
        assert LogLevel.ERROR.stdlib_level == logging.ERROR
        assert LogLevel.INFO.stdlib_level == logging.INFO
        assert LogLevel.DEBUG.stdlib_level == logging.DEBUG


class TestConfigureLogging:
    """Tests for structlog configuration."""

    def test_json_output(self) -> None:
        """Test that events are written as JSON lines."""
        output = io.StringIO()
        configure_logging(LogLevel.INFO, output=output)

        get_logger().info("api_request_retry", attempt=0)

        record = json.loads(output.getvalue().strip())
        assert record["event"] == "api_request_retry"
        assert record["attempt"] == 0
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_filters_below_level(self) -> None:
        """Test that ERROR hides info and debug events."""
        output = io.StringIO()
        configure_logging("ERROR", output=output)

        log = get_logger()
        log.debug("hidden")
        log.info("hidden")
        log.error("shown")

        lines = output.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "shown"

    def test_debug_shows_everything(self) -> None:
        """Test that DEBUG lets debug events through."""
        output = io.StringIO()
        configure_logging(LogLevel.DEBUG, output=output)

        get_logger().debug("api_request")

        assert "api_request" in output.getvalue()

    def test_bound_context(self) -> None:
        """Test that bound context is merged into events."""
        output = io.StringIO()
        configure_logging(LogLevel.INFO, output=output)

        bind_request_context(operation="computers")
        try:
            get_logger().info("resource_call")
        finally:
            clear_request_context()

        record = json.loads(output.getvalue().strip())
        assert record["operation"] == "computers"
        assert structlog.contextvars.get_contextvars() == {}
