"""Unit tests for structured logging."""
# ruff: noqa: ARG002  # Fixtures used for setup side effects

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
import structlog

from cognicare.config.settings import Environment
from cognicare.core.logging import (
    LogContext,
    add_environment_info,
    bind_contextvars,
    clear_contextvars,
    get_logger,
    log_exception,
    setup_logging,
    unbind_contextvars,
)


class TestAddEnvironmentInfo:
    """Tests for add_environment_info processor."""

    def test_adds_environment(self):
        """Test environment is added to event dict."""
        mock_settings = MagicMock()
        mock_settings.environment = Environment.PRODUCTION

        with patch("cognicare.core.logging.get_settings", return_value=mock_settings):
            result = add_environment_info(None, "info", {})

        assert result["environment"] == "production"


class TestSetupLogging:
    """Tests for setup_logging configuration."""

    def test_json_output(self, capsys):
        """Test JSON rendering includes bound fields and logger name."""
        setup_logging(log_level="INFO", json_format=True)

        get_logger("cognicare.test").info("Risk score updated", score=42)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "Risk score updated"
        assert entry["score"] == 42
        assert entry["level"] == "info"
        assert entry["logger"] == "cognicare.test"
        assert "timestamp" in entry
        assert "environment" in entry

    def test_level_filtering(self, capsys):
        """Test entries below the configured level are dropped."""
        setup_logging(log_level="WARNING", json_format=True)

        logger = get_logger("cognicare.test")
        logger.info("hidden")
        logger.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_without_timestamp(self, capsys):
        """Test timestamps can be disabled."""
        setup_logging(log_level="INFO", json_format=True, add_timestamp=False)

        get_logger().info("no time")

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert "timestamp" not in entry

    def test_console_output(self, capsys):
        """Test console rendering."""
        setup_logging(log_level="DEBUG", json_format=False)

        get_logger("cognicare.test").debug("console entry", user_id="user-1")

        out = capsys.readouterr().out
        assert "console entry" in out
        assert "user-1" in out

    def test_stdlib_records_routed(self):
        """Test standard library loggers share the root handler."""
        setup_logging(log_level="INFO", json_format=True)

        root = logging.getLogger()

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.INFO


class TestContextVars:
    """Tests for context variable helpers."""

    @pytest.fixture(autouse=True)
    def clean_context(self):
        """Clear context before and after each test."""
        clear_contextvars()
        yield
        clear_contextvars()

    def test_log_context_binds_and_unbinds(self):
        """Test LogContext is temporary."""
        with LogContext(user_id="user-1", operation="refresh"):
            bound = structlog.contextvars.get_contextvars()
            assert bound == {"user_id": "user-1", "operation": "refresh"}

        assert structlog.contextvars.get_contextvars() == {}

    def test_context_in_output(self, capsys):
        """Test bound values appear in log entries."""
        setup_logging(log_level="INFO", json_format=True)

        with LogContext(user_id="user-1"):
            get_logger("cognicare.test").info("inside")

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["user_id"] == "user-1"

    def test_bind_and_unbind(self):
        """Test the bind helpers."""
        bind_contextvars(a=1, b=2)
        unbind_contextvars("a")

        assert structlog.contextvars.get_contextvars() == {"b": 2}


class TestLogException:
    """Tests for log_exception."""

    def test_logs_error_details(self):
        """Test exception type and message are logged."""
        logger = MagicMock()
        error = ValueError("bad weights")

        log_exception(logger, error, user_id="user-1")

        logger.exception.assert_called_once_with(
            "exception_occurred",
            error_type="ValueError",
            error_message="bad weights",
            user_id="user-1",
        )
