"""Pytest fixtures for CogniCare tests."""

from datetime import UTC, datetime

import pytest
import structlog

from cognicare.config.settings import Environment, Settings, get_settings


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Common Fixtures
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create settings for the test environment."""
    return Settings(
        environment=Environment.TEST,
        log_level="DEBUG",
        log_json=False,
        baseline_min_assessments=3,
    )


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for time-dependent checks."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
