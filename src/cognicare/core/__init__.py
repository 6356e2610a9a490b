"""Core services and utilities for CogniCare."""

from .logging import (
    LogContext,
    bind_contextvars,
    clear_contextvars,
    get_logger,
    log_exception,
    setup_logging,
    unbind_contextvars,
)

__all__ = [
    "LogContext",
    "bind_contextvars",
    "clear_contextvars",
    "get_logger",
    "log_exception",
    "setup_logging",
    "unbind_contextvars",
]
