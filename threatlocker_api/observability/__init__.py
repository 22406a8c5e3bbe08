"""Observability module for logging."""

from threatlocker_api.observability.logging import (
    LogLevel,
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)


__all__ = [
    "LogLevel",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_logger",
]
