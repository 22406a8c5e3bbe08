"""Structured logging configuration."""

import logging
import sys
from enum import Enum
from typing import TextIO

import structlog


class LogLevel(str, Enum):
    """Log verbosity tiers.

    - ERROR: failures only
    - INFO: failures and notable events such as retries
    - DEBUG: every request and response
    """

    ERROR = "ERROR"
    INFO = "INFO"
    DEBUG = "DEBUG"

    @property
    def stdlib_level(self) -> int:
        """Matching standard library logging level."""
        return _STDLIB_LEVELS[self]

    @classmethod
    def parse(cls, value: "str | LogLevel | None") -> "LogLevel":
        """Parse a level name, falling back to INFO for unknown names.

        Args:
            value: Level name in any case, or None.

        Returns:
            Parsed LogLevel.
        """
        if isinstance(value, LogLevel):
            return value
        try:
            return cls((value or "").strip().upper())
        except ValueError:
            return cls.INFO


_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the application.

    Sets up structlog with JSON output format and standard processors
    for timestamps, log levels, and context binding. Output goes to
    stderr by default so stdout stays free for results.

    Args:
        level: Verbosity tier (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    stdlib_level = LogLevel.parse(level).stdlib_level

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(stdlib_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=stdlib_level,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_request_context(**context: str) -> None:
    """Bind context to all subsequent log messages.

    Args:
        **context: Key-value pairs, e.g. ``operation="computers"``.
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_request_context() -> None:
    """Clear bound context from log messages."""
    structlog.contextvars.clear_contextvars()
