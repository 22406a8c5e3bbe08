"""Redaction utilities for logging.

Nothing here is ever applied to data returned to a caller; these helpers
only prepare values that are about to be written to a log.
"""

from collections.abc import Mapping
from typing import Any

from threatlocker_api.fetch.constants import (
    MAX_REDACTION_DEPTH,
    SECRET_VISIBLE_CHARS,
    SHORT_SECRET_LENGTH,
    SHORT_SECRET_MASK,
)


# Headers that must never appear in logs
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "x-api-key",
        "proxy-authorization",
        "set-cookie",
    }
)

REDACTED_VALUE = "[REDACTED]"


def mask_secret(secret: str) -> str:
    """Mask a secret, keeping only its first and last four characters.

    Args:
        secret: The secret to mask.

    Returns:
        ``****`` for secrets of 8 characters or fewer, otherwise the first
        four characters, one star per hidden character, and the last four.
    """
    if len(secret) <= SHORT_SECRET_LENGTH:
        return SHORT_SECRET_MASK
    hidden = len(secret) - 2 * SECRET_VISIBLE_CHARS
    return (
        secret[:SECRET_VISIBLE_CHARS]
        + "*" * hidden
        + secret[-SECRET_VISIBLE_CHARS:]
    )


def redact_secret(value: Any, secret: str, max_depth: int = MAX_REDACTION_DEPTH) -> Any:
    """Replace every occurrence of a secret inside a structured value.

    Walks mappings, lists and tuples, returning a structurally identical
    copy. Descent stops at ``max_depth``: the subtree found there is
    returned unmodified, so deep or self-referential structures terminate
    instead of failing.

    Args:
        value: Arbitrary value destined for a log.
        secret: Exact string to mask.
        max_depth: Maximum nesting depth to descend into.

    Returns:
        Copy of ``value`` with the secret masked.
    """
    if not secret:
        return value
    return _redact(value, secret, mask_secret(secret), 0, max_depth)


def _redact(value: Any, secret: str, mask: str, depth: int, max_depth: int) -> Any:
    if depth >= max_depth:
        return value

    if isinstance(value, str):
        return value.replace(secret, mask)

    if isinstance(value, Mapping):
        return {
            key: _redact(item, secret, mask, depth + 1, max_depth)
            for key, item in value.items()
        }

    if isinstance(value, list | tuple):
        items = [_redact(item, secret, mask, depth + 1, max_depth) for item in value]
        return items if isinstance(value, list) else tuple(items)

    return value


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Redact sensitive headers for logging.

    Replaces the values of Authorization, Cookie, and other
    sensitive headers with [REDACTED] for safe logging.

    Args:
        headers: Original headers.

    Returns:
        New dictionary with sensitive values redacted.
    """
    result: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            result[key] = REDACTED_VALUE
        else:
            result[key] = value
    return result


def is_sensitive_header(header_name: str) -> bool:
    """Check if a header name is sensitive.

    Args:
        header_name: The header name to check.

    Returns:
        True if the header should be redacted.
    """
    return header_name.lower() in SENSITIVE_HEADERS
