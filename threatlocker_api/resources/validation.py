"""Input validation for resource operations.

Validators return a FailureEnvelope describing the problem, or None when
the input is acceptable, so handlers can return the failure directly.
"""

import re
from datetime import UTC, datetime

from threatlocker_api.fetch.models import ErrorKind, FailureEnvelope, error_response


DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 500
MAX_LOOKBACK_DAYS = 365

GUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def _as_int(value: object, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        return default


def clamp_pagination(
    page_number: int | float | None = None,
    page_size: int | float | None = None,
) -> tuple[int, int]:
    """Normalize caller-supplied paging parameters.

    Args:
        page_number: Requested 1-based page (default: 1).
        page_size: Requested items per page (default: 25).

    Values that are not numbers fall back to the defaults.

    Returns:
        Tuple of (page_number, page_size) with page_number >= 1 and
        page_size in 1..500.
    """
    page = _as_int(page_number, DEFAULT_PAGE_NUMBER)
    size = _as_int(page_size, DEFAULT_PAGE_SIZE)
    return max(page, 1), min(max(size, 1), MAX_PAGE_SIZE)


def clamp_days(days: int | float | None, default: int) -> int:
    """Clamp a look-back window to 1..365 days, truncating fractions."""
    return min(max(_as_int(days, default), 1), MAX_LOOKBACK_DAYS)


def validate_guid(value: str, field: str) -> FailureEnvelope | None:
    """Check that a value is a GUID.

    Args:
        value: Value to check.
        field: Parameter name used in the error message.

    Returns:
        BAD_REQUEST failure, or None if the value is a GUID.
    """
    if isinstance(value, str) and GUID_PATTERN.match(value):
        return None
    return error_response(ErrorKind.BAD_REQUEST, f"{field} must be a valid GUID")


def _parse_datetime(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def validate_date_range(start_date: str, end_date: str) -> FailureEnvelope | None:
    """Check that two ISO 8601 timestamps form a valid range.

    Naive timestamps are taken as UTC. Equal bounds are allowed.

    Args:
        start_date: Range start.
        end_date: Range end.

    Returns:
        BAD_REQUEST failure, or None if the range is valid.
    """
    start = _parse_datetime(start_date)
    if start is None:
        return error_response(
            ErrorKind.BAD_REQUEST, "startDate must be a valid ISO 8601 date"
        )

    end = _parse_datetime(end_date)
    if end is None:
        return error_response(
            ErrorKind.BAD_REQUEST, "endDate must be a valid ISO 8601 date"
        )

    if start > end:
        return error_response(
            ErrorKind.BAD_REQUEST, "startDate must not be after endDate"
        )
    return None


def required_id_error(field: str, action: str) -> FailureEnvelope:
    """Failure for an action called without its identifier."""
    return error_response(
        ErrorKind.BAD_REQUEST, f"{field} is required for {action} action"
    )


def unknown_action_error(action: object) -> FailureEnvelope:
    """Failure for an action a resource does not support."""
    return error_response(ErrorKind.BAD_REQUEST, f"Unknown action: {action}")
