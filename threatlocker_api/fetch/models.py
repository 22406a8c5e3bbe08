"""Data models for the request layer.

Every public operation returns an Envelope: either a SuccessEnvelope
carrying the decoded payload (and pagination for page-oriented endpoints)
or a FailureEnvelope carrying an ErrorDetail. Failures are values, not
exceptions.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from threatlocker_api.fetch.constants import (
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_EXPONENTIAL_BASE,
    DEFAULT_MAX_RETRIES,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_SERVER_ERROR_MIN,
    HTTP_STATUS_UNAUTHORIZED,
    RETRYABLE_CLIENT_STATUSES,
)


class ErrorKind(str, Enum):
    """Classification of request failures.

    - BAD_REQUEST: 400, or a request rejected before it was sent
    - UNAUTHORIZED: 401
    - FORBIDDEN: 403
    - NOT_FOUND: 404
    - SERVER_ERROR: any other non-2xx HTTP status
    - NETWORK_ERROR: no HTTP response was received at all
    """

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


_STATUS_ERROR_KINDS: dict[int, ErrorKind] = {
    HTTP_STATUS_BAD_REQUEST: ErrorKind.BAD_REQUEST,
    HTTP_STATUS_UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    HTTP_STATUS_FORBIDDEN: ErrorKind.FORBIDDEN,
    HTTP_STATUS_NOT_FOUND: ErrorKind.NOT_FOUND,
}


def classify_status(status_code: int) -> ErrorKind:
    """Map an HTTP status code to an error kind.

    Total over all integers: anything without a dedicated kind is a
    SERVER_ERROR.

    Args:
        status_code: HTTP status code.

    Returns:
        The matching ErrorKind.
    """
    return _STATUS_ERROR_KINDS.get(status_code, ErrorKind.SERVER_ERROR)


def is_success_status(status_code: int) -> bool:
    """Check whether a status code is in the 2xx range."""
    return HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX


class ErrorDetail(BaseModel):
    """Typed error carried by a FailureEnvelope.

    Serializes as ``{"code", "message", "statusCode"?}``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    kind: ErrorKind = Field(alias="code", description="Classification of the error")
    message: str = Field(description="Human-readable message")
    status_code: int | None = Field(
        default=None,
        alias="statusCode",
        description="HTTP status code, absent for transport failures",
    )


class Pagination(BaseModel):
    """Normalized page metadata.

    Both upstream wire encodings are parsed into this one shape, so callers
    never need to know which encoding an endpoint uses.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    page: Annotated[int, Field(ge=1)]
    page_size: Annotated[int, Field(ge=1)]
    total_items: Annotated[int, Field(ge=0)]
    total_pages: Annotated[int, Field(ge=0)]
    has_more: bool
    next_page: int | None = None

    @classmethod
    def from_counts(
        cls,
        page: int,
        page_size: int,
        total_items: int,
        total_pages: int,
    ) -> "Pagination":
        """Build pagination for a single upstream page.

        Derives ``has_more`` and ``next_page`` from the counts so the two
        always agree with ``page < total_pages``.

        Args:
            page: 1-based page index.
            page_size: Items per page.
            total_items: Total items across all pages.
            total_pages: Total number of pages.

        Returns:
            Pagination for the page.
        """
        has_more = page < total_pages
        return cls(
            page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_more=has_more,
            next_page=page + 1 if has_more else None,
        )


class SuccessEnvelope(BaseModel):
    """Successful result of an operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: Literal[True] = True
    data: Any = None
    pagination: Pagination | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON result surface.

        Returns:
            ``{"success": True, "data": ...}`` plus ``pagination`` when set.
        """
        result: dict[str, Any] = {"success": True, "data": self.data}
        if self.pagination is not None:
            result["pagination"] = self.pagination.model_dump(by_alias=True)
        return result


class FailureEnvelope(BaseModel):
    """Failed result of an operation. Never carries pagination."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: Literal[False] = False
    error: ErrorDetail

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON result surface.

        Returns:
            ``{"success": False, "error": {"code", "message", "statusCode"?}}``.
        """
        return {
            "success": False,
            "error": self.error.model_dump(
                by_alias=True, exclude_none=True, mode="json"
            ),
        }


Envelope = SuccessEnvelope | FailureEnvelope


def success_response(
    data: Any, pagination: Pagination | None = None
) -> SuccessEnvelope:
    """Wrap a payload in a SuccessEnvelope."""
    return SuccessEnvelope(data=data, pagination=pagination)


def error_response(
    kind: ErrorKind, message: str, status_code: int | None = None
) -> FailureEnvelope:
    """Wrap an error in a FailureEnvelope.

    A zero status code is treated as absent.
    """
    return FailureEnvelope(
        error=ErrorDetail(kind=kind, message=message, status_code=status_code or None)
    )


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    Pure exponential backoff with no jitter and no cap:
    delay = base_delay_ms * (exponential_base ^ attempt)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: Annotated[int, Field(ge=0)] = DEFAULT_MAX_RETRIES
    base_delay_ms: Annotated[int, Field(ge=0, le=60000)] = DEFAULT_BASE_DELAY_MS
    exponential_base: Annotated[float, Field(ge=1.0, le=5.0)] = (
        DEFAULT_EXPONENTIAL_BASE
    )

    @staticmethod
    def is_retryable_status(status_code: int) -> bool:
        """Check whether an HTTP status is transient.

        Args:
            status_code: HTTP status code.

        Returns:
            True for 408, 417, 429 and any 5xx or higher.
        """
        return (
            status_code in RETRYABLE_CLIENT_STATUSES
            or status_code >= HTTP_STATUS_SERVER_ERROR_MIN
        )

    def should_retry(self, status_code: int | None, attempt: int) -> bool:
        """Determine if a failed attempt should be retried.

        Args:
            status_code: HTTP status of the failed attempt, or None when no
                response was received.
            attempt: Current attempt number (0-indexed).

        Returns:
            True if the request should be retried.
        """
        if attempt >= self.max_retries:
            return False

        if status_code is None:
            return True

        return self.is_retryable_status(status_code)

    def get_delay_ms(self, attempt: int) -> int:
        """Calculate delay before the next retry attempt.

        Args:
            attempt: Attempt that just failed (0-indexed).

        Returns:
            Delay in milliseconds.
        """
        return int(self.base_delay_ms * (self.exponential_base**attempt))
