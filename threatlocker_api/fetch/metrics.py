"""Metrics collection for the request layer."""

from dataclasses import dataclass, field
from typing import ClassVar

from threatlocker_api.fetch.models import ErrorKind


@dataclass
class FetchMetrics:
    """Metrics for API request operations.

    Singleton class that tracks request-related metrics including
    response counts, retries, failures and auto-pagination.
    """

    http_requests_total: dict[int, int] = field(default_factory=dict)
    http_retry_total: int = 0
    http_failures_total: dict[str, int] = field(default_factory=dict)
    http_duration_ms_total: float = 0.0
    http_request_count: int = 0
    pages_fetched_total: int = 0
    partial_aggregations_total: int = 0

    _instance: ClassVar["FetchMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "FetchMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_request(self, status_code: int) -> None:
        """Record an HTTP response.

        Args:
            status_code: HTTP status code.
        """
        self.http_requests_total[status_code] = (
            self.http_requests_total.get(status_code, 0) + 1
        )
        self.http_request_count += 1

    def record_retry(self) -> None:
        """Record a retry attempt."""
        self.http_retry_total += 1

    def record_failure(self, kind: ErrorKind) -> None:
        """Record a failed operation.

        Args:
            kind: Classification of the failure.
        """
        key = kind.value
        self.http_failures_total[key] = self.http_failures_total.get(key, 0) + 1

    def record_duration(self, duration_ms: float) -> None:
        """Record operation duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.http_duration_ms_total += duration_ms

    def record_aggregation(self, pages: int, partial: bool) -> None:
        """Record a finished auto-pagination run.

        Args:
            pages: Number of pages merged.
            partial: Whether a later page failed and the result was cut short.
        """
        self.pages_fetched_total += pages
        if partial:
            self.partial_aggregations_total += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "http_requests_total": dict(self.http_requests_total),
            "http_retry_total": self.http_retry_total,
            "http_failures_total": dict(self.http_failures_total),
            "http_duration_ms_total": self.http_duration_ms_total,
            "http_request_count": self.http_request_count,
            "pages_fetched_total": self.pages_fetched_total,
            "partial_aggregations_total": self.partial_aggregations_total,
        }
