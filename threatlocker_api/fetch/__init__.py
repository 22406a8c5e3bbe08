"""Resilient request layer for the ThreatLocker API.

This module provides:
- A uniform success/error Envelope for every operation
- HTTP status classification into a fixed error taxonomy
- Exponential backoff retries for transient failures
- Pagination extraction for both upstream wire encodings
- Bounded auto-pagination with partial-failure semantics
- API key redaction for logging
"""

from threatlocker_api.fetch.aggregate import PageFetcher, fetch_all_pages
from threatlocker_api.fetch.client import ApiClient, RetryState
from threatlocker_api.fetch.config import ClientConfig
from threatlocker_api.fetch.constants import (
    DEFAULT_MAX_RETRIES,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
    MAX_AUTO_PAGES,
    MAX_REDACTION_DEPTH,
)
from threatlocker_api.fetch.metrics import FetchMetrics
from threatlocker_api.fetch.models import (
    Envelope,
    ErrorDetail,
    ErrorKind,
    FailureEnvelope,
    Pagination,
    RetryPolicy,
    SuccessEnvelope,
    classify_status,
    error_response,
    success_response,
)
from threatlocker_api.fetch.pagination import (
    PaginationFormat,
    extract_pagination_from_headers,
    extract_pagination_from_json_header,
)
from threatlocker_api.fetch.redact import mask_secret, redact_headers, redact_secret


__all__ = [
    # Client
    "ApiClient",
    "RetryState",
    # Aggregation
    "PageFetcher",
    "fetch_all_pages",
    # Config
    "ClientConfig",
    # Models
    "Envelope",
    "SuccessEnvelope",
    "FailureEnvelope",
    "ErrorDetail",
    "ErrorKind",
    "Pagination",
    "RetryPolicy",
    "classify_status",
    "error_response",
    "success_response",
    # Pagination
    "PaginationFormat",
    "extract_pagination_from_headers",
    "extract_pagination_from_json_header",
    # Constants
    "DEFAULT_MAX_RETRIES",
    "HTTP_STATUS_OK_MIN",
    "HTTP_STATUS_OK_MAX",
    "HTTP_STATUS_TOO_MANY_REQUESTS",
    "MAX_AUTO_PAGES",
    "MAX_REDACTION_DEPTH",
    # Metrics
    "FetchMetrics",
    # Redaction
    "mask_secret",
    "redact_headers",
    "redact_secret",
]
