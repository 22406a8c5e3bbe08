"""HTTP constants for the request layer.

Centralizes all HTTP-related constants to avoid duplication across modules.
"""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_REQUEST_TIMEOUT = 408
HTTP_STATUS_EXPECTATION_FAILED = 417
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR_MIN = 500

# Statuses below 500 that are still worth another attempt
RETRYABLE_CLIENT_STATUSES = frozenset(
    {
        HTTP_STATUS_REQUEST_TIMEOUT,
        HTTP_STATUS_EXPECTATION_FAILED,
        HTTP_STATUS_TOO_MANY_REQUESTS,
    }
)

# Backoff
DEFAULT_BASE_DELAY_MS = 500
DEFAULT_EXPONENTIAL_BASE = 2.0
DEFAULT_MAX_RETRIES = 1

# Error bodies are only ever logged, and only this much of them
ERROR_BODY_LOG_LIMIT = 500

# Request headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_AUTHORIZATION = "Authorization"
HEADER_MANAGED_ORGANIZATION = "ManagedOrganizationId"
HEADER_OVERRIDE_MANAGED_ORGANIZATION = "OverrideManagedOrganizationId"
JSON_CONTENT_TYPE = "application/json"

# Pagination headers (Form A: one value per header)
HEADER_TOTAL_ITEMS = "totalItems"
HEADER_TOTAL_PAGES = "totalPages"
HEADER_FIRST_ITEM = "firstItem"
HEADER_LAST_ITEM = "lastItem"

# Pagination header (Form B: one JSON object)
HEADER_PAGINATION_JSON = "Pagination"
DEFAULT_JSON_PAGE_SIZE = 25

# Auto-pagination
MAX_AUTO_PAGES = 10
PAGE_NUMBER_PARAM = "pageNumber"

# Log redaction
MAX_REDACTION_DEPTH = 10
SHORT_SECRET_LENGTH = 8
SECRET_VISIBLE_CHARS = 4
SHORT_SECRET_MASK = "****"
