"""API client with retries, error classification and log redaction."""

import json
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from threatlocker_api.fetch.config import ClientConfig
from threatlocker_api.fetch.constants import (
    ERROR_BODY_LOG_LIMIT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_MANAGED_ORGANIZATION,
    HEADER_OVERRIDE_MANAGED_ORGANIZATION,
    JSON_CONTENT_TYPE,
)
from threatlocker_api.fetch.metrics import FetchMetrics
from threatlocker_api.fetch.models import (
    Envelope,
    ErrorKind,
    RetryPolicy,
    classify_status,
    error_response,
    is_success_status,
    success_response,
)
from threatlocker_api.fetch.pagination import PaginationFormat
from threatlocker_api.fetch.redact import redact_headers, redact_secret


logger = structlog.get_logger()

METHOD_GET = "GET"
METHOD_POST = "POST"


@dataclass
class RetryState:
    """Progress of one logical request through the retry loop.

    Attributes:
        attempt: Current attempt number (0-indexed).
        response: Last HTTP response received, if any.
        last_error: Message of the last transport failure, if any.
    """

    attempt: int = 0
    response: httpx.Response | None = None
    last_error: str | None = None

    @property
    def status_code(self) -> int | None:
        """Status of the last response, or None if none arrived."""
        return self.response.status_code if self.response is not None else None

    @property
    def succeeded(self) -> bool:
        """Whether the last attempt produced a 2xx response."""
        return self.response is not None and is_success_status(
            self.response.status_code
        )


class ApiClient:
    """Client for the ThreatLocker REST API.

    Turns "call endpoint X with parameters Y" into a single Envelope:
    - Authentication and organization-scoping headers
    - Exponential backoff retries for transient failures
    - HTTP status classification into ErrorKind
    - Pagination extraction for page-oriented endpoints
    - API key redaction in every log line

    No exception escapes ``execute``; failures are returned as
    FailureEnvelope values.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the API client.

        Args:
            config: Connection settings.
            transport: Optional httpx transport (tests use MockTransport).
            sleep: Function used to wait between retries, in seconds.
        """
        self._config = config
        self._policy = RetryPolicy(max_retries=config.max_retries)
        self._transport = transport
        self._sleep = sleep
        self._metrics = FetchMetrics.get_instance()
        self._log = logger.bind(component="fetch")

    @property
    def config(self) -> ClientConfig:
        """Connection settings of this client."""
        return self._config

    @property
    def base_url(self) -> str:
        """Base URL requests are issued against."""
        return self._config.base_url

    @property
    def retry_policy(self) -> RetryPolicy:
        """Retry policy derived from the configuration."""
        return self._policy

    def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> Envelope:
        """Issue a GET request.

        Args:
            path: Endpoint path relative to the base URL.
            params: Query parameters; None and empty values are dropped.
            extra_headers: Additional headers to include.

        Returns:
            Envelope with the decoded body or an error.
        """
        return self.execute(
            METHOD_GET, path, params=params, extra_headers=extra_headers
        )

    def post(
        self,
        path: str,
        body: Any,
        pagination: PaginationFormat | None = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> Envelope:
        """Issue a POST request with a JSON body.

        Args:
            path: Endpoint path relative to the base URL.
            body: JSON-serializable request body.
            pagination: Encoding of page metadata in the response headers.
            extra_headers: Additional headers to include.

        Returns:
            Envelope with the decoded body, pagination if present, or an error.
        """
        return self.execute(
            METHOD_POST,
            path,
            body=body,
            pagination=pagination,
            extra_headers=extra_headers,
        )

    def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        pagination: PaginationFormat | None = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> Envelope:
        """Execute one logical request with retry support.

        Args:
            method: HTTP method, GET or POST.
            path: Endpoint path relative to the base URL.
            params: Query parameters (GET).
            body: JSON body (POST).
            pagination: Encoding of page metadata (POST only).
            extra_headers: Additional headers, overriding the defaults.

        Returns:
            Envelope for the request.
        """
        start_time_ns = time.perf_counter_ns()
        method = method.upper()
        url = self._config.url_for(path)
        headers = self._build_headers(extra_headers)
        query = _clean_params(params) if method == METHOD_GET else None
        json_body = body if method == METHOD_POST else None

        log = self._log.bind(method=method, endpoint=path)
        try:
            content = _encode_body(json_body)
        except (TypeError, ValueError) as e:
            message = str(e) or type(e).__name__
            self._metrics.record_failure(ErrorKind.NETWORK_ERROR)
            self._emit(log, "error", "api_request_unserializable", error=message)
            self._metrics.record_duration(
                (time.perf_counter_ns() - start_time_ns) / 1_000_000
            )
            return error_response(ErrorKind.NETWORK_ERROR, message)

        self._emit(
            log,
            "debug",
            "api_request",
            params=query,
            body=json_body,
            headers=redact_headers(headers),
        )

        state = RetryState()
        while True:
            self._attempt(state, method, url, headers, query, content, log)
            if state.succeeded:
                break
            if not self._policy.should_retry(state.status_code, state.attempt):
                break

            delay_ms = self._policy.get_delay_ms(state.attempt)
            self._metrics.record_retry()
            self._emit(
                log,
                "warning",
                "api_request_retry",
                attempt=state.attempt,
                status=state.status_code,
                error=state.last_error,
                delay_ms=delay_ms,
                max_retries=self._policy.max_retries,
            )
            self._sleep(delay_ms / 1000.0)
            state.attempt += 1

        result = self._finalize(state, method, pagination, log)

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self._metrics.record_duration(duration_ms)
        return result

    def _build_headers(
        self, extra_headers: Mapping[str, str] | None
    ) -> dict[str, str]:
        """Build request headers.

        Args:
            extra_headers: Additional headers from caller.

        Returns:
            Complete headers dictionary.
        """
        headers: dict[str, str] = {
            HEADER_CONTENT_TYPE: JSON_CONTENT_TYPE,
            HEADER_AUTHORIZATION: self._config.api_key,
        }

        organization_id = self._config.organization_id
        if organization_id:
            headers[HEADER_MANAGED_ORGANIZATION] = organization_id
            headers[HEADER_OVERRIDE_MANAGED_ORGANIZATION] = organization_id

        if extra_headers:
            headers.update(extra_headers)

        return headers

    def _attempt(
        self,
        state: RetryState,
        method: str,
        url: str,
        headers: dict[str, str],
        query: dict[str, Any] | None,
        content: bytes | None,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Issue a single HTTP request and record the outcome in ``state``."""
        try:
            with httpx.Client(
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.request(
                    method,
                    url,
                    params=query or None,
                    content=content,
                    headers=headers,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            state.response = None
            state.last_error = str(e) or type(e).__name__
            self._emit(
                log,
                "debug",
                "api_request_network_error",
                attempt=state.attempt,
                error=state.last_error,
            )
            return

        state.response = response
        state.last_error = None
        self._metrics.record_request(response.status_code)
        self._emit(
            log,
            "debug",
            "api_response",
            attempt=state.attempt,
            status=response.status_code,
        )

    def _finalize(
        self,
        state: RetryState,
        method: str,
        pagination: PaginationFormat | None,
        log: structlog.stdlib.BoundLogger,
    ) -> Envelope:
        """Turn the final attempt into an Envelope."""
        response = state.response

        if response is None:
            message = state.last_error or "Unknown error"
            self._metrics.record_failure(ErrorKind.NETWORK_ERROR)
            self._emit(
                log,
                "error",
                "api_network_error",
                attempts=state.attempt + 1,
                error=message,
            )
            return error_response(ErrorKind.NETWORK_ERROR, message)

        status = response.status_code
        if not is_success_status(status):
            kind = classify_status(status)
            status_text = response.reason_phrase or f"HTTP {status}"
            self._metrics.record_failure(kind)
            self._emit(
                log,
                "error",
                "api_request_failed",
                attempts=state.attempt + 1,
                status=status,
                status_text=status_text,
                body=_error_body_excerpt(response),
            )
            return error_response(kind, status_text, status)

        try:
            data = response.json() if response.content else None
        except ValueError as e:
            self._metrics.record_failure(ErrorKind.NETWORK_ERROR)
            self._emit(
                log,
                "error",
                "api_response_undecodable",
                status=status,
                error=str(e),
            )
            return error_response(ErrorKind.NETWORK_ERROR, str(e))

        page_info = None
        if pagination is not None and method == METHOD_POST:
            page_info = pagination.extract(response.headers)

        self._emit(
            log,
            "debug",
            "api_request_success",
            attempts=state.attempt + 1,
            status=status,
            has_pagination=page_info is not None,
        )
        return success_response(data, page_info)

    def _emit(
        self,
        log: structlog.stdlib.BoundLogger,
        level: str,
        event: str,
        **fields: Any,
    ) -> None:
        """Log an event with the API key masked in every field."""
        getattr(log, level)(event, **redact_secret(fields, self._config.api_key))


def _encode_body(body: Any) -> bytes | None:
    """Serialize a request body to JSON bytes.

    Raises:
        TypeError: If the body holds a value JSON cannot represent.
        ValueError: If the body contains a circular reference.
    """
    if body is None:
        return None
    return json.dumps(body).encode("utf-8")


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop query parameters that are None or empty strings."""
    if not params:
        return {}
    return {
        key: value for key, value in params.items() if value is not None and value != ""
    }


def _error_body_excerpt(response: httpx.Response) -> str | None:
    """Best-effort, truncated error body for logging."""
    try:
        text = response.text
    except (UnicodeDecodeError, LookupError):
        return None
    return text[:ERROR_BODY_LOG_LIMIT] if text else None
