"""Shared pytest fixtures."""

from collections.abc import Generator

import httpx
import pytest
import structlog

from tests.helpers.mock_api import RecordingApi
from threatlocker_api.fetch.client import ApiClient
from threatlocker_api.fetch.config import ClientConfig
from threatlocker_api.fetch.metrics import FetchMetrics


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Reset metrics and logging configuration around every test."""
    FetchMetrics.reset()
    yield
    FetchMetrics.reset()
    structlog.reset_defaults()


@pytest.fixture
def api() -> RecordingApi:
    """Create a recording mock API."""
    return RecordingApi()


@pytest.fixture
def client(api: RecordingApi) -> ApiClient:
    """Create a client without retries talking to the recording mock API."""
    config = ClientConfig(
        api_key="resource-test-key-123456",
        base_url="https://portalapi.g.threatlocker.com/portalapi",
        max_retries=0,
    )
    return ApiClient(config, transport=httpx.MockTransport(api), sleep=lambda _: None)
