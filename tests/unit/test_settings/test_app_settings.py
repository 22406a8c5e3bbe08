"""Unit tests for environment settings and client config resolution."""

import io
import json

import pytest

from threatlocker_api.observability.logging import LogLevel, get_logger
from threatlocker_api.settings.app import (
    AppSettings,
    build_client_config,
    configure_logging_from_settings,
)


API_KEY = "env-api-key-0123456789"
BASE_URL = "https://portalapi.g.threatlocker.com/portalapi"


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Populate the ThreatLocker environment variables."""
    monkeypatch.setenv("THREATLOCKER_API_KEY", API_KEY)
    monkeypatch.setenv("THREATLOCKER_BASE_URL", BASE_URL)
    monkeypatch.delenv("THREATLOCKER_ORG_ID", raising=False)
    monkeypatch.delenv("THREATLOCKER_MAX_RETRIES", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return monkeypatch


def load_settings() -> AppSettings:
    """Load settings from the environment only."""
    return AppSettings(_env_file=None)


class TestAppSettings:
    """Tests for environment loading."""

    def test_reads_environment(self, env: pytest.MonkeyPatch) -> None:
        """Test that variables are mapped to fields."""
        env.setenv("THREATLOCKER_ORG_ID", "org-1")

        settings = load_settings()

        assert settings.api_key == API_KEY
        assert settings.base_url == BASE_URL
        assert settings.organization_id == "org-1"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 1), ("3", 3), ("0", 0), (" 2 ", 2), ("abc", 1), ("-1", 1), ("", 1)],
    )
    def test_resolved_max_retries(
        self, env: pytest.MonkeyPatch, raw: str | None, expected: int
    ) -> None:
        """Test lenient parsing of the retry budget."""
        if raw is not None:
            env.setenv("THREATLOCKER_MAX_RETRIES", raw)

        assert load_settings().resolved_max_retries() == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, LogLevel.INFO),
            ("debug", LogLevel.DEBUG),
            ("ERROR", LogLevel.ERROR),
            ("verbose", LogLevel.INFO),
        ],
    )
    def test_resolved_log_level(
        self, env: pytest.MonkeyPatch, raw: str | None, expected: LogLevel
    ) -> None:
        """Test log level parsing with INFO fallback."""
        if raw is not None:
            env.setenv("LOG_LEVEL", raw)

        assert load_settings().resolved_log_level() == expected


class TestBuildClientConfig:
    """Tests for config precedence."""

    def test_environment_values(self, env: pytest.MonkeyPatch) -> None:
        """Test that the environment fills unset arguments."""
        config = build_client_config(settings=load_settings())

        assert config.api_key == API_KEY
        assert config.base_url == BASE_URL
        assert config.organization_id is None
        assert config.max_retries == 1

    def test_explicit_arguments_win(self, env: pytest.MonkeyPatch) -> None:
        """Test that explicit arguments override the environment."""
        env.setenv("THREATLOCKER_MAX_RETRIES", "5")
        env.setenv("THREATLOCKER_ORG_ID", "env-org")

        config = build_client_config(
            api_key="explicit-key-123456",
            base_url="https://other.example.com/api/",
            organization_id="explicit-org",
            max_retries=0,
            settings=load_settings(),
        )

        assert config.api_key == "explicit-key-123456"
        assert config.base_url == "https://other.example.com/api"
        assert config.organization_id == "explicit-org"
        assert config.max_retries == 0

    def test_environment_retries(self, env: pytest.MonkeyPatch) -> None:
        """Test that the environment retry budget is used."""
        env.setenv("THREATLOCKER_MAX_RETRIES", "4")

        assert build_client_config(settings=load_settings()).max_retries == 4

    def test_missing_api_key_fails(self, env: pytest.MonkeyPatch) -> None:
        """Test that a missing API key fails construction."""
        env.delenv("THREATLOCKER_API_KEY")

        with pytest.raises(ValueError):
            build_client_config(settings=load_settings())

    def test_http_base_url_fails(self, env: pytest.MonkeyPatch) -> None:
        """Test that a non-HTTPS base URL fails construction."""
        with pytest.raises(ValueError, match="HTTPS"):
            build_client_config(
                base_url="http://insecure.example.com", settings=load_settings()
            )


class TestConfigureLoggingFromSettings:
    """Tests for applying LOG_LEVEL to the logging setup."""

    def test_error_tier_filters_info(self, env: pytest.MonkeyPatch) -> None:
        """Test that LOG_LEVEL=ERROR hides info and debug events."""
        env.setenv("LOG_LEVEL", "ERROR")
        output = io.StringIO()

        level = configure_logging_from_settings(load_settings(), output=output)

        log = get_logger()
        log.debug("api_request")
        log.info("resource_call")
        log.error("api_request_failed")

        assert level == LogLevel.ERROR
        lines = output.getvalue().strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == [
            "api_request_failed"
        ]

    def test_debug_tier(self, env: pytest.MonkeyPatch) -> None:
        """Test that LOG_LEVEL=debug lets debug events through."""
        env.setenv("LOG_LEVEL", "debug")
        output = io.StringIO()

        configure_logging_from_settings(load_settings(), output=output)
        get_logger().debug("api_request")

        assert json.loads(output.getvalue().strip())["event"] == "api_request"

    def test_unset_defaults_to_info(self, env: pytest.MonkeyPatch) -> None:
        """Test that an unset LOG_LEVEL configures INFO."""
        output = io.StringIO()

        level = configure_logging_from_settings(load_settings(), output=output)
        get_logger().debug("api_request")
        get_logger().info("resource_call")

        assert level == LogLevel.INFO
        lines = output.getvalue().strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["resource_call"]
