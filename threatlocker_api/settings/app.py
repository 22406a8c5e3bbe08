"""Application settings powered by Pydantic BaseSettings."""

import sys
from typing import TextIO

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from threatlocker_api.fetch.config import ClientConfig
from threatlocker_api.fetch.constants import DEFAULT_MAX_RETRIES
from threatlocker_api.observability.logging import LogLevel, configure_logging


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    api_key: str | None = Field(default=None, validation_alias="THREATLOCKER_API_KEY")
    base_url: str | None = Field(default=None, validation_alias="THREATLOCKER_BASE_URL")
    organization_id: str | None = Field(
        default=None, validation_alias="THREATLOCKER_ORG_ID"
    )
    # Kept raw so a malformed value falls back to the default instead of failing
    max_retries: str | None = Field(
        default=None, validation_alias="THREATLOCKER_MAX_RETRIES"
    )
    log_level: str | None = Field(default=None, validation_alias="LOG_LEVEL")

    def resolved_max_retries(self) -> int:
        """Return the retry budget from the environment.

        Absent, non-integer and negative values all resolve to the default.
        """
        if self.max_retries is None:
            return DEFAULT_MAX_RETRIES
        try:
            value = int(self.max_retries.strip())
        except ValueError:
            return DEFAULT_MAX_RETRIES
        return value if value >= 0 else DEFAULT_MAX_RETRIES

    def resolved_log_level(self) -> LogLevel:
        """Return the configured verbosity tier, INFO when unset or unknown."""
        return LogLevel.parse(self.log_level)


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()


def configure_logging_from_settings(
    settings: AppSettings | None = None,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> LogLevel:
    """Configure logging at the verbosity tier named by LOG_LEVEL.

    Args:
        settings: Settings to read from (default: loaded from the environment).
        output: Stream log lines are written to.
        json_format: Emit JSON lines instead of console output.

    Returns:
        The tier logging was configured with.
    """
    settings = settings or get_settings()
    level = settings.resolved_log_level()
    configure_logging(level, output=output, json_format=json_format)
    return level


def build_client_config(
    api_key: str | None = None,
    base_url: str | None = None,
    organization_id: str | None = None,
    max_retries: int | None = None,
    settings: AppSettings | None = None,
) -> ClientConfig:
    """Build a ClientConfig from explicit arguments and the environment.

    Explicit arguments win over environment values, which win over the
    built-in defaults.

    Args:
        api_key: API key sent in the Authorization header.
        base_url: HTTPS base URL of the API.
        organization_id: Optional managed organization to scope requests to.
        max_retries: Retries after the first attempt.
        settings: Settings to read from (default: loaded from the environment).

    Returns:
        Validated ClientConfig.

    Raises:
        pydantic.ValidationError: If the resulting configuration is invalid,
            e.g. a missing API key or a non-HTTPS base URL.
    """
    settings = settings or get_settings()

    return ClientConfig(
        api_key=api_key if api_key is not None else settings.api_key or "",
        base_url=base_url if base_url is not None else settings.base_url or "",
        organization_id=(
            organization_id
            if organization_id is not None
            else settings.organization_id
        ),
        max_retries=(
            max_retries
            if max_retries is not None
            else settings.resolved_max_retries()
        ),
    )
