"""Configuration model for the request layer."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from threatlocker_api.fetch.constants import DEFAULT_MAX_RETRIES


class ClientConfig(BaseModel):
    """Connection settings for one caller identity.

    Created once at startup and immutable afterwards. Invalid values fail
    construction with a ``pydantic.ValidationError``; this is a
    precondition check, not a runtime error path.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: Annotated[str, Field(min_length=1, repr=False)]
    base_url: Annotated[str, Field(min_length=1)]
    organization_id: str | None = None
    max_retries: Annotated[int, Field(ge=0)] = DEFAULT_MAX_RETRIES
    timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = 30.0

    @field_validator("base_url")
    @classmethod
    def validate_https(cls, v: str) -> str:
        """Require HTTPS and strip trailing slashes."""
        if not v.startswith("https://"):
            msg = "Base URL must use HTTPS"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("organization_id")
    @classmethod
    def blank_organization_is_none(cls, v: str | None) -> str | None:
        """Treat an empty organization id as no organization scope."""
        return v or None

    def url_for(self, path: str) -> str:
        """Build the absolute URL for an endpoint path.

        Args:
            path: Endpoint path relative to the base URL.

        Returns:
            Absolute URL.
        """
        return f"{self.base_url}/{path.lstrip('/')}"
