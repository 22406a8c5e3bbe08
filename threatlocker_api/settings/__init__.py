"""Application settings loading."""

from .app import (
    AppSettings,
    build_client_config,
    configure_logging_from_settings,
    get_settings,
)


__all__ = [
    "AppSettings",
    "build_client_config",
    "configure_logging_from_settings",
    "get_settings",
]
