"""Text rendering of operation results."""

from threatlocker_api.renderer.markdown import (
    CHARACTER_LIMIT,
    ResponseFormat,
    format_as_json,
    format_as_markdown,
    format_object,
    format_pagination,
    render_envelope,
)


__all__ = [
    "CHARACTER_LIMIT",
    "ResponseFormat",
    "format_as_json",
    "format_as_markdown",
    "format_object",
    "format_pagination",
    "render_envelope",
]
