"""Text rendering of Envelopes for human and machine readers."""

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from threatlocker_api.fetch.models import Envelope, FailureEnvelope, Pagination


CHARACTER_LIMIT = 50_000

MARKDOWN_TRUNCATION_NOTICE = (
    "\n\n---\n**Output truncated** (exceeded 50,000 characters). "
    "Use a smaller `pageSize` or add filters to narrow results."
)
JSON_TRUNCATION_NOTICE = (
    "\n\n--- OUTPUT TRUNCATED (exceeded 50,000 characters). "
    "Use a smaller pageSize or add filters to narrow results. ---"
)


class ResponseFormat(str, Enum):
    """Output format of a rendered Envelope."""

    MARKDOWN = "markdown"
    JSON = "json"


def _stringify(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def format_object(obj: Mapping[str, Any], indent: int = 0) -> str:
    """Render a mapping as bulleted markdown lines.

    Nested mappings are indented one level; lists are summarized as
    ``[N items]`` and nulls shown as ``_null_``.

    Args:
        obj: Mapping to render.
        indent: Nesting level.

    Returns:
        Markdown bullet list.
    """
    prefix = "  " * indent
    lines: list[str] = []

    for key, value in obj.items():
        if value is None:
            lines.append(f"{prefix}- **{key}**: _null_")
        elif isinstance(value, list | tuple):
            lines.append(f"{prefix}- **{key}**: [{_plural(len(value), 'item')}]")
        elif isinstance(value, Mapping):
            lines.append(f"{prefix}- **{key}**:")
            lines.append(format_object(value, indent + 1))
        else:
            lines.append(f"{prefix}- **{key}**: {_stringify(value)}")

    return "\n".join(lines)


def format_pagination(pagination: Pagination) -> str:
    """Render pagination as a markdown footer.

    Args:
        pagination: Page metadata.

    Returns:
        Footer such as ``Page 2 of 4 (items 26–50 of 100, pageSize 25)``.
    """
    page = pagination.page
    page_size = pagination.page_size
    start = (page - 1) * page_size + 1
    end = min(page * page_size, pagination.total_items)
    return (
        f"\n---\nPage {page} of {pagination.total_pages} "
        f"(items {start}–{end} of {pagination.total_items}, pageSize {page_size})"
    )


def format_as_markdown(envelope: Envelope) -> str:
    """Render an Envelope as markdown.

    Args:
        envelope: Result to render.

    Returns:
        Markdown text.
    """
    if isinstance(envelope, FailureEnvelope):
        error = envelope.error
        heading = (
            f"# Error {error.status_code}: {error.kind.value}"
            if error.status_code
            else f"# Error: {error.kind.value}"
        )
        return f"{heading}\n\n{error.message}"

    parts: list[str] = []
    data = envelope.data

    if isinstance(data, list):
        parts.append(f"**{_plural(len(data), 'item')} returned**\n")
        for item in data:
            if isinstance(item, Mapping):
                parts.append(format_object(item))
                parts.append("")
            else:
                parts.append(f"- {_stringify(item)}")
    elif isinstance(data, Mapping):
        parts.append(format_object(data))
    else:
        parts.append(_stringify(data))

    if envelope.pagination is not None:
        parts.append(format_pagination(envelope.pagination))

    return "\n".join(parts).strip()


def format_as_json(envelope: Envelope) -> str:
    """Render an Envelope as indented JSON."""
    return json.dumps(envelope.to_dict(), indent=2, ensure_ascii=False, default=str)


def render_envelope(
    envelope: Envelope, fmt: ResponseFormat | str = ResponseFormat.MARKDOWN
) -> str:
    """Render an Envelope, truncating oversized output.

    Output longer than CHARACTER_LIMIT is cut to that length and followed
    by a notice suggesting a smaller page size.

    Args:
        envelope: Result to render.
        fmt: Output format; anything other than ``json`` renders markdown.

    Returns:
        Rendered text.
    """
    is_json = fmt == ResponseFormat.JSON
    text = format_as_json(envelope) if is_json else format_as_markdown(envelope)

    if len(text) > CHARACTER_LIMIT:
        notice = JSON_TRUNCATION_NOTICE if is_json else MARKDOWN_TRUNCATION_NOTICE
        text = text[:CHARACTER_LIMIT] + notice

    return text
