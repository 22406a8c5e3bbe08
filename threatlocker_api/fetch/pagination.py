"""Pagination extraction from response headers.

The upstream API encodes page metadata in one of two ways depending on the
endpoint:

- Header fields: ``totalItems``, ``totalPages``, ``firstItem`` and
  ``lastItem`` each carried in their own header.
- JSON header: a single ``Pagination`` header holding a JSON object with
  ``currentPage``, ``itemsPerPage``, ``totalItems`` and ``totalPages``.

Both parsers are pure and lenient: malformed metadata yields ``None``
(no pagination), never an error.
"""

import json
import math
from collections.abc import Callable, Mapping
from enum import Enum

from threatlocker_api.fetch.constants import (
    DEFAULT_JSON_PAGE_SIZE,
    HEADER_FIRST_ITEM,
    HEADER_LAST_ITEM,
    HEADER_PAGINATION_JSON,
    HEADER_TOTAL_ITEMS,
    HEADER_TOTAL_PAGES,
)
from threatlocker_api.fetch.models import Pagination


PaginationExtractor = Callable[[Mapping[str, str]], Pagination | None]


def _parse_int(value: str | None, default: int | None = None) -> int | None:
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return None


def extract_pagination_from_headers(headers: Mapping[str, str]) -> Pagination | None:
    """Parse header-field pagination.

    Page size is ``lastItem - firstItem + 1`` and the current page is
    ``firstItem // pageSize + 1``. Missing item bounds default to 1, which
    makes a response carrying only the totals report page 2 of size 1.
    That quirk is kept for compatibility with existing callers.

    Args:
        headers: Response headers. Lookups should be case-insensitive, as
            with ``httpx.Headers``.

    Returns:
        Pagination, or None if either total is absent or any value is not
        an integer.
    """
    raw_total_items = headers.get(HEADER_TOTAL_ITEMS)
    raw_total_pages = headers.get(HEADER_TOTAL_PAGES)
    if not raw_total_items or not raw_total_pages:
        return None

    total_items = _parse_int(raw_total_items)
    total_pages = _parse_int(raw_total_pages)
    first_item = _parse_int(headers.get(HEADER_FIRST_ITEM), default=1)
    last_item = _parse_int(headers.get(HEADER_LAST_ITEM), default=1)
    if None in (total_items, total_pages, first_item, last_item):
        return None

    page_size = last_item - first_item + 1
    if page_size < 1 or total_items < 0 or total_pages < 0:
        return None

    return Pagination.from_counts(
        page=first_item // page_size + 1,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


def _as_count(value: object) -> int | None:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def extract_pagination_from_json_header(
    headers: Mapping[str, str],
) -> Pagination | None:
    """Parse JSON-header pagination.

    ``currentPage`` defaults to 1 and ``itemsPerPage`` to 25 when absent.

    Args:
        headers: Response headers.

    Returns:
        Pagination, or None if the header is missing, is not a JSON object,
        or its totals are not numeric.
    """
    raw = headers.get(HEADER_PAGINATION_JSON)
    if not raw:
        return None

    try:
        payload = json.loads(raw)
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None

    total_items = _as_count(payload.get("totalItems"))
    total_pages = _as_count(payload.get("totalPages"))
    if total_items is None or total_pages is None:
        return None

    page = _as_count(payload.get("currentPage", 1))
    page_size = _as_count(payload.get("itemsPerPage", DEFAULT_JSON_PAGE_SIZE))
    if page is None or page_size is None:
        return None
    if page < 1 or page_size < 1 or total_items < 0 or total_pages < 0:
        return None

    return Pagination.from_counts(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


class PaginationFormat(str, Enum):
    """Wire encoding of page metadata for an endpoint.

    - HEADER_FIELDS: four separate numeric headers
    - JSON_HEADER: one header holding a JSON object
    """

    HEADER_FIELDS = "HEADER_FIELDS"
    JSON_HEADER = "JSON_HEADER"

    def extract(self, headers: Mapping[str, str]) -> Pagination | None:
        """Parse pagination using this format's extractor.

        Args:
            headers: Response headers.

        Returns:
            Pagination, or None if the headers carry none.
        """
        return PAGINATION_EXTRACTORS[self](headers)


PAGINATION_EXTRACTORS: dict[PaginationFormat, PaginationExtractor] = {
    PaginationFormat.HEADER_FIELDS: extract_pagination_from_headers,
    PaginationFormat.JSON_HEADER: extract_pagination_from_json_header,
}
