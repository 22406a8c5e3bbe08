"""Auto-pagination: merge successive pages of a list operation."""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import structlog

from threatlocker_api.fetch.constants import MAX_AUTO_PAGES, PAGE_NUMBER_PARAM
from threatlocker_api.fetch.metrics import FetchMetrics
from threatlocker_api.fetch.models import Envelope, Pagination, SuccessEnvelope


if TYPE_CHECKING:
    from threatlocker_api.fetch.client import ApiClient


logger = structlog.get_logger()

PageFetcher = Callable[["ApiClient", dict[str, Any]], Envelope]


def fetch_all_pages(
    fetcher: PageFetcher,
    client: "ApiClient",
    params: Mapping[str, Any],
    *,
    max_pages: int = MAX_AUTO_PAGES,
    operation: str | None = None,
) -> Envelope:
    """Fetch pages of a list operation and merge them into one result.

    The first page is always page 1, whatever the caller asked for.
    Results that failed, are not lists, or report no further pages are
    returned unchanged. Otherwise pages are fetched one after another,
    following each page's ``next_page``, until no pages remain or
    ``max_pages`` pages have been fetched. A failure on a later page ends
    the loop and the items gathered so far are returned as a success.

    The merged pagination always reports page 1 with a page size equal to
    the number of merged items; ``has_more`` is only true when the page
    bound stopped the loop while pages remained.

    Args:
        fetcher: Single-page operation.
        client: API client passed through to the fetcher.
        params: Operation parameters.
        max_pages: Upper bound on the number of pages fetched.
        operation: Name of the operation, for logging.

    Returns:
        Merged Envelope.
    """
    log = logger.bind(component="aggregate", operation=operation)
    metrics = FetchMetrics.get_instance()

    first = fetcher(client, {**params, PAGE_NUMBER_PARAM: 1})
    if (
        not isinstance(first, SuccessEnvelope)
        or not isinstance(first.data, list)
        or first.pagination is None
        or not first.pagination.has_more
    ):
        return first

    items: list[Any] = list(first.data)
    current = first.pagination
    next_page = current.next_page or current.page + 1
    pages_fetched = 1
    partial = False
    more_remaining = True

    while pages_fetched < max_pages:
        log.debug(
            "fetch_page",
            page=next_page,
            total_pages=current.total_pages,
            pages_fetched=pages_fetched,
        )
        result = fetcher(client, {**params, PAGE_NUMBER_PARAM: next_page})

        if not isinstance(result, SuccessEnvelope):
            log.error(
                "fetch_page_failed",
                page=next_page,
                error=result.error.model_dump(by_alias=True, mode="json"),
            )
            partial = True
            break

        if isinstance(result.data, list):
            items.extend(result.data)
        pages_fetched += 1

        if result.pagination is None or not result.pagination.has_more:
            current = result.pagination or current
            more_remaining = False
            break

        current = result.pagination
        next_page = current.next_page or next_page + 1

    bounded = (
        not partial
        and pages_fetched >= max_pages
        and more_remaining
        and next_page <= current.total_pages
    )
    metrics.record_aggregation(pages_fetched, partial)
    log.debug(
        "fetch_all_pages_complete",
        pages_fetched=pages_fetched,
        items=len(items),
        has_more=bounded,
        partial=partial,
    )

    return SuccessEnvelope(
        data=items,
        pagination=Pagination(
            page=1,
            page_size=max(len(items), 1),
            total_items=current.total_items,
            total_pages=current.total_pages,
            has_more=bounded,
            next_page=next_page if bounded else None,
        ),
    )
