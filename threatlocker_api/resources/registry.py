"""Resource lookup and invocation."""

from collections.abc import Mapping
from typing import Any

import structlog

from threatlocker_api.fetch import aggregate
from threatlocker_api.fetch.aggregate import PageFetcher
from threatlocker_api.fetch.client import ApiClient
from threatlocker_api.fetch.models import (
    Envelope,
    ErrorKind,
    SuccessEnvelope,
    error_response,
)
from threatlocker_api.resources.approval_requests import handle_approval_requests
from threatlocker_api.resources.computers import handle_computers
from threatlocker_api.resources.network_access_policies import (
    handle_network_access_policies,
)
from threatlocker_api.resources.storage_policies import handle_storage_policies
from threatlocker_api.resources.system_audit import handle_system_audit


logger = structlog.get_logger()

RESOURCE_HANDLERS: dict[str, PageFetcher] = {
    "computers": handle_computers,
    "approval_requests": handle_approval_requests,
    "network_access_policies": handle_network_access_policies,
    "storage_policies": handle_storage_policies,
    "system_audit": handle_system_audit,
}


def call_resource(
    client: ApiClient,
    name: str,
    params: Mapping[str, Any],
    fetch_all_pages: bool = False,
) -> Envelope:
    """Run a resource operation by name.

    Args:
        client: API client.
        name: Resource name, a key of RESOURCE_HANDLERS.
        params: Operation parameters.
        fetch_all_pages: Merge successive pages instead of returning one.

    Returns:
        Envelope of the operation. Unknown resources yield BAD_REQUEST.
    """
    log = logger.bind(component="resources", resource=name)

    handler = RESOURCE_HANDLERS.get(name)
    if handler is None:
        return error_response(ErrorKind.BAD_REQUEST, f"Unknown resource: {name}")

    log.debug(
        "resource_call",
        action=params.get("action"),
        fetch_all_pages=fetch_all_pages,
        base_url=client.base_url,
    )

    if fetch_all_pages:
        result = aggregate.fetch_all_pages(
            handler, client, dict(params), operation=name
        )
    else:
        result = handler(client, dict(params))

    if isinstance(result, SuccessEnvelope):
        log.debug(
            "resource_success",
            result_count=len(result.data) if isinstance(result.data, list) else 1,
            pagination=(
                result.pagination.model_dump(by_alias=True)
                if result.pagination
                else None
            ),
        )
    else:
        log.error(
            "resource_failed",
            error=result.error.model_dump(
                by_alias=True, exclude_none=True, mode="json"
            ),
        )
    return result
