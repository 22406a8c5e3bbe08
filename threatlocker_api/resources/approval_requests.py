"""Approval requests raised when users hit blocked software."""

from collections.abc import Mapping
from typing import Any

from threatlocker_api.fetch.client import ApiClient
from threatlocker_api.fetch.models import Envelope
from threatlocker_api.fetch.pagination import PaginationFormat
from threatlocker_api.resources.validation import (
    clamp_pagination,
    required_id_error,
    unknown_action_error,
    validate_guid,
)


LIST_PATH = "ApprovalRequest/ApprovalRequestGetByParameters"
GET_PATH = "ApprovalRequest/ApprovalRequestGetById"
COUNT_PATH = "ApprovalRequest/ApprovalRequestGetCount"

# Pending
DEFAULT_STATUS_ID = 1


def handle_approval_requests(
    client: ApiClient, params: Mapping[str, Any]
) -> Envelope:
    """Query approval requests.

    Args:
        client: API client.
        params: Operation parameters. ``action`` is one of list, get, count.

    Returns:
        Envelope from the API, or a BAD_REQUEST failure for invalid input.
    """
    action = params.get("action")
    page_number, page_size = clamp_pagination(
        params.get("pageNumber"), params.get("pageSize")
    )

    if action == "list":
        status_id = params.get("statusId")
        return client.post(
            LIST_PATH,
            {
                "statusId": DEFAULT_STATUS_ID if status_id is None else status_id,
                "searchText": params.get("searchText", ""),
                "orderBy": params.get("orderBy", "datetime"),
                "isAscending": params.get("isAscending", True),
                "showChildOrganizations": params.get("showChildOrganizations", False),
                "pageNumber": page_number,
                "pageSize": page_size,
            },
            pagination=PaginationFormat.HEADER_FIELDS,
        )

    if action == "get":
        approval_request_id = params.get("approvalRequestId")
        if not approval_request_id:
            return required_id_error("approvalRequestId", action)
        guid_error = validate_guid(approval_request_id, "approvalRequestId")
        if guid_error:
            return guid_error
        return client.get(GET_PATH, {"approvalRequestId": approval_request_id})

    if action == "count":
        return client.get(COUNT_PATH, {})

    return unknown_action_error(action)
