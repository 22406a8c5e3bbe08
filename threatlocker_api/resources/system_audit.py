"""Portal audit trail: who changed what, and when."""

from collections.abc import Mapping
from typing import Any

from threatlocker_api.fetch.client import ApiClient
from threatlocker_api.fetch.models import Envelope, ErrorKind, error_response
from threatlocker_api.fetch.pagination import PaginationFormat
from threatlocker_api.resources.validation import (
    clamp_days,
    clamp_pagination,
    unknown_action_error,
    validate_date_range,
    validate_guid,
)


SEARCH_PATH = "SystemAudit/SystemAuditGetByParameters"
HEALTH_CENTER_PATH = "SystemAudit/SystemAuditGetForHealthCenter"

DEFAULT_HEALTH_CENTER_DAYS = 7


def handle_system_audit(client: ApiClient, params: Mapping[str, Any]) -> Envelope:
    """Query the system audit log.

    Actions:
    - search: entries between ``startDate`` and ``endDate`` (paginated),
      optionally filtered by username, ``auditAction``, ip address,
      effective action, details text or ``objectId``
    - health_center: recent entries for the health center view, looking
      back ``days`` days (1..365, default 7)

    Args:
        client: API client.
        params: Operation parameters.

    Returns:
        Envelope from the API, or a BAD_REQUEST failure for invalid input.
    """
    action = params.get("action")
    if not action:
        return error_response(ErrorKind.BAD_REQUEST, "action is required")

    page_number, page_size = clamp_pagination(
        params.get("pageNumber"), params.get("pageSize")
    )

    if action == "search":
        start_date = params.get("startDate")
        end_date = params.get("endDate")
        if not start_date or not end_date:
            return error_response(
                ErrorKind.BAD_REQUEST,
                "startDate and endDate are required for search action",
            )
        date_error = validate_date_range(start_date, end_date)
        if date_error:
            return date_error

        object_id = params.get("objectId")
        if object_id:
            guid_error = validate_guid(object_id, "objectId")
            if guid_error:
                return guid_error

        return client.post(
            SEARCH_PATH,
            {
                "startDate": start_date,
                "endDate": end_date,
                "pageSize": page_size,
                "pageNumber": page_number,
                "username": params.get("username", ""),
                "action": params.get("auditAction", ""),
                "ipAddress": params.get("ipAddress", ""),
                "effectiveAction": params.get("effectiveAction", ""),
                "details": params.get("details", ""),
                "viewChildOrganizations": params.get("viewChildOrganizations", False),
                "objectId": object_id or "",
            },
            pagination=PaginationFormat.HEADER_FIELDS,
        )

    if action == "health_center":
        return client.post(
            HEALTH_CENTER_PATH,
            {
                "days": clamp_days(params.get("days"), DEFAULT_HEALTH_CENTER_DAYS),
                "isLoggedIn": True,
                "pageSize": page_size,
                "pageNumber": page_number,
                "searchText": params.get("searchText", ""),
            },
            pagination=PaginationFormat.HEADER_FIELDS,
        )

    return unknown_action_error(action)
