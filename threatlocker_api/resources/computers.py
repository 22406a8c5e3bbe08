"""Computer inventory and check-in history."""

from collections.abc import Mapping
from typing import Any

from threatlocker_api.fetch.client import ApiClient
from threatlocker_api.fetch.models import Envelope, ErrorKind, error_response
from threatlocker_api.fetch.pagination import PaginationFormat
from threatlocker_api.resources.validation import (
    clamp_pagination,
    required_id_error,
    unknown_action_error,
    validate_guid,
)


LIST_PATH = "Computer/ComputerGetByAllParameters"
GET_PATH = "Computer/ComputerGetForEditById"
CHECKINS_PATH = "ComputerCheckin/ComputerCheckinGetByParameters"
INSTALL_INFO_PATH = "Computer/ComputerGetForNewComputer"


def handle_computers(client: ApiClient, params: Mapping[str, Any]) -> Envelope:
    """Query computers.

    Actions:
    - list: search computers (paginated)
    - get: one computer by ``computerId``
    - checkins: check-in history of ``computerId`` (paginated)
    - get_install_info: details needed to deploy a new computer

    Args:
        client: API client.
        params: Operation parameters, keyed by API field name.

    Returns:
        Envelope from the API, or a BAD_REQUEST failure for invalid input.
    """
    action = params.get("action")
    page_number, page_size = clamp_pagination(
        params.get("pageNumber"), params.get("pageSize")
    )

    if not action:
        return error_response(ErrorKind.BAD_REQUEST, "action is required")

    if action == "list":
        computer_group = params.get("computerGroup")
        if computer_group:
            guid_error = validate_guid(computer_group, "computerGroup")
            if guid_error:
                return guid_error
        return client.post(
            LIST_PATH,
            {
                "pageNumber": page_number,
                "pageSize": page_size,
                "searchText": params.get("searchText") or "",
                "searchBy": params.get("searchBy", 1),
                # The mode filter travels as "action" on the wire
                "action": params.get("action_filter") or "",
                "computerGroup": computer_group or "",
                "orderBy": params.get("orderBy", "computername"),
                "isAscending": params.get("isAscending", True),
                "childOrganizations": params.get("childOrganizations", False),
                "kindOfAction": params.get("kindOfAction") or "",
            },
            pagination=PaginationFormat.HEADER_FIELDS,
        )

    if action in ("get", "checkins"):
        computer_id = params.get("computerId")
        if not computer_id:
            return required_id_error("computerId", action)
        guid_error = validate_guid(computer_id, "computerId")
        if guid_error:
            return guid_error

        if action == "get":
            return client.get(GET_PATH, {"computerId": computer_id})

        return client.post(
            CHECKINS_PATH,
            {
                "computerId": computer_id,
                "pageNumber": page_number,
                "pageSize": page_size,
                "hideHeartbeat": params.get("hideHeartbeat", False),
            },
            pagination=PaginationFormat.HEADER_FIELDS,
        )

    if action == "get_install_info":
        return client.get(INSTALL_INFO_PATH, {})

    return unknown_action_error(action)
