"""Network access (firewall) policies."""

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


LIST_PATH = "NetworkAccessPolicy/NetworkAccessPolicyGetByParameters"
GET_PATH = "NetworkAccessPolicy/NetworkAccessPolicyGetById"


def handle_network_access_policies(
    client: ApiClient, params: Mapping[str, Any]
) -> Envelope:
    """Query network access policies.

    The list endpoint reports its pages in a JSON ``Pagination`` header.

    Args:
        client: API client.
        params: Operation parameters. ``action`` is one of list, get.

    Returns:
        Envelope from the API, or a BAD_REQUEST failure for invalid input.
    """
    action = params.get("action")
    page_number, page_size = clamp_pagination(
        params.get("pageNumber"), params.get("pageSize")
    )

    if action == "get":
        policy_id = params.get("networkAccessPolicyId")
        if not policy_id:
            return required_id_error("networkAccessPolicyId", action)
        guid_error = validate_guid(policy_id, "networkAccessPolicyId")
        if guid_error:
            return guid_error
        return client.get(GET_PATH, {"networkAccessPolicyId": policy_id})

    if action == "list":
        applies_to_id = params.get("appliesToId")
        if applies_to_id:
            guid_error = validate_guid(applies_to_id, "appliesToId")
            if guid_error:
                return guid_error

        body: dict[str, Any] = {"pageNumber": page_number, "pageSize": page_size}
        if params.get("searchText"):
            body["searchText"] = params["searchText"]
        if applies_to_id:
            body["appliesToId"] = applies_to_id
        return client.post(LIST_PATH, body, pagination=PaginationFormat.JSON_HEADER)

    return unknown_action_error(action)
