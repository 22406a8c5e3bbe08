"""Storage control policies."""

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


LIST_PATH = "StoragePolicy/StoragePolicyGetByParameters"
GET_PATH = "StoragePolicy/StoragePolicyGetById"


def handle_storage_policies(
    client: ApiClient, params: Mapping[str, Any]
) -> Envelope:
    """Query storage policies.

    Args:
        client: API client.
        params: Operation parameters. ``action`` is one of list, get; list
            accepts optional ``searchText``, ``appliesToId``, ``policyType``
            and ``osType`` filters.

    Returns:
        Envelope from the API, or a BAD_REQUEST failure for invalid input.
    """
    action = params.get("action")
    page_number, page_size = clamp_pagination(
        params.get("pageNumber"), params.get("pageSize")
    )

    if action == "get":
        policy_id = params.get("storagePolicyId")
        if not policy_id:
            return required_id_error("storagePolicyId", action)
        guid_error = validate_guid(policy_id, "storagePolicyId")
        if guid_error:
            return guid_error
        return client.get(GET_PATH, {"storagePolicyId": policy_id})

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
        for key in ("policyType", "osType"):
            if params.get(key) is not None:
                body[key] = params[key]
        return client.post(LIST_PATH, body, pagination=PaginationFormat.JSON_HEADER)

    return unknown_action_error(action)
