"""Unit tests for the approval requests resource."""

from tests.helpers.mock_api import POLICY_ID, RecordingApi
from threatlocker_api.fetch.client import ApiClient
from threatlocker_api.fetch.models import FailureEnvelope, SuccessEnvelope
from threatlocker_api.resources.approval_requests import handle_approval_requests


class TestApprovalRequests:
    """Tests for approval request actions."""

    def test_list_defaults(self, client: ApiClient, api: RecordingApi) -> None:
        """Test the list body with defaults."""
        handle_approval_requests(client, {"action": "list"})

        assert api.last.url.path.endswith(
            "/ApprovalRequest/ApprovalRequestGetByParameters"
        )
        assert api.last_body == {
            "statusId": 1,
            "searchText": "",
            "orderBy": "datetime",
            "isAscending": True,
            "showChildOrganizations": False,
            "pageNumber": 1,
            "pageSize": 25,
        }

    def test_list_status_filter(self, client: ApiClient, api: RecordingApi) -> None:
        """Test that an explicit status is sent."""
        handle_approval_requests(client, {"action": "list", "statusId": 4})

        assert api.last_body["statusId"] == 4

    def test_get(self, client: ApiClient, api: RecordingApi) -> None:
        """Test fetching a single request."""
        handle_approval_requests(
            client, {"action": "get", "approvalRequestId": POLICY_ID}
        )

        assert api.last.method == "GET"
        assert api.last.url.params["approvalRequestId"] == POLICY_ID

    def test_get_requires_id(self, client: ApiClient) -> None:
        """Test the error for a missing id."""
        result = handle_approval_requests(client, {"action": "get"})

        assert isinstance(result, FailureEnvelope)
        assert result.error.message == "approvalRequestId is required for get action"

    def test_count(self, client: ApiClient, api: RecordingApi) -> None:
        """Test the pending count request."""
        api.payload = 7

        result = handle_approval_requests(client, {"action": "count"})

        assert api.last.url.path.endswith("/ApprovalRequest/ApprovalRequestGetCount")
        assert isinstance(result, SuccessEnvelope)
        assert result.data == 7

    def test_unknown_action(self, client: ApiClient) -> None:
        """Test the error for an unsupported action."""
        result = handle_approval_requests(client, {"action": "approve"})

        assert isinstance(result, FailureEnvelope)
        assert result.error.message == "Unknown action: approve"
