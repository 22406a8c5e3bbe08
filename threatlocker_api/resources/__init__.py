"""Resource operations for the ThreatLocker API.

Each handler takes an ApiClient and a parameter mapping and returns an
Envelope, so any of them can be passed to ``fetch_all_pages``.
"""

from threatlocker_api.resources.approval_requests import handle_approval_requests
from threatlocker_api.resources.computers import handle_computers
from threatlocker_api.resources.network_access_policies import (
    handle_network_access_policies,
)
from threatlocker_api.resources.registry import RESOURCE_HANDLERS, call_resource
from threatlocker_api.resources.storage_policies import handle_storage_policies
from threatlocker_api.resources.system_audit import handle_system_audit
from threatlocker_api.resources.validation import (
    clamp_pagination,
    validate_date_range,
    validate_guid,
)


__all__ = [
    "RESOURCE_HANDLERS",
    "call_resource",
    "clamp_pagination",
    "handle_approval_requests",
    "handle_computers",
    "handle_network_access_policies",
    "handle_storage_policies",
    "handle_system_audit",
    "validate_date_range",
    "validate_guid",
]
