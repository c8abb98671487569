"""Remote RAM client adapter.

:class:`RamClient` exposes one method per RAM action used by the reconcilers.
Every call goes through :meth:`RamClient.request`, which converts SDK failures
into tagged :class:`~pdum.ram.types.RamError` objects and surfaces permission
denials as :class:`~pdum.ram.types.RamPermissionError` exactly once.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from aliyunsdkcore.acs_exception.exceptions import ClientException, ServerException
from aliyunsdkcore.request import CommonRequest

from pdum.ram._clients import acs_client
from pdum.ram._console import debug
from pdum.ram._helpers import _to_ram_error, raise_for_permission
from pdum.ram.profile import Profile, get_profile
from pdum.ram.types import RAM_API_VERSION, RAM_ENDPOINT, PolicyType


def _dumps(document: Any) -> str:
    if isinstance(document, str):
        return document
    return json.dumps(document)


def _flag(value: bool) -> str:
    return "true" if value else "false"


class RamClient:
    """Thin wrapper around an SDK client speaking the RAM API."""

    def __init__(self, acs, *, endpoint: str = RAM_ENDPOINT, version: str = RAM_API_VERSION):
        self._acs = acs
        self.endpoint = endpoint
        self.version = version

    def request(self, action: str, params: Optional[dict] = None) -> dict:
        """Invoke a RAM action and return the decoded JSON response.

        Raises:
            RamPermissionError: If the caller is not allowed to perform ``action``
            RamError: For any other provider or transport failure
        """
        req = CommonRequest(domain=self.endpoint, version=self.version, action_name=action)
        req.set_accept_format("json")
        req.set_method("POST")
        req.set_protocol_type("https")
        for key, value in (params or {}).items():
            if value is not None:
                req.add_query_param(key, value)

        debug(f"RAM {action} {params or {}}")
        try:
            body = self._acs.do_action_with_exception(req)
        except (ServerException, ClientException) as e:
            error = _to_ram_error(e, action)
            raise_for_permission(error, action)
            raise error from e

        if not body:
            return {}
        return json.loads(body)

    # --- Policies ---

    def get_policy(self, policy_name: str, policy_type: str = PolicyType.CUSTOM.value) -> dict:
        return self.request("GetPolicy", {"PolicyName": policy_name, "PolicyType": policy_type})

    def create_policy(self, policy_name: str, policy_document, description: str = "") -> dict:
        return self.request(
            "CreatePolicy",
            {
                "PolicyName": policy_name,
                "Description": description,
                "PolicyDocument": _dumps(policy_document),
            },
        )

    def create_policy_version(self, policy_name: str, policy_document, set_as_default: bool = True) -> dict:
        return self.request(
            "CreatePolicyVersion",
            {
                "PolicyName": policy_name,
                "PolicyDocument": _dumps(policy_document),
                "SetAsDefault": _flag(set_as_default),
            },
        )

    def delete_policy_version(self, policy_name: str, version_id: str) -> dict:
        return self.request("DeletePolicyVersion", {"PolicyName": policy_name, "VersionId": version_id})

    def list_policy_versions(self, policy_name: str, policy_type: str = PolicyType.CUSTOM.value) -> dict:
        return self.request("ListPolicyVersions", {"PolicyName": policy_name, "PolicyType": policy_type})

    # --- Roles ---

    def get_role(self, role_name: str) -> dict:
        return self.request("GetRole", {"RoleName": role_name})

    def create_role(self, role_name: str, assume_role_policy_document, description: str = "") -> dict:
        return self.request(
            "CreateRole",
            {
                "RoleName": role_name,
                "Description": description,
                "AssumeRolePolicyDocument": _dumps(assume_role_policy_document),
            },
        )

    # --- Attachments ---

    def list_policies_for_role(self, role_name: str) -> dict:
        return self.request("ListPoliciesForRole", {"RoleName": role_name})

    def attach_policy_to_role(self, policy_name: str, role_name: str, policy_type: str) -> dict:
        return self.request(
            "AttachPolicyToRole",
            {"PolicyType": policy_type, "PolicyName": policy_name, "RoleName": role_name},
        )


def build_client(profile: Optional[Profile] = None) -> RamClient:
    """Build a :class:`RamClient` from ``profile`` (or the active profile)."""
    if profile is None:
        profile = get_profile()
    return RamClient(acs_client(profile))


__all__ = ["RamClient", "build_client"]
