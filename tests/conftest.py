"""Shared fixtures: an in-memory RAM account standing in for the remote API."""

import json
from collections import defaultdict

import pytest

from pdum.ram.retry import RetryPolicy
from pdum.ram.types import RamError


class FakeRam:
    """In-memory RAM account with the same method surface as ``RamClient``.

    ``fail(method, error, times=1)`` queues errors raised before the method
    touches any state; ``calls`` records every invocation in order.
    """

    def __init__(self):
        self.policies = {}
        self.roles = {}
        self.attachments = defaultdict(list)
        self.calls = []
        self._failures = defaultdict(list)

    def fail(self, method, error, times=1):
        self._failures[method].extend([error] * times)

    def names(self):
        return [name for name, _ in self.calls]

    def count(self, method):
        return self.names().count(method)

    def _enter(self, method, *args):
        self.calls.append((method, args))
        if self._failures[method]:
            raise self._failures[method].pop(0)

    # --- seeding helpers ---

    def add_policy(self, name, versions):
        """Seed a policy with ``versions`` as ``[(document, is_default), ...]``."""
        stored = []
        for i, (document, is_default) in enumerate(versions, start=1):
            stored.append({"VersionId": f"v{i}", "IsDefaultVersion": is_default, "PolicyDocument": json.dumps(document)})
        self.policies[name] = {"versions": stored, "next": len(stored) + 1}

    def add_role(self, name, trust=None):
        self.roles[name] = {
            "RoleName": name,
            "RoleId": f"id-{name}",
            "Arn": f"acs:ram::123456789:role/{name}",
            "Description": "seeded",
            "AssumeRolePolicyDocument": json.dumps(trust or {}),
        }

    def default_documents(self, name):
        return [json.loads(v["PolicyDocument"]) for v in self.policies[name]["versions"] if v["IsDefaultVersion"]]

    # --- RamClient surface ---

    def get_policy(self, policy_name, policy_type="Custom"):
        self._enter("get_policy", policy_name, policy_type)
        if policy_name not in self.policies:
            raise RamError("The policy does not exist", code="EntityNotExist.Policy", action="GetPolicy")
        return {"Policy": {"PolicyName": policy_name, "PolicyType": policy_type}}

    def create_policy(self, policy_name, policy_document, description=""):
        self._enter("create_policy", policy_name, policy_document, description)
        self.add_policy(policy_name, [(policy_document, True)])
        return {"Policy": {"PolicyName": policy_name, "Description": description}}

    def create_policy_version(self, policy_name, policy_document, set_as_default=True):
        self._enter("create_policy_version", policy_name, policy_document, set_as_default)
        policy = self.policies[policy_name]
        if len(policy["versions"]) >= 5:
            raise RamError("Exceeded", code="LimitExceeded.Policy.Version", action="CreatePolicyVersion")
        if set_as_default:
            for version in policy["versions"]:
                version["IsDefaultVersion"] = False
        version_id = f"v{policy['next']}"
        policy["next"] += 1
        policy["versions"].append(
            {"VersionId": version_id, "IsDefaultVersion": set_as_default, "PolicyDocument": json.dumps(policy_document)}
        )
        return {"PolicyVersion": {"VersionId": version_id, "IsDefaultVersion": set_as_default}}

    def delete_policy_version(self, policy_name, version_id):
        self._enter("delete_policy_version", policy_name, version_id)
        versions = self.policies[policy_name]["versions"]
        target = next(v for v in versions if v["VersionId"] == version_id)
        if target["IsDefaultVersion"]:
            raise RamError("Cannot delete default", code="DeleteConflict.PolicyVersion.Default")
        versions.remove(target)
        return {}

    def list_policy_versions(self, policy_name, policy_type="Custom"):
        self._enter("list_policy_versions", policy_name, policy_type)
        return {"PolicyVersions": {"PolicyVersion": [dict(v) for v in self.policies[policy_name]["versions"]]}}

    def get_role(self, role_name):
        self._enter("get_role", role_name)
        if role_name not in self.roles:
            raise RamError("The role does not exist", code="EntityNotExist.Role", action="GetRole")
        return {"Role": dict(self.roles[role_name])}

    def create_role(self, role_name, assume_role_policy_document, description=""):
        self._enter("create_role", role_name, assume_role_policy_document, description)
        self.add_role(role_name, assume_role_policy_document)
        self.roles[role_name]["Description"] = description
        return {"Role": dict(self.roles[role_name])}

    def list_policies_for_role(self, role_name):
        self._enter("list_policies_for_role", role_name)
        return {
            "Policies": {
                "Policy": [{"PolicyName": name, "PolicyType": kind} for name, kind in self.attachments[role_name]]
            }
        }

    def attach_policy_to_role(self, policy_name, role_name, policy_type):
        self._enter("attach_policy_to_role", policy_name, role_name, policy_type)
        self.attachments[role_name].append((policy_name, policy_type))
        return {}


@pytest.fixture
def ram():
    return FakeRam()


@pytest.fixture
def no_wait():
    """Three attempts with no sleeping between them."""
    return RetryPolicy(max_tries=3, factor=0, jitter=False)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove credential variables and point the profile file somewhere empty."""
    for name in (
        "ALIBABA_CLOUD_ACCESS_KEY_ID",
        "ALIBABA_CLOUD_ACCESS_KEY_SECRET",
        "ALIBABA_CLOUD_SECURITY_TOKEN",
        "ALIBABA_CLOUD_REGION",
        "ALIBABA_CLOUD_ACCOUNT_ID",
        "PDUM_RAM_TIMEOUT",
        "PDUM_RAM_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PDUM_RAM_CONFIG", str(tmp_path / "missing.yaml"))
    return tmp_path
