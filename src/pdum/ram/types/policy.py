"""RAM policy dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PolicyType(str, Enum):
    """Who manages a policy: the account owner (``Custom``) or the provider (``System``)."""

    CUSTOM = "Custom"
    SYSTEM = "System"


@dataclass
class PolicyVersion:
    """One stored version of a policy document."""

    version_id: str
    is_default_version: bool
    policy_document: str = ""
    create_date: str = ""

    @classmethod
    def from_response(cls, info: dict) -> "PolicyVersion":
        return cls(
            version_id=info["VersionId"],
            is_default_version=info.get("IsDefaultVersion", True) is not False,
            policy_document=info.get("PolicyDocument", ""),
            create_date=info.get("CreateDate", ""),
        )


@dataclass
class AttachedPolicy:
    """A policy attached to a role, as listed by ``ListPoliciesForRole``."""

    policy_name: str
    policy_type: str
    description: str = ""

    @classmethod
    def from_response(cls, info: dict) -> "AttachedPolicy":
        return cls(
            policy_name=info["PolicyName"],
            policy_type=info.get("PolicyType", ""),
            description=info.get("Description", ""),
        )

    def matches(self, policy_name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.policy_name.lower() == policy_name.lower()


__all__ = ["AttachedPolicy", "PolicyType", "PolicyVersion"]
