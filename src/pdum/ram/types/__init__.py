"""Public exports for pdum.ram types."""

from __future__ import annotations

from .constants import (
    DEFAULT_ROLE_DESCRIPTION,
    FC_ASSUME_ROLE_POLICY,
    FNF_ASSUME_ROLE_POLICY,
    POLICY_DESCRIPTION,
    RAM_API_VERSION,
    RAM_ENDPOINT,
    assume_role_policy,
)
from .exceptions import ErrorKind, ProfileError, RamError, RamPermissionError, RoleNotFoundError, classify
from .policy import AttachedPolicy, PolicyType, PolicyVersion
from .role import Role

__all__ = [
    "AttachedPolicy",
    "DEFAULT_ROLE_DESCRIPTION",
    "ErrorKind",
    "FC_ASSUME_ROLE_POLICY",
    "FNF_ASSUME_ROLE_POLICY",
    "POLICY_DESCRIPTION",
    "PolicyType",
    "PolicyVersion",
    "ProfileError",
    "RAM_API_VERSION",
    "RAM_ENDPOINT",
    "RamError",
    "RamPermissionError",
    "Role",
    "RoleNotFoundError",
    "assume_role_policy",
    "classify",
]
