"""Idempotent provisioning of Alibaba Cloud RAM roles and policies"""

from pdum.ram.admin import (
    ensure_attached,
    ensure_policy,
    ensure_role,
    grant,
    list_attached_policies,
    normalize_name,
)
from pdum.ram.client import RamClient, build_client
from pdum.ram.profile import Profile, get_profile
from pdum.ram.retry import RetryPolicy, retryable_call
from pdum.ram.types import (
    FC_ASSUME_ROLE_POLICY,
    FNF_ASSUME_ROLE_POLICY,
    AttachedPolicy,
    ErrorKind,
    PolicyType,
    PolicyVersion,
    ProfileError,
    RamError,
    RamPermissionError,
    Role,
    RoleNotFoundError,
)

__version__ = "0.1.0-alpha"


__all__ = [
    "__version__",
    "ensure_attached",
    "ensure_policy",
    "ensure_role",
    "grant",
    "list_attached_policies",
    "normalize_name",
    "build_client",
    "get_profile",
    "retryable_call",
    "FC_ASSUME_ROLE_POLICY",
    "FNF_ASSUME_ROLE_POLICY",
    "AttachedPolicy",
    "ErrorKind",
    "PolicyType",
    "PolicyVersion",
    "Profile",
    "ProfileError",
    "RamClient",
    "RamError",
    "RamPermissionError",
    "RetryPolicy",
    "Role",
    "RoleNotFoundError",
]
