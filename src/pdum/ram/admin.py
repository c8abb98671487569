"""Idempotent reconciliation of RAM roles, policies and attachments.

Each public function converges one remote resource to the requested state.
The RAM API is neither transactional nor strongly consistent, so every
function runs its whole read-then-write sequence inside
:func:`pdum.ram.retry.retryable_call` and re-reads remote state on every
attempt. Permission and invalid-parameter errors are never retried.

Concurrent callers reconciling the same name are not coordinated; sequences
such as prune-then-create-version can interleave with another caller's.
"""

from __future__ import annotations

from typing import Optional

from pdum.ram._console import console, debug
from pdum.ram.client import RamClient, build_client
from pdum.ram.profile import get_profile
from pdum.ram.retry import RetryPolicy, is_fatal, retryable_call
from pdum.ram.types import (
    DEFAULT_ROLE_DESCRIPTION,
    FC_ASSUME_ROLE_POLICY,
    POLICY_DESCRIPTION,
    AttachedPolicy,
    ErrorKind,
    PolicyType,
    PolicyVersion,
    RamError,
    Role,
    RoleNotFoundError,
)


def normalize_name(name: str) -> str:
    """Adapt a name to RAM naming rules by replacing underscores with hyphens.

    Example:
        >>> normalize_name("my_service_role")
        'my-service-role'
    """
    return name.replace("_", "-")


def _resolve(client: Optional[RamClient], retry_policy: Optional[RetryPolicy]) -> tuple[RamClient, RetryPolicy]:
    """Build a fresh client from the active profile unless one is given."""
    if client is None:
        profile = get_profile()
        return build_client(profile), retry_policy or RetryPolicy.from_profile(profile)
    return client, retry_policy or RetryPolicy()


# --- Policies ---


def policy_exists(client: RamClient, policy_name: str) -> bool:
    """Return True if the custom policy ``policy_name`` exists.

    Raises:
        RamError: For any failure other than the policy being absent
    """
    try:
        client.get_policy(policy_name, PolicyType.CUSTOM.value)
    except RamError as e:
        if e.kind is not ErrorKind.NOT_FOUND:
            raise
        return False
    return True


def list_policy_versions(client: RamClient, policy_name: str) -> list[PolicyVersion]:
    """List stored versions of a custom policy (empty if the provider returns none)."""
    response = client.list_policy_versions(policy_name, PolicyType.CUSTOM.value)
    versions = (response.get("PolicyVersions") or {}).get("PolicyVersion") or []
    return [PolicyVersion.from_response(v) for v in versions]


def prune_policy_versions(client: RamClient, policy_name: str) -> list[str]:
    """Delete every non-default version of ``policy_name``.

    RAM caps the number of stored versions per policy and refuses to delete the
    default one, so this leaves exactly the default version behind.

    Returns:
        The deleted version IDs
    """
    deleted = []
    for version in list_policy_versions(client, policy_name):
        if version.is_default_version:
            continue
        debug(f"Deleting version {version.version_id} of policy {policy_name}")
        client.delete_policy_version(policy_name, version.version_id)
        deleted.append(version.version_id)
    return deleted


def ensure_policy(
    policy_name: str,
    policy_document: dict,
    *,
    client: Optional[RamClient] = None,
    retry_policy: Optional[RetryPolicy] = None,
) -> None:
    """Ensure the custom policy ``policy_name`` exists with ``policy_document`` as its default version.

    A missing policy is created. An existing one is updated append-and-promote
    style: non-default versions are pruned, then the document is stored as a
    new version marked default.

    Args:
        policy_name: The custom policy name
        policy_document: The policy document (a dict, serialized to JSON)
        client: RAM client to use. If None, a new one is built from the active profile.
        retry_policy: Retry bounds. If None, taken from the active profile.

    Raises:
        RamPermissionError: If the caller lacks a required RAM permission (never retried)
        RamError: If the provider rejects the request, or retries are exhausted

    Example:
        >>> from pdum.ram import ensure_policy
        >>> ensure_policy("fc-logs-writer", {
        ...     "Version": "1",
        ...     "Statement": [{"Effect": "Allow", "Action": ["log:PostLogStoreLogs"], "Resource": "*"}],
        ... })
    """
    client, retry_policy = _resolve(client, retry_policy)

    def _reconcile(attempt: int) -> None:
        debug(f"ensure_policy {policy_name} (attempt {attempt})")
        if not policy_exists(client, policy_name):
            client.create_policy(policy_name, policy_document, description=POLICY_DESCRIPTION)
            console.print(f"[green]Created policy {policy_name}.[/green]")
            return

        prune_policy_versions(client, policy_name)
        client.create_policy_version(policy_name, policy_document, set_as_default=True)
        console.print(f"[green]Updated policy {policy_name}.[/green]")

    retryable_call(_reconcile, policy=retry_policy)


# --- Roles ---


def get_role(client: RamClient, role_name: str) -> Optional[Role]:
    """Fetch a role, returning None if it does not exist."""
    try:
        response = client.get_role(role_name)
    except RamError as e:
        debug(f"error when getRole: {role_name}, error is: {e!r}")
        if e.code != "EntityNotExist.Role":
            raise
        return None
    return Role.from_response(response)


def _role_giveup(error: Exception) -> bool:
    return is_fatal(error) or isinstance(error, RoleNotFoundError)


def ensure_role(
    role_name: str,
    create_if_not_exist: bool = False,
    description: str = DEFAULT_ROLE_DESCRIPTION,
    assume_role_policy: Optional[dict] = None,
    *,
    client: Optional[RamClient] = None,
    retry_policy: Optional[RetryPolicy] = None,
) -> Role:
    """Ensure the role ``role_name`` exists.

    An existing role is returned as-is; its trust policy is not compared with
    or updated to ``assume_role_policy``.

    Args:
        role_name: The role name
        create_if_not_exist: Create the role if it is absent
        description: Description for a newly created role
        assume_role_policy: Trust policy for a newly created role.
            Defaults to ``FC_ASSUME_ROLE_POLICY``.
        client: RAM client to use. If None, a new one is built from the active profile.
        retry_policy: Retry bounds. If None, taken from the active profile.

    Returns:
        The existing or newly created role

    Raises:
        RoleNotFoundError: If the role is absent and ``create_if_not_exist`` is False
        RamPermissionError: If the caller lacks a required RAM permission (never retried)
        RamError: If the provider rejects the request, or retries are exhausted
    """
    client, retry_policy = _resolve(client, retry_policy)
    trust_policy = assume_role_policy if assume_role_policy else FC_ASSUME_ROLE_POLICY

    def _reconcile(attempt: int) -> Role:
        debug(f"ensure_role {role_name} (attempt {attempt})")
        role = get_role(client, role_name)
        if role is not None:
            return role

        if not create_if_not_exist:
            raise RoleNotFoundError(role_name)

        response = client.create_role(role_name, trust_policy, description=description)
        console.print(f"[green]Created role {role_name}.[/green]")
        return Role.from_response(response)

    return retryable_call(_reconcile, policy=retry_policy, giveup=_role_giveup)


# --- Attachments ---


def list_attached_policies(role_name: str, *, client: Optional[RamClient] = None) -> list[AttachedPolicy]:
    """List the policies attached to ``role_name``."""
    if client is None:
        client = build_client()
    response = client.list_policies_for_role(role_name)
    policies = (response.get("Policies") or {}).get("Policy") or []
    return [AttachedPolicy.from_response(p) for p in policies]


def ensure_attached(
    policy_name: str,
    role_name: str,
    policy_type: str = PolicyType.SYSTEM.value,
    *,
    client: Optional[RamClient] = None,
    retry_policy: Optional[RetryPolicy] = None,
) -> None:
    """Ensure ``policy_name`` is attached to ``role_name``.

    Attached policy names are compared case-insensitively; if one matches, no
    attach call is made.

    Args:
        policy_name: The policy name
        role_name: The role name
        policy_type: ``"System"`` for provider-managed policies, ``"Custom"`` for your own
        client: RAM client to use. If None, a new one is built from the active profile.
        retry_policy: Retry bounds. If None, taken from the active profile.

    Raises:
        ValueError: If ``policy_type`` is neither ``"System"`` nor ``"Custom"``
        RamPermissionError: If the caller lacks a required RAM permission (never retried)
        RamError: If the provider rejects the request, or retries are exhausted
    """
    policy_type = PolicyType(policy_type).value
    client, retry_policy = _resolve(client, retry_policy)

    def _reconcile(attempt: int) -> None:
        debug(f"ensure_attached {policy_name} -> {role_name} (attempt {attempt})")
        attached = list_attached_policies(role_name, client=client)
        if any(p.matches(policy_name) for p in attached):
            debug(f"Policy {policy_name} already attached to {role_name}")
            return

        client.attach_policy_to_role(policy_name, role_name, policy_type)
        console.print(f"[green]Attached {policy_type} policy {policy_name} to role {role_name}.[/green]")

    retryable_call(_reconcile, policy=retry_policy)


def grant(
    policy_name: str,
    policy_document: dict,
    role_name: str,
    *,
    client: Optional[RamClient] = None,
    retry_policy: Optional[RetryPolicy] = None,
) -> None:
    """Create or update a custom policy, then attach it to a role.

    The two steps are not rolled back: if attaching fails, the policy stays
    created and the error propagates.
    """
    debug("begin ensure_policy")
    ensure_policy(policy_name, policy_document, client=client, retry_policy=retry_policy)
    debug("begin ensure_attached")
    ensure_attached(policy_name, role_name, PolicyType.CUSTOM.value, client=client, retry_policy=retry_policy)


__all__ = [
    "ensure_attached",
    "ensure_policy",
    "ensure_role",
    "get_role",
    "grant",
    "list_attached_policies",
    "list_policy_versions",
    "normalize_name",
    "policy_exists",
    "prune_policy_versions",
]
