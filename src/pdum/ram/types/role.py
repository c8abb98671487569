"""RAM role dataclass."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Role:
    """Information about a RAM role.

    Attributes
    ----------
    role_name : str
        Provider-unique role name (e.g., ``"fc-default-role"``).
    role_id : str
        Provider-assigned identifier.
    arn : str
        Role ARN (e.g., ``"acs:ram::123456789:role/fc-default-role"``).
    description : str
        Free-form description.
    assume_role_policy_document : dict | None
        The parsed trust policy, or ``None`` if the provider omitted it.
    create_date : str
        Creation timestamp as reported by the provider.
    """

    role_name: str
    role_id: str = ""
    arn: str = ""
    description: str = ""
    assume_role_policy_document: Optional[dict] = field(default=None, repr=False)
    create_date: str = ""

    @classmethod
    def from_response(cls, response: dict) -> "Role":
        """Build a Role from a ``GetRole`` or ``CreateRole`` response."""
        info = response.get("Role", response)
        document = info.get("AssumeRolePolicyDocument")
        if isinstance(document, str) and document:
            document = json.loads(document)
        return cls(
            role_name=info["RoleName"],
            role_id=info.get("RoleId", ""),
            arn=info.get("Arn", ""),
            description=info.get("Description", ""),
            assume_role_policy_document=document or None,
            create_date=info.get("CreateDate", ""),
        )


__all__ = ["Role"]
