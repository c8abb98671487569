"""Shared constants for pdum.ram types."""

from __future__ import annotations

RAM_ENDPOINT = "ram.aliyuncs.com"
RAM_API_VERSION = "2015-05-01"

POLICY_DESCRIPTION = "generated by pdum_ram"
DEFAULT_ROLE_DESCRIPTION = "FunctionCompute Default Role"

FC_SERVICE = "fc.aliyuncs.com"
FNF_SERVICE = "fnf.aliyuncs.com"


def assume_role_policy(*services: str) -> dict:
    """Build a trust policy document letting ``services`` assume a role.

    Example
    -------
    >>> assume_role_policy("fc.aliyuncs.com")["Statement"][0]["Principal"]
    {'Service': ['fc.aliyuncs.com']}
    """
    return {
        "Statement": [
            {
                "Action": "sts:AssumeRole",
                "Effect": "Allow",
                "Principal": {"Service": list(services)},
            }
        ],
        "Version": "1",
    }


FC_ASSUME_ROLE_POLICY: dict = assume_role_policy(FC_SERVICE)
FNF_ASSUME_ROLE_POLICY: dict = assume_role_policy(FNF_SERVICE)

__all__ = [
    "DEFAULT_ROLE_DESCRIPTION",
    "FC_ASSUME_ROLE_POLICY",
    "FC_SERVICE",
    "FNF_ASSUME_ROLE_POLICY",
    "FNF_SERVICE",
    "POLICY_DESCRIPTION",
    "RAM_API_VERSION",
    "RAM_ENDPOINT",
    "assume_role_policy",
]
