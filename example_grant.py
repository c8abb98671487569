#!/usr/bin/env python3
"""Example script provisioning a function role with a log-writing policy.

This script shows how to make sure a role exists and grant it a custom policy.

Usage:
    python example_grant.py my_service

Note: This requires a profile (``~/.fcli/config.yaml`` or ALIBABA_CLOUD_* variables)
allowed to manage RAM roles and policies.
"""

import sys

from pdum.ram import FC_ASSUME_ROLE_POLICY, ensure_attached, ensure_role, grant, normalize_name


def main():
    """Provision ``<service>-role`` and grant it ``<service>-logs``."""
    service = normalize_name(sys.argv[1] if len(sys.argv) > 1 else "demo_service")
    role_name = f"{service}-role"
    policy_name = f"{service}-logs"

    role = ensure_role(role_name, True, f"Role for {service}", FC_ASSUME_ROLE_POLICY)
    print(f"Role: {role.role_name} ({role.arn})")

    grant(
        policy_name,
        {
            "Version": "1",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Action": ["log:PostLogStoreLogs"],
                    "Resource": "*",
                }
            ],
        },
        role_name,
    )
    print(f"Granted custom policy {policy_name} to {role_name}")

    ensure_attached("AliyunOSSReadOnlyAccess", role_name)
    print(f"Attached AliyunOSSReadOnlyAccess to {role_name}")


if __name__ == "__main__":
    main()
