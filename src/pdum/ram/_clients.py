"""Internal helpers to construct Alibaba Cloud SDK clients.

These helpers centralize ``AcsClient`` construction to keep options consistent
across the codebase. They are intentionally private; the public API surface
remains in ``client.py`` and ``admin.py``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from aliyunsdkcore.auth.credentials import AccessKeyCredential, StsTokenCredential
from aliyunsdkcore.client import AcsClient

if TYPE_CHECKING:
    from pdum.ram.profile import Profile


def acs_client(profile: "Profile") -> AcsClient:
    """Signed SDK client for ``profile``.

    SDK-level auto retry is off; retries are driven by :mod:`pdum.ram.retry`.
    """
    if profile.security_token:
        credential = StsTokenCredential(profile.access_key_id, profile.access_key_secret, profile.security_token)
    else:
        credential = AccessKeyCredential(profile.access_key_id, profile.access_key_secret)

    return AcsClient(
        region_id=profile.region,
        credential=credential,
        auto_retry=False,
        timeout=int(profile.timeout),
        connect_timeout=int(profile.timeout),
    )
