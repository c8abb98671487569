"""Credential profile loading.

Profiles are read from a YAML file (``~/.fcli/config.yaml`` by default, or the
path in ``PDUM_RAM_CONFIG``) and then overlaid with environment variables::

    access_key_id: LTAI...
    access_key_secret: ...
    security_token: ...        # optional, for STS credentials
    default_region: cn-hangzhou
    timeout: 10                # seconds, per request
    retries: 3                 # attempts per reconciliation

Environment variables win over the file, so CI jobs can run without one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from pdum.ram._console import debug
from pdum.ram.types import ProfileError

DEFAULT_REGION = "cn-hangzhou"
DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 3

_ENV_KEYS = {
    "access_key_id": "ALIBABA_CLOUD_ACCESS_KEY_ID",
    "access_key_secret": "ALIBABA_CLOUD_ACCESS_KEY_SECRET",
    "security_token": "ALIBABA_CLOUD_SECURITY_TOKEN",
    "default_region": "ALIBABA_CLOUD_REGION",
    "account_id": "ALIBABA_CLOUD_ACCOUNT_ID",
    "timeout": "PDUM_RAM_TIMEOUT",
    "retries": "PDUM_RAM_RETRIES",
}


@dataclass
class Profile:
    """Credentials and request settings for RAM calls."""

    access_key_id: str
    access_key_secret: str = field(repr=False)
    security_token: Optional[str] = field(default=None, repr=False)
    region: str = DEFAULT_REGION
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    account_id: Optional[str] = None


def get_config_path() -> Path:
    """Return the profile file path (``PDUM_RAM_CONFIG`` or ``~/.fcli/config.yaml``)."""
    override = os.getenv("PDUM_RAM_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".fcli" / "config.yaml"


def _load_file(path: Path) -> dict:
    if not path.exists():
        debug(f"No profile file at {path}; using environment only")
        return {}

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProfileError(f"Could not parse profile file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProfileError(f"Profile file {path} must contain a mapping, got {type(data).__name__}")
    return data


def get_profile(path: Optional[Path] = None) -> Profile:
    """Load the active profile.

    Args:
        path: Profile file to read. Defaults to :func:`get_config_path`.

    Returns:
        The merged profile

    Raises:
        ProfileError: If the access key pair is missing or a numeric setting is malformed
    """
    path = Path(path) if path is not None else get_config_path()
    values = _load_file(path)

    for key, env_name in _ENV_KEYS.items():
        env_value = os.getenv(env_name)
        if env_value:
            values[key] = env_value

    access_key_id = values.get("access_key_id")
    access_key_secret = values.get("access_key_secret")
    if not access_key_id or not access_key_secret:
        raise ProfileError(
            f"No access key found. Set access_key_id/access_key_secret in {path} "
            f"or export {_ENV_KEYS['access_key_id']} and {_ENV_KEYS['access_key_secret']}."
        )

    try:
        timeout = float(values.get("timeout") or DEFAULT_TIMEOUT)
        retries = int(values.get("retries") or DEFAULT_RETRIES)
    except (TypeError, ValueError) as e:
        raise ProfileError(f"Invalid timeout/retries in profile: {e}") from e

    if retries < 1:
        raise ProfileError(f"retries must be at least 1, got {retries}")

    account_id = values.get("account_id")
    return Profile(
        access_key_id=str(access_key_id),
        access_key_secret=str(access_key_secret),
        security_token=values.get("security_token") or None,
        region=values.get("default_region") or DEFAULT_REGION,
        timeout=timeout,
        retries=retries,
        account_id=str(account_id) if account_id else None,
    )


__all__ = ["Profile", "get_config_path", "get_profile"]
