"""Custom exceptions for pdum.ram types."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Classification of a RAM error code."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    INVALID_PARAMETER = "invalid_parameter"
    TRANSIENT = "transient"

    @property
    def fatal(self) -> bool:
        """Errors of this kind repeat on every attempt and are never retried."""
        return self in (ErrorKind.PERMISSION_DENIED, ErrorKind.INVALID_PARAMETER)


_PERMISSION_CODES = ("NoPermission", "Forbidden", "NotAuthorized")


def classify(code: Optional[str]) -> ErrorKind:
    """Map a provider error code to an :class:`ErrorKind`."""
    if not code:
        return ErrorKind.TRANSIENT
    if code.startswith(_PERMISSION_CODES):
        return ErrorKind.PERMISSION_DENIED
    if code.startswith("InvalidParameter"):
        return ErrorKind.INVALID_PARAMETER
    if code.startswith("EntityNotExist"):
        return ErrorKind.NOT_FOUND
    return ErrorKind.TRANSIENT


class RamError(Exception):
    """Raised when a RAM API call fails.

    Attributes
    ----------
    code : str | None
        Provider error code (e.g., ``"EntityNotExist.Policy"``).
    message : str
        Provider error message.
    action : str | None
        The RAM action that failed (e.g., ``"GetPolicy"``).
    kind : ErrorKind
        Classification derived from ``code`` unless given explicitly.
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        action: Optional[str] = None,
        kind: Optional[ErrorKind] = None,
        request_id: Optional[str] = None,
        http_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.action = action
        self.kind = kind if kind is not None else classify(code)
        self.request_id = request_id
        self.http_status = http_status

    def __str__(self) -> str:
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message


class RamPermissionError(RamError):
    """Raised with a clarified message when the caller lacks a RAM permission."""

    def __init__(self, message: str, **kwargs):
        kwargs["kind"] = ErrorKind.PERMISSION_DENIED
        super().__init__(message, **kwargs)


class RoleNotFoundError(RamError):
    """Raised when a role is absent and creating it was not requested."""

    def __init__(self, role_name: str):
        super().__init__(f"role {role_name} does not exist", code="EntityNotExist.Role", action="GetRole")
        self.role_name = role_name


class ProfileError(Exception):
    """Raised when no usable credential profile can be loaded."""

    pass


__all__ = [
    "ErrorKind",
    "ProfileError",
    "RamError",
    "RamPermissionError",
    "RoleNotFoundError",
    "classify",
]
