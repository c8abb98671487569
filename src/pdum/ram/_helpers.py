"""Internal helper functions."""

from __future__ import annotations

from aliyunsdkcore.acs_exception.exceptions import ClientException, ServerException

from pdum.ram.types import ErrorKind, RamError, RamPermissionError


def _to_ram_error(exc: Exception, action: str) -> RamError:
    """Translate an SDK exception into a tagged :class:`RamError`."""
    if isinstance(exc, ServerException):
        return RamError(
            exc.get_error_msg() or "",
            code=exc.get_error_code(),
            action=action,
            request_id=exc.get_request_id(),
            http_status=exc.get_http_status(),
        )
    if isinstance(exc, ClientException):
        # Client-side failures (timeouts, connection resets) are worth retrying
        return RamError(
            exc.get_error_msg() or "",
            code=exc.get_error_code(),
            action=action,
            kind=ErrorKind.TRANSIENT,
        )
    return RamError(str(exc), action=action, kind=ErrorKind.TRANSIENT)


def raise_for_permission(error: RamError, action: str) -> None:
    """Raise a clarified :class:`RamPermissionError` if ``error`` is a permission denial.

    The provider reports denials with a terse code; the rewritten message names
    the exact ``ram:<Action>`` that was refused and the managed policy that
    grants it. Returns normally for every other error.
    """
    if error.kind is not ErrorKind.PERMISSION_DENIED or isinstance(error, RamPermissionError):
        return

    message = (
        f"You are not authorized to do action ram:{action}.\n"
        f"Provider response: {error}\n"
        "Ask the account owner to grant the AliyunRAMFullAccess policy (or a custom policy "
        f"allowing ram:{action}) to the current user or role, then try again."
    )
    if error.request_id:
        message += f"\nRequestId: {error.request_id}"

    raise RamPermissionError(
        message,
        code=error.code,
        action=action,
        request_id=error.request_id,
        http_status=error.http_status,
    ) from error
