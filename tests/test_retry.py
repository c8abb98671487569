"""Tests for the bounded retry driver."""

import pytest

from pdum.ram.retry import RetryPolicy, is_fatal, retryable_call
from pdum.ram.types import ErrorKind, RamError, RamPermissionError


def test_returns_first_success(no_wait):
    seen = []

    def operation(attempt):
        seen.append(attempt)
        return "done"

    assert retryable_call(operation, policy=no_wait) == "done"
    assert seen == [1]


def test_attempt_counter_increments(no_wait):
    seen = []

    def operation(attempt):
        seen.append(attempt)
        if attempt < 3:
            raise RamError("busy", code="ServiceUnavailable")
        return attempt

    assert retryable_call(operation, policy=no_wait) == 3
    assert seen == [1, 2, 3]


def test_last_error_propagates_when_exhausted(no_wait):
    def operation(attempt):
        raise RamError(f"failure {attempt}", code="InternalError")

    with pytest.raises(RamError, match="failure 3"):
        retryable_call(operation, policy=no_wait)


def test_fatal_error_short_circuits(no_wait):
    seen = []

    def operation(attempt):
        seen.append(attempt)
        raise RamError("nope", code="NoPermission")

    with pytest.raises(RamError):
        retryable_call(operation, policy=no_wait)
    assert seen == [1]


def test_custom_giveup(no_wait):
    seen = []

    def operation(attempt):
        seen.append(attempt)
        raise KeyError("stop")

    with pytest.raises(KeyError):
        retryable_call(operation, policy=no_wait, giveup=lambda e: isinstance(e, KeyError))
    assert seen == [1]


def test_single_try_policy():
    seen = []

    def operation(attempt):
        seen.append(attempt)
        raise RamError("busy", code="ServiceUnavailable")

    with pytest.raises(RamError):
        retryable_call(operation, policy=RetryPolicy(max_tries=1, factor=0, jitter=False))
    assert seen == [1]


def test_retry_is_reported_on_console(no_wait, capsys):
    def operation(attempt):
        if attempt == 1:
            raise RamError("busy", code="ServiceUnavailable")
        return attempt

    retryable_call(operation, policy=no_wait)
    assert "retry 1 times" in capsys.readouterr().out


def test_is_fatal_classification():
    assert is_fatal(RamError("x", code="NoPermission"))
    assert is_fatal(RamError("x", code="InvalidParameter.RoleName"))
    assert is_fatal(RamPermissionError("x"))
    assert not is_fatal(RamError("x", code="EntityNotExist.Role"))
    assert not is_fatal(RamError("x", code="Throttling"))
    assert not is_fatal(RamError("x", kind=ErrorKind.TRANSIENT))
    assert not is_fatal(ValueError("x"))


def test_policy_from_profile():
    class _Profile:
        retries = 5

    assert RetryPolicy.from_profile(_Profile()).max_tries == 5
