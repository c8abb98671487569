"""Bounded retry driver for RAM reconciliation.

Each reconciler wraps its whole read-then-write sequence in
:func:`retryable_call`. Every attempt re-reads remote state from scratch; no
result from a failed attempt is trusted by the next one.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import backoff

from pdum.ram._console import console, debug
from pdum.ram.types import RamError

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how patiently, to retry.

    Attributes
    ----------
    max_tries : int
        Total attempts, including the first one.
    max_time : float | None
        Give up once this many seconds have elapsed, if set.
    factor : float
        Multiplier for the exponential wait (``factor * 2 ** n`` seconds).
        ``0`` disables waiting, which is what tests use.
    max_value : float
        Upper bound for a single wait, in seconds.
    jitter : bool
        Apply full jitter to each wait.
    """

    max_tries: int = 3
    max_time: Optional[float] = None
    factor: float = 1.0
    max_value: float = 10.0
    jitter: bool = True

    @classmethod
    def from_profile(cls, profile) -> "RetryPolicy":
        return cls(max_tries=profile.retries)


def is_fatal(error: Exception) -> bool:
    """Return True for errors that would repeat on every attempt."""
    return isinstance(error, RamError) and error.kind.fatal


def _report_retry(details: dict) -> None:
    console.print(f"[red]retry {details['tries']} times[/red]", highlight=False)
    debug(f"{details['exception']!r}; waiting {details['wait']:.1f}s")


def _report_giveup(details: dict) -> None:
    debug(f"giving up after {details['tries']} attempt(s): {details['exception']!r}")


def retryable_call(
    operation: Callable[[int], T],
    *,
    policy: Optional[RetryPolicy] = None,
    giveup: Callable[[Exception], bool] = is_fatal,
) -> T:
    """Run ``operation`` until it succeeds, a fatal error occurs, or the policy is exhausted.

    Args:
        operation: Called as ``operation(attempt)`` with a 1-based attempt number.
        policy: Retry bounds. Defaults to ``RetryPolicy()``.
        giveup: Decides whether an error is fatal. Fatal errors propagate at once.

    Returns:
        Whatever ``operation`` returns on its first successful attempt

    Raises:
        Exception: The fatal error, or the last error once retries are exhausted

    Example:
        >>> retryable_call(lambda attempt: attempt)
        1
    """
    policy = policy or RetryPolicy()
    attempts = itertools.count(1)

    @backoff.on_exception(
        backoff.expo,
        Exception,
        max_tries=policy.max_tries,
        max_time=policy.max_time,
        giveup=giveup,
        jitter=backoff.full_jitter if policy.jitter else None,
        on_backoff=_report_retry,
        on_giveup=_report_giveup,
        factor=policy.factor,
        max_value=policy.max_value,
    )
    def _attempt() -> T:
        return operation(next(attempts))

    return _attempt()


__all__ = ["RetryPolicy", "is_fatal", "retryable_call"]
