r"""Retry decision logic shared by the blocking and async entry points.

This module provides the RetryDecider class that decides, for one caught
exception, whether the operation should be attempted again. The decision
is a pure function of the exception, the filters, the retry budget and
the number of retries already performed; applying it (waiting, invoking
callbacks, updating the counter) is left to the caller.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "RetryDecision"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

from aretry.filters import evaluate_filters
from aretry.retry.strategy import resolve_delay

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aretry.filters import FailureFilter


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of evaluating one failed attempt.

    Attributes:
        retry: Whether the operation should be attempted again.
        attempt: The retry counter after this decision. When ``retry`` is
            ``True`` this is the 1-based index of the upcoming retry.
        delay: Seconds to wait before the retry (``0.0`` when stopping).
        reason: Short human-readable explanation, used for logging.
    """

    retry: bool
    attempt: int
    delay: float
    reason: str


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    Args:
        max_attempts: Maximum number of retries beyond the first attempt.
        delay: Configured delay in seconds between attempts.
        filters: Filters deciding which exceptions are retryable. The
            sequence is read at decision time, so filters appended after
            construction are taken into account.

    Example:
        ```pycon
        >>> from aretry.retry.decider import RetryDecider
        >>> decider = RetryDecider(max_attempts=2, delay=0.1, filters=[])
        >>> decider.decide(ValueError("boom"), attempts_used=0)
        RetryDecision(retry=True, attempt=1, delay=0.1, reason='ValueError')
        >>> decider.decide(ValueError("boom"), attempts_used=2)
        RetryDecision(retry=False, attempt=2, delay=0.0, reason='max attempts exhausted')

        ```
    """

    def __init__(
        self,
        max_attempts: int,
        delay: float,
        filters: Sequence[FailureFilter],
    ) -> None:
        self.max_attempts = max_attempts
        self.delay = delay
        self.filters = filters

    def decide(self, error: Exception, attempts_used: int) -> RetryDecision:
        """Decide whether to retry after ``error``.

        Args:
            error: The exception raised by the last attempt.
            attempts_used: Number of retries already performed.

        Returns:
            The retry decision.
        """
        if not evaluate_filters(self.filters, error):
            return RetryDecision(
                retry=False, attempt=attempts_used, delay=0.0, reason="rejected by filters"
            )
        if attempts_used < self.max_attempts:
            return RetryDecision(
                retry=True,
                attempt=attempts_used + 1,
                delay=resolve_delay(self.delay),
                reason=type(error).__name__,
            )
        return RetryDecision(
            retry=False, attempt=attempts_used, delay=0.0, reason="max attempts exhausted"
        )
