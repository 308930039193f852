r"""Retry policy: configuration and execution of retried operations.

This module provides the RetryPolicy class. A policy is configured with
a retry budget, a delay, filters and callbacks, and then drives one
operation until it succeeds or fails for good, either blocking the
calling thread (``run``) or suspending the calling coroutine
(``run_async``).
"""

from __future__ import annotations

__all__ = ["RetryPolicy"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from aretry.config import DEFAULT_MAX_ATTEMPTS
from aretry.filters import exception_filter
from aretry.retry.decider import RetryDecider
from aretry.retry.manager import CallbackManager
from aretry.utils.structured_logging import log_structured
from aretry.utils.validation import validate_callable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.filters import FailureFilter
    from aretry.retry.decider import RetryDecision
    from aretry.retry.manager import RetryCallback

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)

logger: logging.Logger = logging.getLogger(__name__)


class RetryPolicy:
    """Re-invokes a failing operation according to a retry policy.

    When the operation raises, the exception is first checked against the
    registered filters (any filter accepting it makes it retryable; no
    filters means everything is retryable). A retryable exception with
    budget left increments the retry counter, waits ``delay`` seconds
    (or the 1 second default), runs the on-retry callbacks in order, and
    invokes the operation again. Otherwise the original exception is
    re-raised unchanged.

    Configuration methods return the policy so they can be chained, and
    are expected to be called before execution. Each call to ``run`` or
    ``run_async`` starts from a zero retry counter, so an instance may be
    reused sequentially. An instance must not be shared by concurrent
    executions: the counter is not synchronized.

    Args:
        max_attempts: Maximum number of retries beyond the first attempt.
            A value ``<= 0`` disables the policy: the operation is invoked
            once and its exception, if any, propagates immediately.
        delay: Seconds to wait between a failed attempt and the next
            retry. A value ``<= 0`` selects the default of 1 second.

    Example:
        ```pycon
        >>> from aretry import RetryPolicy
        >>> calls = []
        >>> def flaky() -> str:
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("unreachable")
        ...     return "ok"
        ...
        >>> policy = (
        ...     RetryPolicy.create(max_attempts=5, delay=0.01)
        ...     .add_typed_filter(ConnectionError)
        ...     .on_retry(lambda exc, n: print(f"retry {n}: {exc}"))
        ... )
        >>> policy.run(flaky)
        retry 1: unreachable
        retry 2: unreachable
        'ok'

        ```
    """

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS, delay: float = 0.0) -> None:
        self.max_attempts = max_attempts
        self.delay = delay
        self._filters: list[FailureFilter] = []
        self._callbacks = CallbackManager()
        self._attempts_used = 0

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_attempts={self.max_attempts}, "
            f"delay={self.delay}, filters={len(self._filters)}, "
            f"callbacks={len(self._callbacks.callbacks)})"
        )

    @classmethod
    def create(cls, max_attempts: int = DEFAULT_MAX_ATTEMPTS, delay: float = 0.0) -> RetryPolicy:
        """Create a new policy with no filters and no callbacks.

        Args:
            max_attempts: Maximum number of retries beyond the first attempt.
            delay: Seconds to wait between attempts (``<= 0`` selects the
                1 second default).

        Returns:
            The new policy.
        """
        return cls(max_attempts=max_attempts, delay=delay)

    @property
    def attempts_used(self) -> int:
        """Number of retries performed by the current or last execution."""
        return self._attempts_used

    @property
    def filters(self) -> tuple[FailureFilter, ...]:
        """The registered filters, in registration order."""
        return tuple(self._filters)

    @property
    def callbacks(self) -> tuple[RetryCallback, ...]:
        """The registered on-retry callbacks, in registration order."""
        return tuple(self._callbacks.callbacks)

    def add_filter(self, predicate: FailureFilter) -> RetryPolicy:
        """Register a filter deciding which exceptions are retryable.

        Filters are combined with a logical OR: an exception is retried
        if any registered filter returns ``True`` for it.

        Args:
            predicate: Function receiving the exception and returning
                ``True`` if it is retryable.

        Returns:
            The policy itself.

        Raises:
            TypeError: If ``predicate`` is ``None`` or not callable.
        """
        validate_callable(predicate, "predicate")
        self._filters.append(predicate)
        return self

    def add_typed_filter(
        self,
        exc_type: type[E] | tuple[type[E], ...],
        refine: Callable[[E], bool] | None = None,
    ) -> RetryPolicy:
        """Register a filter accepting exceptions of a given type.

        Args:
            exc_type: The exception class, or tuple of classes, to retry.
                Subclasses are retried as well.
            refine: Optional predicate further restricting which
                exceptions of type ``exc_type`` are retried.

        Returns:
            The policy itself.

        Raises:
            TypeError: If ``exc_type`` is not an exception class or tuple
                of exception classes, or if ``refine`` is not callable.

        Example:
            ```pycon
            >>> from aretry import RetryPolicy
            >>> policy = (
            ...     RetryPolicy.create(max_attempts=3)
            ...     .add_typed_filter(TimeoutError)
            ...     .add_typed_filter(OSError, lambda exc: exc.errno == 104)
            ... )
            >>> len(policy.filters)
            2

            ```
        """
        self._filters.append(exception_filter(exc_type, refine))
        return self

    def on_retry(self, callback: RetryCallback) -> RetryPolicy:
        """Register a callback invoked each time a retry is granted.

        The callback receives the exception that triggered the retry and
        the 1-based retry index. It runs after the wait and before the
        operation is invoked again. Exceptions raised by the callback
        propagate to the caller and end the retry sequence.

        Args:
            callback: The callback to register.

        Returns:
            The policy itself.

        Raises:
            TypeError: If ``callback`` is ``None`` or not callable.
        """
        validate_callable(callback, "callback")
        self._callbacks.add(callback)
        return self

    def reset(self) -> RetryPolicy:
        """Reset the retry counter to zero.

        Returns:
            The policy itself.
        """
        self._attempts_used = 0
        return self

    def run(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Invoke ``operation`` until it succeeds or fails for good.

        The calling thread is blocked during the waits between attempts.

        Args:
            operation: The callable to invoke.
            *args: Positional arguments passed to ``operation`` on every
                attempt.
            **kwargs: Keyword arguments passed to ``operation`` on every
                attempt.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            TypeError: If ``operation`` is ``None`` or not callable.
            Exception: The exception of the last attempt, unchanged, when
                it is not retryable or the retry budget is exhausted, or
                the exception raised by an on-retry callback.
        """
        validate_callable(operation, "operation")
        self.reset()
        if self.max_attempts <= 0:
            return operation(*args, **kwargs)

        decider = self._make_decider()
        while True:
            try:
                return operation(*args, **kwargs)
            except Exception as exc:
                error = exc
                decision = self._evaluate(decider, exc)
                if not decision.retry:
                    raise
            time.sleep(decision.delay)
            self._callbacks.on_retry(error, decision.attempt)

    async def run_async(
        self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> T:
        """Await ``operation`` until it succeeds or fails for good.

        Same control flow as ``run``, but the waits use ``asyncio.sleep``
        so the event loop keeps running other tasks, and on-retry
        callbacks returning an awaitable are awaited. Cancelling the task
        running this coroutine stops the retry sequence.

        Args:
            operation: Callable returning an awaitable, typically an
                ``async def`` function.
            *args: Positional arguments passed to ``operation`` on every
                attempt.
            **kwargs: Keyword arguments passed to ``operation`` on every
                attempt.

        Returns:
            The result of the first successful attempt.

        Raises:
            TypeError: If ``operation`` is ``None`` or not callable.
            Exception: The exception of the last attempt, unchanged, when
                it is not retryable or the retry budget is exhausted, or
                the exception raised by an on-retry callback.

        Example:
            ```pycon
            >>> import asyncio
            >>> from aretry import RetryPolicy
            >>> async def fetch() -> int:
            ...     return 42
            ...
            >>> asyncio.run(RetryPolicy.create(max_attempts=2).run_async(fetch))
            42

            ```
        """
        validate_callable(operation, "operation")
        self.reset()
        if self.max_attempts <= 0:
            return await operation(*args, **kwargs)

        decider = self._make_decider()
        while True:
            try:
                return await operation(*args, **kwargs)
            except Exception as exc:
                error = exc
                decision = self._evaluate(decider, exc)
                if not decision.retry:
                    raise
            await asyncio.sleep(decision.delay)
            await self._callbacks.on_retry_async(error, decision.attempt)

    def _make_decider(self) -> RetryDecider:
        return RetryDecider(max_attempts=self.max_attempts, delay=self.delay, filters=self._filters)

    def _evaluate(self, decider: RetryDecider, error: Exception) -> RetryDecision:
        """Evaluate a failed attempt and record a granted retry."""
        decision = decider.decide(error, self._attempts_used)
        if decision.retry:
            self._attempts_used = decision.attempt
            log_structured(
                logger,
                logging.DEBUG,
                f"Retry {decision.attempt}/{self.max_attempts} after {decision.reason}: "
                f"waiting {decision.delay:.2f}s",
                attempt=decision.attempt,
                max_attempts=self.max_attempts,
                delay=decision.delay,
                error_type=type(error).__name__,
            )
        else:
            log_structured(
                logger,
                logging.DEBUG,
                f"Not retrying {type(error).__name__} ({decision.reason})",
                attempt=decision.attempt,
                max_attempts=self.max_attempts,
                error_type=type(error).__name__,
            )
        return decision
