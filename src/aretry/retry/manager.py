r"""Callback manager for retry notifications.

This module provides the CallbackManager class that stores the callbacks
registered with ``RetryPolicy.on_retry`` and invokes them, in order, each
time a retry is granted.
"""

from __future__ import annotations

__all__ = ["CallbackManager", "RetryCallback"]

import inspect
from collections.abc import Callable

RetryCallback = Callable[[Exception, int], object]


class CallbackManager:
    """Manages the on-retry callbacks of a policy.

    Callbacks receive the exception that triggered the retry and the
    1-based index of the retry. Exceptions raised by a callback are not
    caught: they propagate to the caller of the policy and end the retry
    sequence.

    Attributes:
        callbacks: The registered callbacks, in registration order.
    """

    def __init__(self) -> None:
        self.callbacks: list[RetryCallback] = []

    def add(self, callback: RetryCallback) -> None:
        """Register a callback after the existing ones.

        Args:
            callback: The callback to register.
        """
        self.callbacks.append(callback)

    def on_retry(self, error: Exception, attempt: int) -> None:
        """Invoke every callback in registration order.

        Args:
            error: The exception that triggered the retry.
            attempt: The 1-based retry index.

        Raises:
            TypeError: If a callback returns an awaitable, which cannot be
                awaited from blocking code.
        """
        for callback in self.callbacks:
            result = callback(error, attempt)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                msg = (
                    f"on-retry callback {callback!r} returned an awaitable; "
                    "use run_async to await it"
                )
                raise TypeError(msg)

    async def on_retry_async(self, error: Exception, attempt: int) -> None:
        """Invoke every callback in registration order, awaiting async ones.

        A callback returning an awaitable (for example an ``async def``
        function) is awaited before the next callback runs.

        Args:
            error: The exception that triggered the retry.
            attempt: The 1-based retry index.
        """
        for callback in self.callbacks:
            result = callback(error, attempt)
            if inspect.isawaitable(result):
                await result
