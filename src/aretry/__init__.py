r"""aretry - Retry executor for unreliable operations.

This package re-invokes a failing operation according to a configurable
policy until it succeeds, exhausts its retry budget, or raises an
exception the policy does not consider retryable. It works with plain
callables and with coroutine functions.

Key Features:
    - Fixed retry budget and delay between attempts (1 second by default)
    - Exception filters combined with OR semantics, by predicate or by type
    - Ordered on-retry callbacks receiving the exception and retry index
    - Blocking (``run``) and asyncio (``run_async``) execution
    - Original exceptions re-raised unchanged, never wrapped
    - Ready-made filter for transient ``httpx`` failures

Example:
    ```pycon
    >>> import logging
    >>> from aretry import RetryPolicy
    >>> from aretry.filters import is_transient_http_error
    >>> policy = (
    ...     RetryPolicy.create(max_attempts=3, delay=0.5)
    ...     .add_filter(is_transient_http_error)
    ...     .add_typed_filter(OSError, lambda exc: exc.errno == 104)
    ...     .on_retry(lambda exc, n: logging.warning("retry %d after %r", n, exc))
    ... )
    >>> data = policy.run(load_remote_data)  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "RetryPolicy",
    "__version__",
    "exception_filter",
    "is_transient_http_error",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.config import DEFAULT_DELAY, DEFAULT_MAX_ATTEMPTS
from aretry.filters import exception_filter, is_transient_http_error
from aretry.policy import RetryPolicy

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
