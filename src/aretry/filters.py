r"""Retry filters deciding which exceptions are retryable.

A filter is a predicate ``Callable[[Exception], bool]`` that returns
``True`` when an exception is eligible for retry. A policy retries an
exception if any of its filters accepts it, and retries every exception
when no filter is registered.
"""

from __future__ import annotations

__all__ = ["FailureFilter", "evaluate_filters", "exception_filter", "is_transient_http_error"]

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

import httpx

from aretry.config import RETRY_STATUS_CODES
from aretry.utils.validation import validate_callable, validate_exception_type

if TYPE_CHECKING:
    from collections.abc import Sequence

E = TypeVar("E", bound=BaseException)

FailureFilter = Callable[[Exception], bool]


def evaluate_filters(filters: Sequence[FailureFilter], error: Exception) -> bool:
    """Decide whether an exception is eligible for retry.

    Filters are combined with a logical OR and evaluated in order; the
    evaluation stops at the first filter that accepts the exception.

    Args:
        filters: The registered filters.
        error: The exception raised by the operation.

    Returns:
        ``True`` if ``filters`` is empty or at least one filter accepts
        ``error``, otherwise ``False``.

    Example:
        ```pycon
        >>> from aretry.filters import evaluate_filters, exception_filter
        >>> evaluate_filters([], KeyError("x"))
        True
        >>> evaluate_filters([exception_filter(OSError)], KeyError("x"))
        False
        >>> evaluate_filters(
        ...     [exception_filter(OSError), exception_filter(KeyError)], KeyError("x")
        ... )
        True

        ```
    """
    if not filters:
        return True
    return any(accept(error) for accept in filters)


def exception_filter(
    exc_type: type[E] | tuple[type[E], ...],
    refine: Callable[[E], bool] | None = None,
) -> FailureFilter:
    """Create a filter matching exceptions by type.

    Args:
        exc_type: The exception class, or tuple of classes, to match.
            Subclasses match as well.
        refine: Optional predicate applied to exceptions of the matching
            type. When provided, the filter accepts an exception only if
            ``refine`` also returns ``True``.

    Returns:
        A filter that rejects exceptions of any other type.

    Raises:
        TypeError: If ``exc_type`` is not an exception class or tuple of
            exception classes, or if ``refine`` is not callable.

    Example:
        ```pycon
        >>> from aretry.filters import exception_filter
        >>> is_missing = exception_filter(OSError, lambda exc: exc.errno == 2)
        >>> is_missing(OSError(2, "No such file or directory"))
        True
        >>> is_missing(OSError(13, "Permission denied"))
        False
        >>> is_missing(ValueError("bad"))
        False

        ```
    """
    validate_exception_type(exc_type)
    if refine is not None:
        validate_callable(refine, "refine")

    def accept(error: Exception) -> bool:
        if not isinstance(error, exc_type):
            return False
        if refine is None:
            return True
        return bool(refine(error))

    return accept


def is_transient_http_error(error: Exception) -> bool:
    """Accept transient failures raised by ``httpx``.

    Timeouts, network errors (connection refused or reset, read and
    write failures) and connections closed by the server are accepted,
    as are ``httpx.HTTPStatusError`` exceptions raised by
    ``Response.raise_for_status()`` for a status in
    ``RETRY_STATUS_CODES``. Every other exception is rejected.

    Args:
        error: The exception raised by the operation.

    Returns:
        ``True`` if the failure is likely to go away on retry.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry import RetryPolicy
        >>> from aretry.filters import is_transient_http_error
        >>> policy = RetryPolicy.create(max_attempts=3, delay=0.5).add_filter(
        ...     is_transient_http_error
        ... )
        >>> response = policy.run(
        ...     lambda: httpx.get("https://api.example.com/data").raise_for_status()
        ... )  # doctest: +SKIP

        ```
    """
    if isinstance(error, (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRY_STATUS_CODES
    return False
