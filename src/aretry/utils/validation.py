r"""Argument validation utilities for retry policies.

This module provides validation functions for the arguments accepted by
the ``RetryPolicy`` builder methods and entry points. Invalid arguments
are programmer errors and are reported immediately, never retried.
"""

from __future__ import annotations

__all__ = ["validate_callable", "validate_exception_type"]

from typing import Any


def validate_callable(value: Any, name: str) -> None:
    """Validate that an argument is callable.

    Args:
        value: The value to validate.
        name: The argument name used in the error message.

    Raises:
        TypeError: If ``value`` is ``None`` or not callable.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_callable
        >>> validate_callable(print, "callback")
        >>> validate_callable(None, "callback")
        Traceback (most recent call last):
        ...
        TypeError: callback must be callable, got None

        ```
    """
    if not callable(value):
        msg = f"{name} must be callable, got {value!r}"
        raise TypeError(msg)


def validate_exception_type(exc_type: Any) -> None:
    """Validate an exception class or a tuple of exception classes.

    Args:
        exc_type: An exception class, or a non-empty tuple of exception
            classes, as accepted by ``isinstance``.

    Raises:
        TypeError: If ``exc_type`` is not an exception class or a tuple
            of exception classes.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_exception_type
        >>> validate_exception_type(ValueError)
        >>> validate_exception_type((KeyError, OSError))
        >>> validate_exception_type(int)
        Traceback (most recent call last):
        ...
        TypeError: exc_type must be an exception class or a tuple of exception classes, got <class 'int'>

        ```
    """
    types = exc_type if isinstance(exc_type, tuple) else (exc_type,)
    if not types or not all(
        isinstance(tp, type) and issubclass(tp, BaseException) for tp in types
    ):
        msg = (
            "exc_type must be an exception class or a tuple of exception classes, "
            f"got {exc_type!r}"
        )
        raise TypeError(msg)
