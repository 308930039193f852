r"""Utility functions shared by the retry engine.

This package provides argument validation for the policy builder and
structured logging helpers for retry events.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
    "validate_callable",
    "validate_exception_type",
]

from aretry.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
from aretry.utils.validation import validate_callable, validate_exception_type
