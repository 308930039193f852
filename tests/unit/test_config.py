r"""Unit tests for default configuration values."""

from __future__ import annotations

from aretry.config import DEFAULT_DELAY, DEFAULT_MAX_ATTEMPTS, RETRY_STATUS_CODES


def test_default_max_attempts() -> None:
    assert DEFAULT_MAX_ATTEMPTS == 5


def test_default_delay() -> None:
    assert isinstance(DEFAULT_DELAY, float)
    assert DEFAULT_DELAY == 1.0


def test_retry_status_codes() -> None:
    assert RETRY_STATUS_CODES == (429, 500, 502, 503, 504)
