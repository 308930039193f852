r"""Unit tests for callback manager."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, call

import pytest

from aretry.retry.manager import CallbackManager


def test_callback_manager_creation() -> None:
    """Test CallbackManager initialization."""
    assert CallbackManager().callbacks == []


def test_add_keeps_order() -> None:
    """Test that callbacks are stored in registration order."""
    first, second = Mock(), Mock()
    manager = CallbackManager()
    manager.add(first)
    manager.add(second)
    assert manager.callbacks == [first, second]


def test_on_retry_without_callbacks() -> None:
    """Test that on_retry is a no-op without callbacks."""
    CallbackManager().on_retry(ValueError("boom"), 1)


def test_on_retry_invokes_in_order() -> None:
    """Test that callbacks receive the same arguments in order."""
    parent = Mock()
    manager = CallbackManager()
    manager.add(parent.first)
    manager.add(parent.second)
    error = ValueError("boom")

    manager.on_retry(error, 2)

    assert parent.mock_calls == [call.first(error, 2), call.second(error, 2)]


def test_on_retry_propagates_callback_error() -> None:
    """Test that a failing callback stops the remaining ones."""
    second = Mock()
    manager = CallbackManager()
    manager.add(Mock(side_effect=RuntimeError("callback failed")))
    manager.add(second)

    with pytest.raises(RuntimeError, match=r"callback failed"):
        manager.on_retry(ValueError("boom"), 1)

    second.assert_not_called()


@pytest.mark.asyncio
async def test_on_retry_async_mixed_callbacks() -> None:
    """Test that sync callbacks are called and async callbacks awaited."""
    sync_callback = Mock(return_value=None)
    async_callback = AsyncMock(return_value=None)
    manager = CallbackManager()
    manager.add(sync_callback)
    manager.add(async_callback)
    error = ValueError("boom")

    await manager.on_retry_async(error, 3)

    sync_callback.assert_called_once_with(error, 3)
    async_callback.assert_awaited_once_with(error, 3)


@pytest.mark.asyncio
async def test_on_retry_async_propagates_callback_error() -> None:
    """Test that a failing async callback stops the remaining ones."""
    second = Mock()
    manager = CallbackManager()
    manager.add(AsyncMock(side_effect=RuntimeError("callback failed")))
    manager.add(second)

    with pytest.raises(RuntimeError, match=r"callback failed"):
        await manager.on_retry_async(ValueError("boom"), 1)

    second.assert_not_called()


def test_on_retry_rejects_async_callback() -> None:
    """Test that a coroutine callback is closed and rejected."""
    events = []

    async def notify(error: Exception, attempt: int) -> None:
        events.append((error, attempt))  # pragma: no cover

    second = Mock()
    manager = CallbackManager()
    manager.add(notify)
    manager.add(second)

    with pytest.raises(TypeError, match=r"use run_async"):
        manager.on_retry(ValueError("boom"), 1)

    assert events == []
    second.assert_not_called()
