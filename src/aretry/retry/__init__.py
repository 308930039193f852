r"""Building blocks of the retry engine.

Public API:
    - RetryDecider: Pure logic deciding whether to retry a failure
    - RetryDecision: Value returned by RetryDecider
    - CallbackManager: Ordered on-retry callback invocation
    - resolve_delay: Wait-time resolution with the default delay
"""

from __future__ import annotations

__all__ = ["CallbackManager", "RetryDecider", "RetryDecision", "resolve_delay"]

from aretry.retry.decider import RetryDecider, RetryDecision
from aretry.retry.manager import CallbackManager
from aretry.retry.strategy import resolve_delay
