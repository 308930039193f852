r"""Wait-time resolution between retry attempts."""

from __future__ import annotations

__all__ = ["resolve_delay"]

from aretry.config import DEFAULT_DELAY


def resolve_delay(delay: float | None) -> float:
    """Return the number of seconds to wait before the next retry.

    Args:
        delay: The configured delay in seconds. ``None`` or a value
            ``<= 0`` selects the default delay.

    Returns:
        ``delay`` if it is strictly positive, otherwise ``DEFAULT_DELAY``.

    Example:
        ```pycon
        >>> from aretry.retry.strategy import resolve_delay
        >>> resolve_delay(0.25)
        0.25
        >>> resolve_delay(0)
        1.0
        >>> resolve_delay(None)
        1.0

        ```
    """
    if delay is None or delay <= 0:
        return DEFAULT_DELAY
    return delay
