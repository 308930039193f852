r"""Default configuration values for retry policies.

This module defines the defaults used by ``RetryPolicy`` and by the
ready-made filters in ``aretry.filters``.
"""

from __future__ import annotations

__all__ = ["DEFAULT_DELAY", "DEFAULT_MAX_ATTEMPTS", "RETRY_STATUS_CODES"]

# Default maximum number of retries
# Total invocations = max_attempts + 1 (initial attempt)
DEFAULT_MAX_ATTEMPTS = 5

# Default wait in seconds between a failed attempt and the next retry
# Used whenever the configured delay is not strictly positive
DEFAULT_DELAY = 1.0

# HTTP status codes considered transient by is_transient_http_error
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)
