r"""Configuration constants and the retry policy.

This module provides the default values used by the retry engine and the
``RetryPolicy`` object that holds the retry budget of a client.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "MAX_RETRIES_LIMIT",
    "MIN_RETRIES",
    "RETRY_STATUS_CODES",
    "RetryPolicy",
]

import threading

from aresretry.core.validation import (
    MAX_RETRIES_LIMIT,
    MIN_RETRIES,
    validate_max_retries,
)

# Default maximum number of attempts (initial attempt included)
DEFAULT_MAX_RETRIES = 3

# HTTP status codes that the default request handler treats as recoverable
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class RetryPolicy:
    """Retry budget shared by the retry sequences of a client.

    The value is validated when it is assigned: an invalid value raises
    ``ValueError`` and the previous value is kept. A retry sequence reads
    the value once when it starts, so changing it never affects an
    in-flight sequence.

    Args:
        max_retries: Maximum number of attempts, in ``[1, 18]``.

    Example:
        ```pycon
        >>> from aresretry.core.config import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_retries
        3
        >>> policy.max_retries = 5
        >>> policy.max_retries
        5

        ```
    """

    def __init__(self, max_retries: int = DEFAULT_MAX_RETRIES) -> None:
        self._lock = threading.Lock()
        self._max_retries = DEFAULT_MAX_RETRIES
        self.max_retries = max_retries

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_retries={self.max_retries})"

    @property
    def max_retries(self) -> int:
        """The maximum number of attempts of a retry sequence."""
        with self._lock:
            return self._max_retries

    @max_retries.setter
    def max_retries(self, value: int) -> None:
        validate_max_retries(value)
        with self._lock:
            self._max_retries = value

