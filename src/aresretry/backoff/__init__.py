r"""Per-attempt timeout strategies.

The timeout computed for an attempt is also the wait applied before the
next attempt when the failure is recoverable.
"""

from __future__ import annotations

__all__ = ["FIBONACCI_TABLE", "BaseTimeoutStrategy", "FibonacciTimeout"]

from aresretry.backoff.base import BaseTimeoutStrategy
from aresretry.backoff.fibonacci import FIBONACCI_TABLE, FibonacciTimeout
