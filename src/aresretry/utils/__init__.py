r"""Utility functions for the retry loop and its logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
    "wait_before_retry",
]

from aresretry.utils.sleep import wait_before_retry
from aresretry.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
