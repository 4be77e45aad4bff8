r"""Core configuration and validation for the retry engine."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "MAX_RETRIES_LIMIT",
    "MIN_RETRIES",
    "RETRY_STATUS_CODES",
    "RetryPolicy",
    "validate_base_timeout",
    "validate_max_retries",
]

from aresretry.core.config import (
    DEFAULT_MAX_RETRIES,
    MAX_RETRIES_LIMIT,
    MIN_RETRIES,
    RETRY_STATUS_CODES,
    RetryPolicy,
)
from aresretry.core.validation import validate_base_timeout, validate_max_retries
