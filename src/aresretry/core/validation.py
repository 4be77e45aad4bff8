r"""Parameter validation utilities for the retry configuration."""

from __future__ import annotations

__all__ = [
    "MAX_RETRIES_LIMIT",
    "MIN_RETRIES",
    "validate_base_timeout",
    "validate_max_retries",
]

import math

# Bounds of the retry budget. The timeout of attempt n is read at
# index n + 2 of the 20-entry Fibonacci table, so at most 18 attempts.
# On the 18th attempt the timeout is 4181 seconds (about 1h10).
MIN_RETRIES = 1
MAX_RETRIES_LIMIT = 18


def validate_max_retries(max_retries: int) -> None:
    """Validate the maximum number of attempts of a retry sequence.

    Args:
        max_retries: Maximum number of attempts. Must be an integer in
            ``[1, 18]``. The upper bound keeps every attempt inside the
            precomputed Fibonacci timeout table.

    Raises:
        ValueError: If ``max_retries`` is not an integer or is out of range.

    Example:
        ```pycon
        >>> from aresretry.core.validation import validate_max_retries
        >>> validate_max_retries(3)
        >>> validate_max_retries(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be between 1 and 18, got 0

        ```
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an integer, got {type(max_retries).__name__}"
        raise ValueError(msg)
    if max_retries < MIN_RETRIES or max_retries > MAX_RETRIES_LIMIT:
        msg = f"max_retries must be between {MIN_RETRIES} and {MAX_RETRIES_LIMIT}, got {max_retries}"
        raise ValueError(msg)


def validate_base_timeout(base_timeout: float) -> None:
    """Validate the base timeout of a timeout strategy.

    Args:
        base_timeout: The base timeout in seconds. Must be a finite
            number > 0.

    Raises:
        ValueError: If ``base_timeout`` is not a finite positive number.
    """
    if not math.isfinite(base_timeout) or base_timeout <= 0:
        msg = f"base_timeout must be a finite number > 0, got {base_timeout}"
        raise ValueError(msg)
