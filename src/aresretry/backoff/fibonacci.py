r"""Fibonacci timeout strategy."""

from __future__ import annotations

__all__ = ["FIBONACCI_TABLE", "FibonacciTimeout"]

from aresretry.backoff.base import BaseTimeoutStrategy
from aresretry.core.validation import MAX_RETRIES_LIMIT, validate_base_timeout


def _build_table(size: int) -> tuple[int, ...]:
    fib = [0, 1]
    while len(fib) < size:
        fib.append(fib[-1] + fib[-2])
    return tuple(fib[:size])


FIBONACCI_TABLE: tuple[int, ...] = _build_table(MAX_RETRIES_LIMIT + 2)


class FibonacciTimeout(BaseTimeoutStrategy):
    """Fibonacci timeout strategy.

    Calculates the timeout as: base_timeout * fib[attempt + 2].

    The growth ratio converges to the golden ratio (~1.618), which backs
    off more gently than doubling. With the default base timeout, attempts
    0, 1, 2, 3 get 1, 2, 3 and 5 seconds.

    Args:
        base_timeout: The base timeout in seconds (default: 1.0).

    Example:
        ```pycon
        >>> from aresretry.backoff import FibonacciTimeout
        >>> timeout = FibonacciTimeout()
        >>> timeout.calculate(0)
        1.0
        >>> timeout.calculate(1)
        2.0
        >>> timeout.calculate(2)
        3.0
        >>> timeout.calculate(3)
        5.0

        ```
    """

    def __init__(self, base_timeout: float = 1.0) -> None:
        validate_base_timeout(base_timeout)
        self.base_timeout = base_timeout

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base_timeout={self.base_timeout})"

    def calculate(self, attempt: int) -> float:
        """Calculate the Fibonacci timeout.

        Args:
            attempt: The current attempt number (0-indexed), in ``[0, 17]``.

        Returns:
            The timeout: base_timeout * fib[attempt + 2].

        Raises:
            ValueError: If the attempt falls outside the timeout table.
        """
        if attempt < 0 or attempt + 2 >= len(FIBONACCI_TABLE):
            msg = f"attempt must be between 0 and {len(FIBONACCI_TABLE) - 3}, got {attempt}"
            raise ValueError(msg)
        return self.base_timeout * FIBONACCI_TABLE[attempt + 2]
