r"""Abstract base class for per-attempt timeout strategies."""

from __future__ import annotations

__all__ = ["BaseTimeoutStrategy"]

from abc import ABC, abstractmethod


class BaseTimeoutStrategy(ABC):
    """Abstract base class for timeout strategies.

    A timeout strategy determines the timeout of each attempt of a retry
    sequence. The same duration is used as the wait before the next
    attempt when the failure is recoverable.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the timeout for a given attempt.

        Args:
            attempt: The current attempt number (0-indexed). For example,
                attempt=0 is the initial attempt, attempt=1 is the first retry, etc.

        Returns:
            The timeout in seconds for this attempt.
        """
