r"""Classification of failed attempts.

This module provides the RetryDecider class that decides what the retry
loop does after a failed attempt: retry at once (timeout), wait and retry
(recoverable error), or give up (non-recoverable error).
"""

from __future__ import annotations

__all__ = ["Disposition", "RetryDecider"]

import enum
import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from aresretry.exceptions import HttpRequestError
    from aresretry.handler import RequestHandler

logger: logging.Logger = logging.getLogger(__name__)


class Disposition(enum.Enum):
    """What the retry loop does after a failed attempt."""

    TIMEOUT = "timeout"
    RECOVERABLE = "recoverable"
    NON_RECOVERABLE = "non_recoverable"


class RetryDecider:
    """Classifies failed attempts.

    A failure is a timeout when the attempt ran for at least its timeout,
    or when the transport reported a timeout. Timeouts never reach the
    request handler. Any other failure is recoverable if the request
    handler says so.

    Args:
        handler: The request handler consulted for non-timeout failures.

    Example:
        ```pycon
        >>> from aresretry.exceptions import HttpRequestError
        >>> from aresretry.handler import DefaultRequestHandler
        >>> from aresretry.retry.decider import RetryDecider
        >>> decider = RetryDecider(DefaultRequestHandler())
        >>> error = HttpRequestError("GET", "/data", "boom", status_code=404)
        >>> decider.classify(error, elapsed=2.5, timeout=2.0)
        <Disposition.TIMEOUT: 'timeout'>
        >>> decider.classify(error, elapsed=0.1, timeout=2.0)
        <Disposition.NON_RECOVERABLE: 'non_recoverable'>

        ```
    """

    def __init__(self, handler: RequestHandler) -> None:
        self.handler = handler

    @staticmethod
    def is_timeout(error: HttpRequestError, elapsed: float, timeout: float) -> bool:
        """Indicate if a failure is a timeout.

        Args:
            error: The failure of the attempt.
            elapsed: The duration of the attempt in seconds.
            timeout: The timeout of the attempt in seconds.

        Returns:
            ``True`` if the failure is a timeout.
        """
        return elapsed >= timeout or isinstance(error.cause, httpx.TimeoutException)

    def classify(self, error: HttpRequestError, elapsed: float, timeout: float) -> Disposition:
        """Classify a failed attempt.

        Args:
            error: The failure of the attempt.
            elapsed: The duration of the attempt in seconds.
            timeout: The timeout of the attempt in seconds.

        Returns:
            The disposition of the failure.
        """
        if self.is_timeout(error, elapsed, timeout):
            logger.debug(
                f"{error.method} request to {error.url} timed out after {elapsed:.2f}s "
                f"(timeout={timeout:.2f}s)"
            )
            return Disposition.TIMEOUT
        if self.handler.on_error(error):
            return Disposition.RECOVERABLE
        return Disposition.NON_RECOVERABLE
