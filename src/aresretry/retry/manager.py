r"""Callback manager for retry lifecycle events."""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING

from aresretry.callbacks import RequestInfo, RetryInfo
from aresretry.retry.config import CallbackConfig

if TYPE_CHECKING:
    from aresretry.exceptions import HttpRequestError


class CallbackManager:
    """Manages lifecycle hook invocations during a retry sequence.

    Attributes:
        callbacks: Configuration containing the hook functions.
    """

    def __init__(self, callbacks: CallbackConfig | None = None) -> None:
        self.callbacks = callbacks or CallbackConfig()

    def on_request(
        self, method: str, path: str, attempt: int, max_retries: int, timeout: float
    ) -> None:
        """Invoke on_request callback.

        Args:
            method: The HTTP method.
            path: The path being requested.
            attempt: Current attempt number (0-indexed).
            max_retries: Maximum number of attempts.
            timeout: Timeout of the attempt in seconds.
        """
        if self.callbacks.on_request is not None:
            self.callbacks.on_request(
                RequestInfo(
                    method=method,
                    path=path,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    timeout=timeout,
                )
            )

    def on_retry(
        self,
        method: str,
        path: str,
        attempt: int,
        max_retries: int,
        wait_time: float,
        error: HttpRequestError,
    ) -> None:
        """Invoke on_retry callback.

        Args:
            method: The HTTP method.
            path: The path being requested.
            attempt: Current attempt number (0-indexed). The callback
                receives the next attempt number, 1-indexed.
            max_retries: Maximum number of attempts.
            wait_time: Wait before the retry in seconds.
            error: The recoverable failure.
        """
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(
                RetryInfo(
                    method=method,
                    path=path,
                    attempt=attempt + 2,
                    max_retries=max_retries,
                    wait_time=wait_time,
                    error=error,
                )
            )
