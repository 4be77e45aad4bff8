r"""Callback types and data structures.

This module provides two kinds of callbacks:

- completion callbacks (``AsyncCallback``) receive the outcome of an
  asynchronous request, exactly once: ``on_success`` or ``on_error``.
- lifecycle hooks (``on_request``, ``on_retry``) receive a ``RequestInfo``
  or ``RetryInfo`` during a retry sequence, for logging or metrics.

Example:
    ```pycon
    >>> from aresretry.callbacks import FunctionCallback
    >>> results = []
    >>> callback = FunctionCallback(on_success=results.append, on_error=results.append)
    >>> callback.on_success("response")
    >>> results
    ['response']

    ```
"""

from __future__ import annotations

__all__ = ["AsyncCallback", "FunctionCallback", "RequestInfo", "RetryInfo"]

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from aresretry.exceptions import HttpRequestError


class AsyncCallback(ABC):
    """Receives the outcome of an asynchronous request.

    Exactly one of the two methods is called per submitted request.
    """

    @abstractmethod
    def on_success(self, response: httpx.Response) -> None:
        """Called with the response of the first successful attempt.

        Args:
            response: The HTTP response.
        """

    @abstractmethod
    def on_error(self, error: BaseException) -> None:
        """Called with the terminal failure of the request.

        Args:
            error: The failure. Usually an ``HttpRequestError``.
        """


class FunctionCallback(AsyncCallback):
    """Completion callback built from two functions.

    Args:
        on_success: Function called with the response.
        on_error: Function called with the failure.
    """

    def __init__(
        self,
        on_success: Callable[[httpx.Response], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        self._on_success = on_success
        self._on_error = on_error

    def on_success(self, response: httpx.Response) -> None:
        self._on_success(response)

    def on_error(self, error: BaseException) -> None:
        self._on_error(error)


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        method: The HTTP method (e.g., "GET", "POST").
        path: The path being requested.
        attempt: The current attempt number (1-indexed). First attempt is 1.
        max_retries: Maximum number of attempts configured.
        timeout: The timeout of this attempt in seconds.
    """

    method: str
    path: str
    attempt: int
    max_retries: int
    timeout: float


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        method: The HTTP method (e.g., "GET", "POST").
        path: The path being requested.
        attempt: The next attempt number (1-indexed). First retry is attempt 2.
        max_retries: Maximum number of attempts configured.
        wait_time: The wait in seconds before this retry.
        error: The recoverable failure that triggered the retry.
    """

    method: str
    path: str
    attempt: int
    max_retries: int
    wait_time: float
    error: HttpRequestError
