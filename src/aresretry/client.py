r"""Asynchronous HTTP client with automatic retry logic.

This module provides ``AsyncHttpClient``: every request method returns
immediately and the outcome is delivered to a completion callback once
the retry sequence ends.
"""

from __future__ import annotations

__all__ = ["AsyncHttpClient"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from aresretry.core.config import RetryPolicy
from aresretry.request import HttpRequest, HttpxTransport
from aresretry.retry import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    from aresretry.backoff import BaseTimeoutStrategy
    from aresretry.callbacks import AsyncCallback
    from aresretry.exceptions import HttpRequestError
    from aresretry.execution import BaseExecutionStrategy, RequestTask
    from aresretry.handler import RequestHandler
    from aresretry.retry.config import CallbackConfig

logger: logging.Logger = logging.getLogger(__name__)


class AsyncHttpClient:
    r"""HTTP client completing all requests asynchronously.

    Each request runs its whole retry sequence in a worker obtained from
    the execution strategy, and the outcome is delivered to the callback:
    ``on_success(response)`` or ``on_error(error)``, exactly once.

    Args:
        strategy: The execution strategy scheduling the requests.
        base_url: The base URL of the requests. Ignored if ``client`` is given.
        client: Optional httpx.Client instance to use for requests. If
            ``None``, a new client is created and closed by ``close``.
        handler: The request handler, or a predicate function, deciding
            whether a non-timeout failure is recoverable.
        policy: The retry policy. Defaults to ``RetryPolicy()``.
        timeout_strategy: The per-attempt timeout strategy. Defaults to
            ``FibonacciTimeout()``.
        callback_config: Optional lifecycle hooks.

    Example:
        ```pycon
        >>> from aresretry import AsyncHttpClient, FunctionCallback
        >>> from aresretry.execution import ThreadExecutionStrategy
        >>> with AsyncHttpClient(
        ...     ThreadExecutionStrategy(), base_url="https://api.example.com"
        ... ) as client:  # doctest: +SKIP
        ...     task = client.get("/data", {"page": 2}, FunctionCallback(print, print))
        ...     task.wait()
        ...

        ```
    """

    def __init__(
        self,
        strategy: BaseExecutionStrategy,
        base_url: str = "",
        client: httpx.Client | None = None,
        handler: RequestHandler | Callable[[HttpRequestError], bool] | None = None,
        policy: RetryPolicy | None = None,
        timeout_strategy: BaseTimeoutStrategy | None = None,
        callback_config: CallbackConfig | None = None,
    ) -> None:
        self._strategy = strategy
        self._close_client = client is None
        self._client: httpx.Client = client or httpx.Client(base_url=base_url)
        self._executor = RetryExecutor(
            transport=HttpxTransport(self._client),
            policy=policy or RetryPolicy(),
            handler=handler,
            timeout_strategy=timeout_strategy,
            callback_config=callback_config,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def executor(self) -> RetryExecutor:
        """The retry executor shared by all the requests."""
        return self._executor

    @property
    def max_retries(self) -> int:
        """The maximum number of attempts of a request, in ``[1, 18]``.

        Assigning a value outside the range raises ``ValueError`` and
        keeps the previous value.
        """
        return self._executor.policy.max_retries

    @max_retries.setter
    def max_retries(self, value: int) -> None:
        self._executor.policy.max_retries = value

    def close(self) -> None:
        """Close the underlying httpx client if this client created it."""
        if self._close_client:
            self._client.close()

    def get(
        self, path: str, params: Mapping[str, Any] | None, callback: AsyncCallback
    ) -> RequestTask:
        """Execute a GET request, the parameters being sent as the query string.

        Args:
            path: The path to request.
            params: Optional query parameters.
            callback: The completion callback.

        Returns:
            The scheduled task.
        """
        return self.execute_async(HttpRequest.get(path, params), callback)

    def post(
        self, path: str, params: Mapping[str, Any] | None, callback: AsyncCallback
    ) -> RequestTask:
        """Execute a POST request with form-encoded parameters.

        Args:
            path: The path to request.
            params: Optional form parameters.
            callback: The completion callback.

        Returns:
            The scheduled task.
        """
        return self.execute_async(HttpRequest.post(path, params), callback)

    def post_data(
        self, path: str, content_type: str, data: bytes, callback: AsyncCallback
    ) -> RequestTask:
        """Execute a POST request with a raw body.

        Args:
            path: The path to request.
            content_type: The content type of ``data``.
            data: The request body.
            callback: The completion callback.

        Returns:
            The scheduled task.
        """
        return self.execute_async(HttpRequest.post_data(path, content_type, data), callback)

    def put(
        self, path: str, content_type: str, data: bytes, callback: AsyncCallback
    ) -> RequestTask:
        """Execute a PUT request with a raw body.

        Args:
            path: The path to request.
            content_type: The content type of ``data``.
            data: The request body.
            callback: The completion callback.

        Returns:
            The scheduled task.
        """
        return self.execute_async(HttpRequest.put(path, content_type, data), callback)

    def delete(
        self, path: str, params: Mapping[str, Any] | None, callback: AsyncCallback
    ) -> RequestTask:
        """Execute a DELETE request, the parameters being sent as the query string.

        Args:
            path: The path to request.
            params: Optional query parameters.
            callback: The completion callback.

        Returns:
            The scheduled task.
        """
        return self.execute_async(HttpRequest.delete(path, params), callback)

    def execute_async(self, request: HttpRequest, callback: AsyncCallback) -> RequestTask:
        """Schedule a request and return without waiting for it.

        Args:
            request: The request to execute.
            callback: The completion callback.

        Returns:
            The scheduled task. It can be used to wait for the outcome or
            to cancel the retries.
        """
        task = self._strategy.create_task(self._executor, request, callback)
        logger.debug(f"Submitting {task}")
        self._strategy.submit(task)
        return task

    def execute(self, request: HttpRequest) -> httpx.Response:
        """Execute a request in the caller's thread.

        Args:
            request: The request to execute.

        Returns:
            The response of the first successful attempt.

        Raises:
            HttpRequestError: If the request failed.
        """
        return self._executor.execute(request)
