r"""Synchronous retry executor.

This module provides the RetryExecutor class that runs the retry loop of
a request: one attempt per iteration, each with a longer timeout, until
an attempt succeeds, a failure is not recoverable, or the retry budget
is spent.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING

from aresretry.backoff import FibonacciTimeout
from aresretry.core.config import RetryPolicy
from aresretry.exceptions import HttpRequestError, RetriesExhaustedError
from aresretry.handler import setup_handler
from aresretry.retry.decider import Disposition, RetryDecider
from aresretry.retry.manager import CallbackManager
from aresretry.utils.sleep import wait_before_retry

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

    import httpx

    from aresretry.backoff import BaseTimeoutStrategy
    from aresretry.handler import RequestHandler
    from aresretry.request import BaseTransport, HttpRequest
    from aresretry.retry.config import CallbackConfig

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Executes requests with automatic retry logic.

    The executor orchestrates the following components:
    - BaseTimeoutStrategy: Computes the timeout of each attempt
    - RetryDecider: Classifies each failed attempt
    - CallbackManager: Invokes the lifecycle hooks
    - RetryPolicy: Holds the retry budget

    The executor holds no per-request state, so one instance can run
    several retry sequences concurrently from different threads.

    Args:
        transport: The transport performing one attempt.
        policy: The retry policy. Defaults to ``RetryPolicy()``.
        handler: The request handler, or a predicate function, consulted
            for failures that are not timeouts. Defaults to
            ``DefaultRequestHandler()``.
        timeout_strategy: The per-attempt timeout strategy. Defaults to
            ``FibonacciTimeout()``.
        callback_config: Optional lifecycle hooks.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresretry.request import HttpRequest, HttpxTransport
        >>> from aresretry.retry import RetryExecutor
        >>> with httpx.Client(base_url="https://api.example.com") as client:  # doctest: +SKIP
        ...     executor = RetryExecutor(HttpxTransport(client))
        ...     response = executor.execute(HttpRequest.get("/data"))
        ...

        ```
    """

    def __init__(
        self,
        transport: BaseTransport,
        policy: RetryPolicy | None = None,
        handler: RequestHandler | Callable[[HttpRequestError], bool] | None = None,
        timeout_strategy: BaseTimeoutStrategy | None = None,
        callback_config: CallbackConfig | None = None,
    ) -> None:
        self.transport = transport
        self.policy = policy or RetryPolicy()
        self.timeout_strategy = timeout_strategy or FibonacciTimeout()
        self.decider = RetryDecider(setup_handler(handler))
        self.callbacks = CallbackManager(callback_config)

    def execute(
        self, request: HttpRequest, cancel_event: threading.Event | None = None
    ) -> httpx.Response:
        """Execute a request with automatic retry logic.

        Each attempt gets the timeout computed by the timeout strategy for
        its index. After a failed attempt:
        - Timeout: the next attempt starts at once
        - Recoverable failure: waits for the timeout just used, then retries.
          The ``on_retry`` hook fires only when another attempt follows; the
          wait itself also happens after the last attempt
        - Non-recoverable failure: the failure is raised immediately

        Args:
            request: The request to execute.
            cancel_event: Optional event. If it is set while waiting
                between two attempts, the sequence stops and the last
                failure is raised.

        Returns:
            The response of the first successful attempt.

        Raises:
            HttpRequestError: The failure of the last attempt, if it is
                not recoverable or the wait before the retry was
                interrupted.
            RetriesExhaustedError: If every attempt of the retry budget
                was spent without success.
        """
        max_retries = self.policy.max_retries
        last_error: HttpRequestError | None = None

        for attempt in range(max_retries):
            timeout = self.timeout_strategy.calculate(attempt)
            logger.debug(
                f"{request.method} {request.path}: attempt {attempt + 1} of {max_retries} "
                f"(timeout={timeout:.2f}s)"
            )
            self.callbacks.on_request(request.method, request.path, attempt, max_retries, timeout)

            start_time = time.monotonic()
            try:
                response = self.transport.send(request, timeout=timeout)
            except HttpRequestError as exc:
                last_error = exc
                disposition = self.decider.classify(
                    exc, elapsed=time.monotonic() - start_time, timeout=timeout
                )
                if disposition is Disposition.NON_RECOVERABLE:
                    logger.debug(f"{request.method} {request.path}: giving up ({exc})")
                    raise

                if disposition is Disposition.RECOVERABLE:
                    if attempt + 1 < max_retries:
                        self.callbacks.on_retry(
                            request.method, request.path, attempt, max_retries, timeout, exc
                        )
                    if wait_before_retry(timeout, cancel_event):
                        logger.debug(f"{request.method} {request.path}: retry cancelled")
                        raise
                continue

            if response is not None:
                return response
            logger.debug(f"{request.method} {request.path}: attempt returned no response")

        raise RetriesExhaustedError(
            method=request.method,
            url=request.path,
            attempts=max_retries,
            cause=last_error,
        ) from last_error
