r"""aresretry - Asynchronous HTTP requests with Fibonacci timeout retries.

This package executes HTTP requests off the caller's thread and retries
failed attempts with a growing per-attempt timeout derived from the
Fibonacci series (1s, 2s, 3s, 5s, 8s, ...). Built on top of httpx.

Key Features:
    - Timeouts are always retried, with a longer timeout for the next attempt
    - Other failures are retried after a wait if the request handler says so
    - Retry budget between 1 and 18 attempts, validated on assignment
    - Pluggable execution strategies: thread, thread pool, asyncio executor
    - Exactly-once completion callbacks and cancellable retry sequences
    - Lifecycle hooks and opt-in structured logging

Example:
    ```pycon
    >>> from aresretry import AsyncHttpClient, FunctionCallback
    >>> from aresretry.execution import ThreadPoolExecutionStrategy
    >>> with ThreadPoolExecutionStrategy() as strategy, AsyncHttpClient(
    ...     strategy, base_url="https://api.example.com"
    ... ) as client:  # doctest: +SKIP
    ...     client.max_retries = 5
    ...     task = client.get("/data", None, FunctionCallback(print, print))
    ...     task.wait()
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "MAX_RETRIES_LIMIT",
    "RETRY_STATUS_CODES",
    "AsyncCallback",
    "AsyncHttpClient",
    "FunctionCallback",
    "HttpRequest",
    "HttpRequestError",
    "RetriesExhaustedError",
    "RetryExecutor",
    "RetryPolicy",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from aresretry.callbacks import AsyncCallback, FunctionCallback
from aresretry.client import AsyncHttpClient
from aresretry.core.config import (
    DEFAULT_MAX_RETRIES,
    MAX_RETRIES_LIMIT,
    RETRY_STATUS_CODES,
    RetryPolicy,
)
from aresretry.exceptions import HttpRequestError, RetriesExhaustedError
from aresretry.request import HttpRequest
from aresretry.retry import RetryExecutor

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
