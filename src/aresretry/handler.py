r"""Request handlers deciding whether a failed attempt is worth retrying.

A request handler is consulted only for failures that are not timeouts.
Timeouts are always retried while the retry budget allows it.
"""

from __future__ import annotations

__all__ = ["DefaultRequestHandler", "FunctionRequestHandler", "RequestHandler", "setup_handler"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from aresretry.core.config import RETRY_STATUS_CODES

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresretry.exceptions import HttpRequestError

logger: logging.Logger = logging.getLogger(__name__)


class RequestHandler(ABC):
    """Abstract base class for request handlers."""

    @abstractmethod
    def on_error(self, error: HttpRequestError) -> bool:
        """Decide whether a failed attempt is recoverable.

        Args:
            error: The failure of the attempt.

        Returns:
            ``True`` to wait and retry, ``False`` to give up immediately.
        """


class DefaultRequestHandler(RequestHandler):
    """Request handler retrying network failures and transient statuses.

    A failure without status code (connection refused, DNS failure, ...)
    is recoverable. A failure with a status code is recoverable only if
    the status code is in ``status_forcelist``.

    Args:
        status_forcelist: Tuple of HTTP status codes that are recoverable.

    Example:
        ```pycon
        >>> from aresretry.exceptions import HttpRequestError
        >>> from aresretry.handler import DefaultRequestHandler
        >>> handler = DefaultRequestHandler()
        >>> handler.on_error(HttpRequestError("GET", "/data", "boom", status_code=503))
        True
        >>> handler.on_error(HttpRequestError("GET", "/data", "boom", status_code=404))
        False

        ```
    """

    def __init__(self, status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES) -> None:
        self.status_forcelist = status_forcelist

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(status_forcelist={self.status_forcelist})"

    def on_error(self, error: HttpRequestError) -> bool:
        if error.status_code is None:
            return True
        recoverable = error.status_code in self.status_forcelist
        if not recoverable:
            logger.debug(
                f"{error.method} request to {error.url} failed with non-retryable "
                f"status {error.status_code}"
            )
        return recoverable


class FunctionRequestHandler(RequestHandler):
    """Request handler wrapping a predicate function.

    Args:
        func: A function taking the failure and returning ``True`` if it
            is recoverable.
    """

    def __init__(self, func: Callable[[HttpRequestError], bool]) -> None:
        self._func = func

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(func={self._func!r})"

    def on_error(self, error: HttpRequestError) -> bool:
        return bool(self._func(error))


def setup_handler(
    handler: RequestHandler | Callable[[HttpRequestError], bool] | None,
) -> RequestHandler:
    """Return a request handler built from the given value.

    Args:
        handler: A request handler, a predicate function, or ``None`` to
            use ``DefaultRequestHandler``.

    Returns:
        The request handler.

    Example:
        ```pycon
        >>> from aresretry.handler import setup_handler
        >>> setup_handler(None)
        DefaultRequestHandler(status_forcelist=(429, 500, 502, 503, 504))

        ```
    """
    if handler is None:
        return DefaultRequestHandler()
    if isinstance(handler, RequestHandler):
        return handler
    return FunctionRequestHandler(handler)
