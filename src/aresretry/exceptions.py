r"""Exceptions raised by the retry engine and the HTTP transport."""

from __future__ import annotations

__all__ = ["HttpRequestError", "RetriesExhaustedError"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class HttpRequestError(RuntimeError):
    """Raised when an HTTP request attempt fails.

    Args:
        method: The HTTP method (e.g., "GET", "POST").
        url: The URL or path that was requested.
        message: The error message.
        status_code: The HTTP status code, if the server answered.
        response: The HTTP response, if the server answered.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from aresretry.exceptions import HttpRequestError
        >>> err = HttpRequestError(method="GET", url="/data", message="boom", status_code=503)
        >>> err.status_code
        503

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response = response
        self.cause = cause


class RetriesExhaustedError(HttpRequestError):
    """Raised when every allotted attempt was spent without success.

    The last observed failure, if any, is available as ``cause``.

    Args:
        method: The HTTP method.
        url: The URL or path that was requested.
        attempts: The number of attempts performed.
        cause: The last observed failure, if any.
    """

    def __init__(
        self,
        method: str,
        url: str,
        attempts: int,
        cause: HttpRequestError | None = None,
    ) -> None:
        message = f"{method} request to {url} failed after {attempts} attempts"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(
            method=method,
            url=url,
            message=message,
            status_code=cause.status_code if cause is not None else None,
            response=cause.response if cause is not None else None,
            cause=cause,
        )
        self.attempts = attempts
