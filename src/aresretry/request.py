r"""HTTP request description and transports.

A transport performs one synchronous attempt of a request. The retry
engine only relies on ``BaseTransport.send``; URL building and query
string encoding are left to httpx.
"""

from __future__ import annotations

__all__ = ["BaseTransport", "HttpRequest", "HttpxTransport"]

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from aresretry.exceptions import HttpRequestError

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpRequest:
    """Description of an HTTP request.

    Attributes:
        path: The path, relative to the client base URL, or an absolute URL.
        method: The HTTP method (e.g., "GET", "POST").
        params: Optional parameters. Sent as the query string for GET and
            DELETE, and as a form-encoded body for POST without content.
            A mapping is stored as a tuple of (name, value) pairs so the
            request stays hashable.
        content_type: Optional content type of ``content``.
        content: Optional raw request body.

    Example:
        ```pycon
        >>> from aresretry.request import HttpRequest
        >>> HttpRequest.get("/users", {"page": "2"})
        HttpRequest(path='/users', method='GET', params=(('page', '2'),), content_type=None, content=None)

        ```
    """

    path: str
    method: str
    params: Mapping[str, Any] | tuple[tuple[str, Any], ...] | None = None
    content_type: str | None = None
    content: bytes | None = None

    def __post_init__(self) -> None:
        if isinstance(self.params, Mapping):
            object.__setattr__(self, "params", tuple(self.params.items()))

    @classmethod
    def get(cls, path: str, params: Mapping[str, Any] | None = None) -> HttpRequest:
        return cls(path=path, method="GET", params=params)

    @classmethod
    def post(cls, path: str, params: Mapping[str, Any] | None = None) -> HttpRequest:
        return cls(path=path, method="POST", params=params)

    @classmethod
    def post_data(cls, path: str, content_type: str, content: bytes) -> HttpRequest:
        return cls(path=path, method="POST", content_type=content_type, content=content)

    @classmethod
    def put(cls, path: str, content_type: str, content: bytes) -> HttpRequest:
        return cls(path=path, method="PUT", content_type=content_type, content=content)

    @classmethod
    def delete(cls, path: str, params: Mapping[str, Any] | None = None) -> HttpRequest:
        return cls(path=path, method="DELETE", params=params)

    def to_httpx_kwargs(self) -> dict[str, Any]:
        r"""Return the keyword arguments of ``httpx.Client.request``.

        Returns:
            The keyword arguments describing this request.
        """
        kwargs: dict[str, Any] = {}
        if self.content is not None:
            kwargs["content"] = self.content
        elif self.params is not None and self.method == "POST":
            kwargs["data"] = dict(self.params)
        if self.params is not None and self.method != "POST":
            kwargs["params"] = dict(self.params)
        if self.content_type is not None:
            kwargs["headers"] = {"Content-Type": self.content_type}
        return kwargs


class BaseTransport(ABC):
    """Performs one synchronous attempt of a request."""

    @abstractmethod
    def send(self, request: HttpRequest, timeout: float) -> httpx.Response | None:
        """Send the request once.

        Args:
            request: The request to send.
            timeout: The timeout of this attempt in seconds.

        Returns:
            The HTTP response.

        Raises:
            HttpRequestError: If the attempt failed.
        """


class HttpxTransport(BaseTransport):
    """Transport sending requests with an ``httpx.Client``.

    Responses with a status code >= 400 are reported as failures carrying
    the response, so the request handler can inspect them.

    Args:
        client: The httpx client used to send requests.
    """

    def __init__(self, client: httpx.Client) -> None:
        self.client = client

    def send(self, request: HttpRequest, timeout: float) -> httpx.Response:
        try:
            response = self.client.request(
                request.method,
                request.path,
                timeout=timeout,
                **request.to_httpx_kwargs(),
            )
        except httpx.RequestError as exc:
            logger.debug(
                f"{request.method} request to {request.path} encountered {type(exc).__name__}: {exc}"
            )
            raise HttpRequestError(
                method=request.method,
                url=request.path,
                message=f"{request.method} request to {request.path} failed: {exc}",
                cause=exc,
            ) from exc

        if response.status_code >= 400:
            raise HttpRequestError(
                method=request.method,
                url=request.path,
                message=(
                    f"{request.method} request to {request.path} failed with status "
                    f"{response.status_code}"
                ),
                status_code=response.status_code,
                response=response,
            )
        return response
