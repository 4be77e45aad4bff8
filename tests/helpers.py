r"""Shared test helpers."""

from __future__ import annotations

__all__ = ["RecordingCallback", "ZeroTimeout", "network_error", "status_error", "timeout_error"]

import threading

import httpx

from aresretry.backoff import BaseTimeoutStrategy
from aresretry.callbacks import AsyncCallback
from aresretry.exceptions import HttpRequestError


class ZeroTimeout(BaseTimeoutStrategy):
    """Timeout strategy making every failed attempt look like a timeout."""

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return 0.0


class RecordingCallback(AsyncCallback):
    """Completion callback recording every call it receives."""

    def __init__(self) -> None:
        self.successes: list[httpx.Response] = []
        self.errors: list[BaseException] = []
        self.called = threading.Event()

    def on_success(self, response: httpx.Response) -> None:
        self.successes.append(response)
        self.called.set()

    def on_error(self, error: BaseException) -> None:
        self.errors.append(error)
        self.called.set()


def status_error(status_code: int, path: str = "/data") -> HttpRequestError:
    return HttpRequestError(
        method="GET",
        url=path,
        message=f"GET request to {path} failed with status {status_code}",
        status_code=status_code,
    )


def network_error(path: str = "/data") -> HttpRequestError:
    exc = httpx.ConnectError("Connection refused")
    return HttpRequestError(method="GET", url=path, message="connection refused", cause=exc)


def timeout_error(path: str = "/data") -> HttpRequestError:
    exc = httpx.ConnectTimeout("Connection timed out")
    return HttpRequestError(method="GET", url=path, message="timed out", cause=exc)
