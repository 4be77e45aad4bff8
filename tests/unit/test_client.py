r"""Unit tests for AsyncHttpClient."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest

from aresretry import AsyncHttpClient, FunctionCallback
from aresretry.exceptions import HttpRequestError
from aresretry.execution import ImmediateExecutionStrategy, ThreadExecutionStrategy
from aresretry.request import HttpRequest
from aresretry.retry import CallbackConfig
from tests.helpers import RecordingCallback


class ServerStub:
    """Request handler of ``httpx.MockTransport`` replaying status codes."""

    def __init__(self, *status_codes: int) -> None:
        self.status_codes = list(status_codes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code = self.status_codes.pop(0) if len(self.status_codes) > 1 else self.status_codes[0]
        return httpx.Response(status_code, text=f"{request.method} {request.url.path}")


def make_client(server: ServerStub, **kwargs: object) -> AsyncHttpClient:
    http_client = httpx.Client(
        base_url="https://example.com", transport=httpx.MockTransport(server)
    )
    return AsyncHttpClient(ImmediateExecutionStrategy(), client=http_client, **kwargs)


def test_async_http_client_max_retries() -> None:
    with make_client(ServerStub(200)) as client:
        assert client.max_retries == 3
        client.max_retries = 7
        assert client.max_retries == 7
        assert client.executor.policy.max_retries == 7


@pytest.mark.parametrize("max_retries", [0, 19])
def test_async_http_client_invalid_max_retries(max_retries: int) -> None:
    with make_client(ServerStub(200)) as client:
        client.max_retries = 4
        with pytest.raises(ValueError, match=r"max_retries must be between 1 and 18"):
            client.max_retries = max_retries
        assert client.max_retries == 4


def test_async_http_client_get() -> None:
    server = ServerStub(200)
    callback = RecordingCallback()
    with make_client(server) as client:
        task = client.get("/users", {"page": "2"}, callback)

    assert task.done
    assert callback.successes[0].text == "GET /users"
    assert callback.errors == []
    assert str(server.requests[0].url) == "https://example.com/users?page=2"


def test_async_http_client_post() -> None:
    server = ServerStub(201)
    callback = RecordingCallback()
    with make_client(server) as client:
        client.post("/users", {"name": "ada"}, callback)

    assert callback.successes[0].status_code == 201
    assert server.requests[0].content == b"name=ada"
    assert server.requests[0].headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_async_http_client_post_data() -> None:
    server = ServerStub(201)
    callback = RecordingCallback()
    with make_client(server) as client:
        client.post_data("/users", "application/json", b'{"name": "ada"}', callback)

    assert callback.successes[0].status_code == 201
    assert server.requests[0].method == "POST"
    assert server.requests[0].content == b'{"name": "ada"}'
    assert server.requests[0].headers["Content-Type"] == "application/json"


def test_async_http_client_put() -> None:
    server = ServerStub(200)
    callback = RecordingCallback()
    with make_client(server) as client:
        client.put("/users/1", "text/plain", b"ada", callback)

    assert callback.successes[0].text == "PUT /users/1"
    assert server.requests[0].content == b"ada"


def test_async_http_client_delete() -> None:
    server = ServerStub(204)
    callback = RecordingCallback()
    with make_client(server) as client:
        client.delete("/users/1", None, callback)

    assert callback.successes[0].status_code == 204
    assert server.requests[0].method == "DELETE"


def test_async_http_client_retries_server_error(mock_wait: Mock) -> None:
    """Test that a transient server error is retried after a wait."""
    server = ServerStub(503, 200)
    callback = RecordingCallback()
    with make_client(server) as client:
        client.get("/users", None, callback)

    assert callback.successes[0].status_code == 200
    assert len(server.requests) == 2
    assert server.requests[0].extensions["timeout"]["connect"] == 1.0
    assert server.requests[1].extensions["timeout"]["connect"] == 2.0
    mock_wait.assert_called_once()
    assert mock_wait.call_args.args[0] == 1.0


def test_async_http_client_client_error(mock_wait: Mock) -> None:
    """Test that a client error is delivered to on_error without retry."""
    server = ServerStub(404)
    callback = RecordingCallback()
    with make_client(server) as client:
        client.get("/missing", None, callback)

    assert callback.successes == []
    assert isinstance(callback.errors[0], HttpRequestError)
    assert callback.errors[0].status_code == 404
    assert len(server.requests) == 1
    mock_wait.assert_not_called()


def test_async_http_client_custom_handler(mock_wait: Mock) -> None:
    server = ServerStub(404, 200)
    callback = RecordingCallback()
    with make_client(server, handler=lambda error: error.status_code == 404) as client:
        client.get("/eventually", None, callback)

    assert callback.successes[0].status_code == 200
    mock_wait.assert_called_once()
    assert mock_wait.call_args.args[0] == 1.0


def test_async_http_client_callback_config(mock_wait: Mock) -> None:
    on_retry = Mock()
    with make_client(ServerStub(500, 200), callback_config=CallbackConfig(on_retry=on_retry)) as client:
        client.get("/users", None, RecordingCallback())
    on_retry.assert_called_once()


def test_async_http_client_function_callback() -> None:
    on_success, on_error = Mock(), Mock()
    with make_client(ServerStub(200)) as client:
        client.get("/users", None, FunctionCallback(on_success=on_success, on_error=on_error))
    on_success.assert_called_once()
    on_error.assert_not_called()


def test_async_http_client_execute() -> None:
    with make_client(ServerStub(200)) as client:
        response = client.execute(HttpRequest.get("/users"))
    assert response.text == "GET /users"


def test_async_http_client_thread_strategy() -> None:
    http_client = httpx.Client(
        base_url="https://example.com", transport=httpx.MockTransport(ServerStub(200))
    )
    callback = RecordingCallback()
    with AsyncHttpClient(ThreadExecutionStrategy(), client=http_client) as client:
        task = client.get("/users", None, callback)
        assert task.wait(timeout=5.0)

    assert callback.successes[0].status_code == 200


def test_async_http_client_does_not_close_external_client() -> None:
    http_client = httpx.Client(transport=httpx.MockTransport(ServerStub(200)))
    with AsyncHttpClient(ImmediateExecutionStrategy(), client=http_client):
        pass
    assert not http_client.is_closed
    http_client.close()


def test_async_http_client_closes_own_client() -> None:
    client = AsyncHttpClient(ImmediateExecutionStrategy(), base_url="https://example.com")
    client.close()
    assert client.executor.transport.client.is_closed
