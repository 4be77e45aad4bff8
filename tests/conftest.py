from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

from aresretry.request import BaseTransport, HttpRequest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_response() -> httpx.Response:
    """Create a mock httpx.Response for testing."""
    return Mock(spec=httpx.Response, status_code=200)


@pytest.fixture
def mock_transport(mock_response: httpx.Response) -> Mock:
    """Create a mock transport returning ``mock_response``."""
    return Mock(spec=BaseTransport, send=Mock(return_value=mock_response))


@pytest.fixture
def get_request() -> HttpRequest:
    """Create a GET request for testing."""
    return HttpRequest.get("/data")


@pytest.fixture
def mock_wait() -> Generator[Mock, None, None]:
    """Patch the interruptible wait between two attempts of a request task."""
    with patch("aresretry.retry.executor.wait_before_retry", return_value=False) as mock:
        yield mock
