r"""Unit tests for structured logging utilities."""

from __future__ import annotations

import json
import logging
import sys

import pytest
from coola.equality import objects_are_equal

from aresretry.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def _reset_correlation_id() -> None:
    clear_correlation_id()


def make_record(msg: str = "hello", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("aresretry.test", logging.DEBUG, __file__, 10, msg, (), None)
    record.__dict__.update(extra)
    return record


def test_correlation_id_roundtrip() -> None:
    assert get_correlation_id() is None
    set_correlation_id("task-7")
    assert get_correlation_id() == "task-7"
    clear_correlation_id()
    assert get_correlation_id() is None


def test_reset_correlation_id_restores_previous_value() -> None:
    """Test that resetting a token restores the value set before it."""
    outer = set_correlation_id("caller")
    inner = set_correlation_id("task-8")
    assert get_correlation_id() == "task-8"
    reset_correlation_id(inner)
    assert get_correlation_id() == "caller"
    reset_correlation_id(outer)
    assert get_correlation_id() is None


def test_structured_formatter_fields() -> None:
    data = json.loads(StructuredFormatter().format(make_record()))
    assert objects_are_equal(
        {key: data[key] for key in ("level", "logger", "message", "line")},
        {"level": "DEBUG", "logger": "aresretry.test", "message": "hello", "line": 10},
    )
    assert data["timestamp"].endswith("Z")
    assert "correlation_id" not in data


def test_structured_formatter_correlation_id() -> None:
    set_correlation_id("task-3")
    data = json.loads(StructuredFormatter().format(make_record()))
    assert data["correlation_id"] == "task-3"


def test_structured_formatter_extra_fields() -> None:
    data = json.loads(StructuredFormatter().format(make_record(path="/data", attempt=2)))
    assert data["path"] == "/data"
    assert data["attempt"] == 2
    assert "msg" not in data
    assert "args" not in data


def test_structured_formatter_exception() -> None:
    try:
        msg = "boom"
        raise ValueError(msg)
    except ValueError:
        record = logging.LogRecord(
            "aresretry.test", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
        )
    data = json.loads(StructuredFormatter().format(record))
    assert "ValueError: boom" in data["exception"]
