r"""Structured logging utilities for machine-readable log output.

The structured logging system is opt-in: the package never installs
handlers. Each asynchronous request sets a correlation ID for the
duration of its retry sequence, so the log records of concurrent
requests can be told apart.

Example:
    Enable structured logging for aresretry:

    ```python
    import logging
    from aresretry.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aresretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Returns:
        The current correlation ID, or None if not set.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> contextvars.Token[str | None]:
    """Set the correlation ID of the current context.

    Args:
        correlation_id: The correlation ID (e.g., request task ID).

    Returns:
        The token to pass to ``reset_correlation_id`` to restore the
            previous correlation ID.

    Example:
        ```pycon
        >>> from aresretry.utils.structured_logging import (
        ...     get_correlation_id,
        ...     reset_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> token = set_correlation_id("task-1")
        >>> get_correlation_id()
        'task-1'
        >>> reset_correlation_id(token)
        >>> get_correlation_id()

        ```
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: contextvars.Token[str | None]) -> None:
    """Restore the correlation ID that was set before ``token`` was created.

    Args:
        token: The token returned by ``set_correlation_id``.
    """
    _correlation_id.reset(token)


def clear_correlation_id() -> None:
    """Clear the correlation ID of the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record is rendered as one JSON object with the fields
    ``timestamp``, ``level``, ``logger``, ``message``, ``module``,
    ``function``, ``line`` and ``thread``, plus ``correlation_id`` when
    set, ``exception`` when present, and any field passed through
    ``extra``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from aresretry.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord("aresretry", logging.DEBUG, __file__, 1, "hello", (), None)
        >>> json.loads(StructuredFormatter().format(record))["message"]
        'hello'

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value
        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format the timestamp as ISO 8601 with millisecond precision."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )
