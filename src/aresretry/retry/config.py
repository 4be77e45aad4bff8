r"""Configuration dataclass for retry lifecycle hooks."""

from __future__ import annotations

__all__ = ["CallbackConfig"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresretry.callbacks import RequestInfo, RetryInfo


@dataclass
class CallbackConfig:
    """Configuration for lifecycle hooks.

    Attributes:
        on_request: Optional callback invoked before each attempt.
        on_retry: Optional callback invoked before waiting for a retry
            after a recoverable failure.
    """

    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
