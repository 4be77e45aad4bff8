r"""Interruptible wait between two attempts."""

from __future__ import annotations

__all__ = ["wait_before_retry"]

import logging
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import threading

logger: logging.Logger = logging.getLogger(__name__)


def wait_before_retry(wait_time: float, cancel_event: threading.Event | None = None) -> bool:
    """Wait before the next attempt.

    Args:
        wait_time: The wait in seconds.
        cancel_event: Optional event. Setting it interrupts the wait.

    Returns:
        ``True`` if the wait was interrupted, otherwise ``False``.

    Example:
        ```pycon
        >>> import threading
        >>> from aresretry.utils.sleep import wait_before_retry
        >>> wait_before_retry(0.0)
        False
        >>> event = threading.Event()
        >>> event.set()
        >>> wait_before_retry(10.0, event)
        True

        ```
    """
    logger.debug(f"Waiting {wait_time:.2f}s before retry")
    if cancel_event is None:
        time.sleep(wait_time)
        return False
    return cancel_event.wait(wait_time)
