r"""Retry package implementing the retry loop.

Public API:
    - CallbackConfig: Configuration for lifecycle hooks
    - CallbackManager: Manager for lifecycle hook invocations
    - Disposition: Outcome of the classification of a failed attempt
    - RetryDecider: Classification of failed attempts
    - RetryExecutor: Synchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "CallbackConfig",
    "CallbackManager",
    "Disposition",
    "RetryDecider",
    "RetryExecutor",
]

from aresretry.retry.config import CallbackConfig
from aresretry.retry.decider import Disposition, RetryDecider
from aresretry.retry.executor import RetryExecutor
from aresretry.retry.manager import CallbackManager
