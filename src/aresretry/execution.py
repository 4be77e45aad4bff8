r"""Execution strategies running retry sequences off the caller's thread.

An execution strategy turns a request and a completion callback into a
``RequestTask`` and schedules it. The retry engine is unaware of the
concurrency primitive: a dedicated thread, a thread pool or an asyncio
event loop executor.
"""

from __future__ import annotations

__all__ = [
    "AsyncioExecutionStrategy",
    "BaseExecutionStrategy",
    "ImmediateExecutionStrategy",
    "RequestTask",
    "ThreadExecutionStrategy",
    "ThreadPoolExecutionStrategy",
    "log_task_exception",
]

import asyncio
import itertools
import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from aresretry.utils.structured_logging import reset_correlation_id, set_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Future
    from types import TracebackType
    from typing import Any, Self

    from aresretry.callbacks import AsyncCallback
    from aresretry.request import HttpRequest
    from aresretry.retry import RetryExecutor

logger: logging.Logger = logging.getLogger(__name__)

_task_ids = itertools.count(1)


def log_task_exception(future: Future | asyncio.Future) -> None:
    r"""Log the exception raised by a task scheduled on an executor.

    Args:
        future: The future of the scheduled ``RequestTask.run`` call.
    """
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Request task raised an exception", exc_info=exc)


class RequestTask:
    """Runnable unit executing one request and reporting its outcome.

    ``run`` executes the whole retry sequence in the calling thread and
    then calls exactly one of ``callback.on_success`` and
    ``callback.on_error``. A task can run only once.

    Args:
        executor: The retry executor.
        request: The request to execute.
        callback: The completion callback.
    """

    def __init__(
        self, executor: RetryExecutor, request: HttpRequest, callback: AsyncCallback
    ) -> None:
        self.task_id = f"task-{next(_task_ids)}"
        self.executor = executor
        self.request = request
        self.callback = callback
        self._cancel_event = threading.Event()
        self._done_event = threading.Event()
        self._lock = threading.Lock()
        self._started = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(task_id={self.task_id!r}, "
            f"method={self.request.method!r}, path={self.request.path!r})"
        )

    @property
    def cancelled(self) -> bool:
        """Indicate if the cancellation of the task was requested."""
        return self._cancel_event.is_set()

    @property
    def done(self) -> bool:
        """Indicate if the outcome was delivered to the callback."""
        return self._done_event.is_set()

    def cancel(self) -> None:
        r"""Request the cancellation of the task.

        The retry sequence stops at its next wait between two attempts and
        the last failure is delivered to ``callback.on_error``. An attempt
        in progress is not interrupted.
        """
        logger.debug(f"Cancelling {self.task_id}")
        self._cancel_event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the outcome was delivered to the callback.

        Args:
            timeout: Optional maximum wait in seconds.

        Returns:
            ``True`` if the outcome was delivered, ``False`` on timeout.
        """
        return self._done_event.wait(timeout)

    def run(self) -> None:
        """Execute the retry sequence and deliver its outcome.

        Raises:
            RuntimeError: If the task already ran.
        """
        with self._lock:
            if self._started:
                msg = f"{self.task_id} has already been started"
                raise RuntimeError(msg)
            self._started = True

        token = set_correlation_id(self.task_id)
        try:
            try:
                response = self.executor.execute(self.request, cancel_event=self._cancel_event)
            except Exception as exc:  # noqa: BLE001
                logger.debug(f"{self.task_id} failed: {exc}")
                self._deliver(self.callback.on_error, exc)
            else:
                logger.debug(f"{self.task_id} succeeded")
                self._deliver(self.callback.on_success, response)
        finally:
            reset_correlation_id(token)
            self._done_event.set()

    def _deliver(self, func: Callable[[Any], None], value: Any) -> None:
        try:
            func(value)
        except Exception:
            logger.exception(f"Callback of {self.task_id} raised an exception")


class BaseExecutionStrategy(ABC):
    """Abstract base class for execution strategies."""

    def create_task(
        self, executor: RetryExecutor, request: HttpRequest, callback: AsyncCallback
    ) -> RequestTask:
        """Create the runnable unit of a request.

        Args:
            executor: The retry executor.
            request: The request to execute.
            callback: The completion callback.

        Returns:
            The task.
        """
        return RequestTask(executor=executor, request=request, callback=callback)

    @abstractmethod
    def submit(self, task: RequestTask) -> None:
        """Schedule a task and return without waiting for it.

        Args:
            task: The task to run.
        """


class ImmediateExecutionStrategy(BaseExecutionStrategy):
    """Execution strategy running tasks in the caller's thread.

    ``submit`` returns only after the callback was called. This is
    mostly useful for scripts and tests.
    """

    def submit(self, task: RequestTask) -> None:
        task.run()


class ThreadExecutionStrategy(BaseExecutionStrategy):
    """Execution strategy running each task in a new thread.

    Args:
        daemon: Whether the threads are daemon threads.
    """

    def __init__(self, daemon: bool = True) -> None:
        self.daemon = daemon

    def submit(self, task: RequestTask) -> None:
        thread = threading.Thread(target=task.run, name=f"aresretry-{task.task_id}", daemon=self.daemon)
        thread.start()


class ThreadPoolExecutionStrategy(BaseExecutionStrategy):
    """Execution strategy running tasks in a shared thread pool.

    Args:
        max_workers: The maximum number of worker threads. ``None`` uses
            the ``ThreadPoolExecutor`` default.

    Example:
        ```pycon
        >>> from aresretry.execution import ThreadPoolExecutionStrategy
        >>> with ThreadPoolExecutionStrategy(max_workers=4) as strategy:
        ...     pass
        ...

        ```
    """

    def __init__(self, max_workers: int | None = None) -> None:
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="aresretry")

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.shutdown(wait=True)

    def submit(self, task: RequestTask) -> None:
        self._pool.submit(task.run).add_done_callback(log_task_exception)

    def shutdown(self, wait: bool = True) -> None:
        """Shut the thread pool down.

        Args:
            wait: Whether to wait for the running tasks.
        """
        self._pool.shutdown(wait=wait)


class AsyncioExecutionStrategy(BaseExecutionStrategy):
    """Execution strategy running tasks in an event loop executor.

    The task runs in the default executor of the event loop, so the loop
    itself is never blocked. The callback is called from the executor
    thread.

    Args:
        loop: Optional event loop. If ``None``, ``submit`` must be called
            from a coroutine and uses the running loop. When a loop is
            given, ``submit`` may be called from any thread.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def submit(self, task: RequestTask) -> None:
        if self._loop is None:
            self._schedule(asyncio.get_running_loop(), task)
            return
        self._loop.call_soon_threadsafe(self._schedule, self._loop, task)

    @staticmethod
    def _schedule(loop: asyncio.AbstractEventLoop, task: RequestTask) -> None:
        loop.run_in_executor(None, task.run).add_done_callback(log_task_exception)
