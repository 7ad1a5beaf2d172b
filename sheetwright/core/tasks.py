"""Thread and task management for Sheetwright.

Provides utilities for compiling off the editing thread and for
coalescing bursts of edits into a single delayed call.

Usage:
    from sheetwright.core.tasks import Debouncer, TaskManager

    # Managed task execution
    manager = TaskManager(max_workers=1)
    manager.submit("compile", compiler.compile, text, callback=on_done)

    # Fire once, 2 seconds after the last trigger
    debouncer = Debouncer(2.0, on_quiet)
    debouncer.trigger()
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from sheetwright.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class TaskResult:
    """Result of a background task.

    Attributes:
        task_name: Name of the task
        success: Whether task completed successfully
        result: Return value if successful
        error: Exception if failed
        started_at: When task started
        completed_at: When task finished
    """

    task_name: str
    success: bool
    result: Any = None
    error: Optional[Exception] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        """Calculate task duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None


class TaskManager:
    """Manages background task execution.

    Provides a thread pool for running tasks with tracking and callbacks.

    Attributes:
        max_workers: Maximum concurrent tasks
    """

    def __init__(self, max_workers: int = 1):
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._tasks: dict[str, Future] = {}
        self._lock = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        """Get or create thread pool executor."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers)
        return self._executor

    def submit(
        self,
        task_name: str,
        func: Callable[..., Any],
        *args,
        callback: Optional[Callable[[TaskResult], None]] = None,
        **kwargs,
    ) -> Future:
        """Submit a task for execution.

        Args:
            task_name: Name for tracking
            func: Function to execute
            *args: Positional arguments
            callback: Function to call with TaskResult when complete
            **kwargs: Keyword arguments

        Returns:
            Future resolving to a TaskResult
        """
        started_at = datetime.now()

        def wrapper() -> TaskResult:
            try:
                result = func(*args, **kwargs)
                return TaskResult(
                    task_name=task_name,
                    success=True,
                    result=result,
                    started_at=started_at,
                    completed_at=datetime.now(),
                )
            except Exception as e:
                logger.error(f"Task {task_name} failed: {e}", exc_info=True)
                return TaskResult(
                    task_name=task_name,
                    success=False,
                    error=e,
                    started_at=started_at,
                    completed_at=datetime.now(),
                )

        future = self._get_executor().submit(wrapper)

        with self._lock:
            self._tasks[task_name] = future

        if callback:
            future.add_done_callback(lambda f: callback(f.result()))

        return future

    def is_running(self, task_name: str) -> bool:
        """Check if a task is queued or running."""
        with self._lock:
            future = self._tasks.get(task_name)
            return future is not None and not future.done()

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the task manager.

        Args:
            wait: Wait for pending tasks to complete
        """
        if self._executor:
            self._executor.shutdown(wait=wait)
            self._executor = None
        with self._lock:
            self._tasks.clear()


class Debouncer:
    """Call a function once after a quiet period.

    Every trigger() restarts the countdown, so a burst of triggers
    results in a single call, ``delay`` seconds after the last one.
    """

    def __init__(self, delay: float, func: Callable[..., Any]):
        self.delay = delay
        self._func = func
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        """Restart the countdown with the latest arguments."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire, args=args, kwargs=kwargs)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> bool:
        """Drop the pending call, if any.

        Returns:
            True if a call was pending
        """
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is None:
            return False
        timer.cancel()
        return True

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def _fire(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            # Superseded by a newer trigger, or cancelled after the wait ended
            if self._timer is not threading.current_thread():
                return
            self._timer = None
        self._func(*args, **kwargs)
