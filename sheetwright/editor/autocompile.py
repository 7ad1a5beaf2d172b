"""Auto-compile scheduling.

Coalesces bursts of edits into one compile after a quiet period, and
runs compiles on a single background worker so results arrive in order.

Usage:
    from sheetwright.editor.autocompile import AutoCompiler

    auto = AutoCompiler(compile_fn, delay=2.0, on_result=show_pdf)
    buffer = EditorBuffer(catalog, on_change=auto.notify_change)
"""

from concurrent.futures import Future
from typing import Any, Callable, Optional

from sheetwright.core.config import COMPILE_MODES, get_config
from sheetwright.core.exceptions import ConfigurationError
from sheetwright.core.logging import get_logger
from sheetwright.core.tasks import Debouncer, TaskManager, TaskResult

logger = get_logger(__name__)

COMPILE_TASK = "compile"


class AutoCompiler:
    """Debounced compile trigger for the editor.

    In "auto" mode every change to a document longer than
    ``min_length`` restarts the quiet-period countdown; shorter
    documents cancel any pending compile. In "manual" mode only
    compile_now() compiles.
    """

    def __init__(
        self,
        compile_fn: Callable[[str], Any],
        delay: Optional[float] = None,
        min_length: Optional[int] = None,
        mode: Optional[str] = None,
        on_result: Optional[Callable[[TaskResult], None]] = None,
        tasks: Optional[TaskManager] = None,
    ) -> None:
        """Create the scheduler.

        Unset delay, min_length and mode come from the configuration
        (SHEETWRIGHT_COMPILE_DELAY, _MIN_AUTOCOMPILE_LENGTH, _COMPILE_MODE).
        """
        config = get_config()
        if delay is None:
            delay = config.compile_delay
        if min_length is None:
            min_length = config.min_autocompile_length
        if mode is None:
            mode = config.compile_mode

        self._compile_fn = compile_fn
        self.min_length = min_length
        self._on_result = on_result
        self._tasks = tasks or TaskManager(max_workers=1)
        self._debouncer = Debouncer(delay, self._submit)
        self._mode = "auto"
        self.set_mode(mode)

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def delay(self) -> float:
        """Quiet period in seconds before an auto-compile fires."""
        return self._debouncer.delay

    @property
    def pending(self) -> bool:
        """Whether a debounced compile is waiting for the quiet period."""
        return self._debouncer.pending

    def set_mode(self, mode: str) -> None:
        """Switch between "auto" and "manual".

        Raises:
            ConfigurationError: If the mode is unknown
        """
        if mode not in COMPILE_MODES:
            raise ConfigurationError(f"Unknown compile mode: {mode!r}")
        self._mode = mode
        if mode == "manual":
            self._debouncer.cancel()

    def notify_change(self, text: str) -> None:
        """Report the current document after an edit."""
        if self._mode == "auto" and len(text) > self.min_length:
            self._debouncer.trigger(text)
        else:
            self._debouncer.cancel()

    def compile_now(self, text: str) -> Future:
        """Compile immediately, dropping any pending debounced compile."""
        self._debouncer.cancel()
        return self._submit(text)

    def shutdown(self, wait: bool = True) -> None:
        self._debouncer.cancel()
        self._tasks.shutdown(wait=wait)

    def _submit(self, text: str) -> Future:
        logger.debug("Compile scheduled", extra={"context": {"length": len(text)}})
        return self._tasks.submit(COMPILE_TASK, self._compile_fn, text, callback=self._on_result)
