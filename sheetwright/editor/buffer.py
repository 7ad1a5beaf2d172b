"""Headless editing surface.

Owns the document text and caret, applies keystrokes the way a plain
textarea would, and routes them through the palette first. Used by the
CLI and by tests; a GUI host does the same wiring with real widgets.
"""

from typing import Callable, Optional, Union

from sheetwright.core.config import get_config
from sheetwright.core.logging import get_logger
from sheetwright.editor.palette import Key, TriggerController
from sheetwright.engine.catalog import CommandCatalog
from sheetwright.engine.insertion import InsertionPlan
from sheetwright.engine.mode_detector import IncrementalModeDetector

logger = get_logger(__name__)

# Text a key inserts when the palette lets it through
_KEY_TEXT = {Key.ENTER: "\n", Key.TAB: "\t"}


class EditorBuffer:
    """Document text, caret and the palette wired together.

    All edits go through this object so the math-mode checkpoint and
    the palette always see them in order.
    """

    def __init__(
        self,
        catalog: CommandCatalog,
        text: str = "",
        trigger_char: Optional[str] = None,
        on_change: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Create a buffer.

        Args:
            catalog: Commands offered by the palette
            text: Initial document
            trigger_char: Palette trigger, defaults to the configured one
            on_change: Called with the full text after every edit
        """
        if trigger_char is None:
            trigger_char = get_config().trigger_char
        self.text = text
        self.caret = len(text)
        self.palette = TriggerController(
            catalog, trigger_char=trigger_char, detector=IncrementalModeDetector()
        )
        self._on_change = on_change

    def type_text(self, chars: str) -> None:
        """Type characters one by one at the caret."""
        for ch in chars:
            self.press(ch)

    def press(self, key: Union[Key, str]) -> Optional[InsertionPlan]:
        """Apply one key. Returns the insertion plan when a command was committed."""
        outcome = self.palette.handle_key(key, self.text, self.caret)

        if outcome.plan is not None:
            self._replace(outcome.plan.replace_start, outcome.plan.replace_end, outcome.plan.text)
            self.caret = outcome.plan.cursor
            return outcome.plan

        if outcome.consumed:
            return None

        if key == Key.BACKSPACE:
            if self.caret > 0:
                self._replace(self.caret - 1, self.caret, "")
                self.caret -= 1
        elif isinstance(key, Key):
            inserted = _KEY_TEXT.get(key)
            if inserted is None:
                return None
            self._replace(self.caret, self.caret, inserted)
            self.caret += len(inserted)
        else:
            self._replace(self.caret, self.caret, key)
            self.caret += len(key)

        self.palette.handle_text_changed(self.text, self.caret)
        return None

    def move_caret(self, position: int) -> None:
        """Place the caret, e.g. after a mouse click."""
        self.caret = max(0, min(position, len(self.text)))
        self.palette.handle_text_changed(self.text, self.caret)

    def select(self, index: int) -> Optional[InsertionPlan]:
        """Commit the palette row at ``index``."""
        plan = self.palette.select(index, self.text, self.caret)
        if plan is not None:
            self._replace(plan.replace_start, plan.replace_end, plan.text)
            self.caret = plan.cursor
        return plan

    def set_text(self, text: str) -> None:
        """Replace the whole document (file load, starter swap)."""
        self.palette.dismiss()
        self._replace(0, len(self.text), text)
        self.caret = len(text)

    def _replace(self, start: int, end: int, new_text: str) -> None:
        self.text = self.text[:start] + new_text + self.text[end:]
        self.palette.notify_edit(start)
        if self._on_change is not None:
            self._on_change(self.text)
