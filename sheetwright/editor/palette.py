"""Slash-command palette - trigger, query, navigate, commit.

Typing the trigger character opens a palette session. Every edit after
that re-reads the query between the trigger and the caret and re-ranks
the catalog. The session ends on commit, cancel, dismiss, or when the
query stops being a plausible command (newline, run of whitespace,
trigger deleted, caret moved before it).

This module is the state machine only. Drawing the palette is left to
the host editor, which feeds it two kinds of events:
    - handle_key(): before a key is applied (may consume it)
    - handle_text_changed(): after the document or caret changed

Usage:
    from sheetwright.editor.palette import Key, TriggerController

    palette = TriggerController(default_catalog())
    outcome = palette.handle_key(Key.ENTER, text, caret)
    if outcome.plan:
        text = outcome.plan.apply(text)
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from sheetwright.core.logging import get_logger
from sheetwright.engine.catalog import CommandCatalog
from sheetwright.engine.insertion import InsertionPlan, plan_insertion
from sheetwright.engine.matcher import MatchResult, rank
from sheetwright.engine.mode_detector import IncrementalModeDetector, is_in_math_mode

logger = get_logger(__name__)

DEFAULT_TRIGGER = "/"

_WHITESPACE_RUN = re.compile(r"\s{2,}")


class PaletteState(str, Enum):
    IDLE = "idle"
    OPEN = "open"


class Key(str, Enum):
    """Non-character keys the palette reacts to."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    TAB = "tab"
    ESCAPE = "escape"
    BACKSPACE = "backspace"


COMMIT_KEYS = frozenset({Key.ENTER, Key.TAB})


class CloseReason(str, Enum):
    """Why a palette session ended."""

    COMMITTED = "committed"
    CANCELLED = "cancelled"
    DISMISSED = "dismissed"
    TRIGGER_REMOVED = "trigger_removed"
    CARET_BEFORE_TRIGGER = "caret_before_trigger"
    NEWLINE = "newline"
    WHITESPACE_RUN = "whitespace_run"


@dataclass
class PaletteSession:
    """Live state of one open palette.

    Attributes:
        trigger_offset: Document offset of the trigger character
        query: Text typed between the trigger and the caret
        results: Ranked matches, best first
        selected_index: Highlighted row
    """

    trigger_offset: int
    query: str = ""
    results: list[MatchResult] = field(default_factory=list)
    selected_index: int = 0

    @property
    def selected(self) -> Optional[MatchResult]:
        if not self.results:
            return None
        return self.results[self.selected_index]

    def move_selection(self, step: int) -> None:
        """Move the highlight, clamped to the result list."""
        if not self.results:
            self.selected_index = 0
            return
        self.selected_index = max(0, min(self.selected_index + step, len(self.results) - 1))


@dataclass(frozen=True)
class KeyOutcome:
    """What the host should do with a key.

    Attributes:
        consumed: The host must not apply the key's default action
        plan: Replacement to perform, set when a command was committed
    """

    consumed: bool = False
    plan: Optional[InsertionPlan] = None


PASS_THROUGH = KeyOutcome()
CONSUMED = KeyOutcome(consumed=True)


class TriggerController:
    """Palette lifecycle: Idle -> Open -> Idle.

    At most one session exists at a time, and it exists exactly while
    the palette is visible. Stale or malformed sessions are closed
    silently; nothing here raises for user input.

    Without a detector every commit re-scans the document for math
    mode. A host that passes an IncrementalModeDetector must report
    every edit through notify_edit().
    """

    def __init__(
        self,
        catalog: CommandCatalog,
        trigger_char: str = DEFAULT_TRIGGER,
        detector: Optional[IncrementalModeDetector] = None,
    ) -> None:
        self._catalog = catalog
        self._trigger = trigger_char
        self._detector = detector
        self._session: Optional[PaletteSession] = None
        self.last_close_reason: Optional[CloseReason] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> PaletteState:
        return PaletteState.OPEN if self._session is not None else PaletteState.IDLE

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[PaletteSession]:
        return self._session

    @property
    def trigger_char(self) -> str:
        return self._trigger

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_key(self, key: Union[Key, str], document: str, caret: int) -> KeyOutcome:
        """React to a key before the host applies it.

        Args:
            key: A Key member or a single typed character
            document: Document text before the key is applied
            caret: Caret offset before the key is applied

        Returns:
            KeyOutcome telling the host whether to suppress the key and
            which replacement to perform on commit
        """
        session = self._session

        if session is None:
            if key == self._trigger:
                self._open(caret)
            return PASS_THROUGH

        if key == Key.ESCAPE:
            self._close(CloseReason.CANCELLED)
            return CONSUMED

        if key == Key.DOWN:
            session.move_selection(1)
            return CONSUMED

        if key == Key.UP:
            session.move_selection(-1)
            return CONSUMED

        if key in COMMIT_KEYS:
            if not session.results:
                return CONSUMED
            return KeyOutcome(consumed=True, plan=self._commit(document, caret))

        if key == Key.BACKSPACE and caret <= session.trigger_offset:
            self._close(CloseReason.CARET_BEFORE_TRIGGER)

        return PASS_THROUGH

    def handle_text_changed(self, document: str, caret: int) -> None:
        """Re-read the query after the document or caret changed."""
        session = self._session
        if session is None:
            return

        trigger = session.trigger_offset
        if caret < trigger:
            self._close(CloseReason.CARET_BEFORE_TRIGGER)
            return
        if trigger >= len(document) or document[trigger] != self._trigger:
            self._close(CloseReason.TRIGGER_REMOVED)
            return

        query = document[trigger + len(self._trigger) : caret]
        if "\n" in query:
            self._close(CloseReason.NEWLINE)
            return
        if _WHITESPACE_RUN.search(query):
            self._close(CloseReason.WHITESPACE_RUN)
            return

        if query != session.query:
            session.query = query
            session.results = rank(query, self._catalog)
            session.selected_index = 0

    def notify_edit(self, position: int) -> None:
        """Forward an edit position to the math-mode checkpoint, if any."""
        if self._detector is not None:
            self._detector.notify_edit(position)

    def select(self, index: int, document: str, caret: int) -> Optional[InsertionPlan]:
        """Commit the row at ``index`` (pointer selection)."""
        session = self._session
        if session is None or not 0 <= index < len(session.results):
            return None
        session.selected_index = index
        return self._commit(document, caret)

    def dismiss(self) -> None:
        """Close without editing, e.g. on focus loss."""
        if self._session is not None:
            self._close(CloseReason.DISMISSED)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _open(self, caret: int) -> None:
        self._session = PaletteSession(
            trigger_offset=caret,
            results=rank("", self._catalog),
        )
        self.last_close_reason = None
        logger.debug("Palette opened", extra={"context": {"trigger_offset": caret}})

    def _commit(self, document: str, caret: int) -> InsertionPlan:
        session = self._session
        assert session is not None and session.selected is not None
        entry = session.selected.entry
        plan = plan_insertion(
            entry,
            document,
            session.trigger_offset,
            caret,
            in_math=self._detector.is_in_math_mode if self._detector else is_in_math_mode,
        )
        self._close(CloseReason.COMMITTED)
        # The replacement starts at the trigger; anything scanned past it is stale
        self.notify_edit(plan.replace_start)
        logger.info(
            "Palette command inserted",
            extra={"context": {"label": entry.label, "query": session.query}},
        )
        return plan

    def _close(self, reason: CloseReason) -> None:
        session = self._session
        self._session = None
        self.last_close_reason = reason
        if session is not None:
            logger.debug(
                "Palette closed",
                extra={"context": {"reason": reason.value, "query": session.query}},
            )
