"""Math-mode detection for a cursor position in a LaTeX document.

A position is "in math" when an unescaped ``$`` or a ``\\[`` before it
is still open. The reference answer always comes from scanning the
whole prefix; the incremental detector resumes from a checkpoint and
must agree with it.

Usage:
    from sheetwright.engine.mode_detector import is_in_math_mode

    if not is_in_math_mode(text, offset):
        snippet = f"${snippet}$"
"""

from dataclasses import dataclass
from typing import Optional

from sheetwright.core.logging import get_logger

logger = get_logger(__name__)

ESCAPE = "\\"
INLINE_DELIMITER = "$"
BLOCK_OPEN = "\\["
BLOCK_CLOSE = "\\]"


@dataclass(frozen=True)
class ScanState:
    """Delimiter balance after scanning up to ``position``.

    ``position`` is where the next scan resumes. It can sit one
    character before the scanned end when the prefix ended in a lone
    backslash that may still pair with the next character.
    """

    position: int
    in_inline: bool = False
    in_block: bool = False

    @property
    def in_math(self) -> bool:
        return self.in_inline or self.in_block


def scan(document: str, end: int, start: Optional[ScanState] = None) -> ScanState:
    """Scan ``document[start.position:end]`` and return the new state.

    Two-character markers are only recognised when both characters lie
    before ``end``. Unbalanced delimiters stay open to the end.
    """
    end = max(0, min(end, len(document)))
    state = start or ScanState(0)
    in_inline = state.in_inline
    in_block = state.in_block
    i = state.position
    resume = end

    while i < end:
        ch = document[i]
        if ch == ESCAPE:
            if i + 1 >= end:
                resume = i
                break
            pair = document[i : i + 2]
            if pair == BLOCK_OPEN:
                in_block = True
                in_inline = False
                i += 2
                continue
            if pair == BLOCK_CLOSE:
                in_block = False
                i += 2
                continue
        elif ch == INLINE_DELIMITER and (i == 0 or document[i - 1] != ESCAPE):
            in_inline = not in_inline
        i += 1

    return ScanState(resume, in_inline, in_block)


def is_in_math_mode(document: str, offset: int) -> bool:
    """Whether ``offset`` lies inside inline or display math.

    Re-scans from the start of the document on every call.
    """
    return scan(document, offset).in_math


class IncrementalModeDetector:
    """Math-mode detector that resumes from its last scan.

    Queries at or after the checkpoint only scan the new stretch.
    The owner must call notify_edit() for every edit; an edit before
    the checkpoint drops it and the next query re-scans from the start.
    """

    def __init__(self) -> None:
        self._checkpoint: Optional[ScanState] = None
        self.full_scans = 0

    def is_in_math_mode(self, document: str, offset: int) -> bool:
        checkpoint = self._checkpoint
        if checkpoint is None or checkpoint.position > offset or checkpoint.position > len(document):
            self.full_scans += 1
            checkpoint = None
        state = scan(document, offset, checkpoint)
        self._checkpoint = state
        return state.in_math

    def notify_edit(self, position: int) -> None:
        """Record an edit that starts at ``position``."""
        if self._checkpoint is not None and position < self._checkpoint.position:
            logger.debug(
                "Mode checkpoint invalidated",
                extra={"context": {"edit": position, "checkpoint": self._checkpoint.position}},
            )
            self._checkpoint = None

    def reset(self) -> None:
        self._checkpoint = None

    def verify(self, document: str, offset: int) -> bool:
        """Check the incremental answer against a full re-scan."""
        return self.is_in_math_mode(document, offset) == is_in_math_mode(document, offset)
