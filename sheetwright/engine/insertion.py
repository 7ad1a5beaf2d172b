"""Insertion planning for palette commits.

Decides the literal text that replaces ``/query`` and where the caret
lands afterwards:

    1. Math-only snippets outside math mode are wrapped, as display
       math when the line is otherwise blank, inline math otherwise.
    2. The caret position is chosen by the first matching rule in
       CURSOR_RULES.

Usage:
    from sheetwright.engine.insertion import plan_insertion

    plan = plan_insertion(entry, text, trigger_offset, caret)
    text = plan.apply(text)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from sheetwright.core.logging import get_logger
from sheetwright.engine.catalog import CatalogEntry
from sheetwright.engine.mode_detector import is_in_math_mode

logger = get_logger(__name__)

# Checked in this order; the earliest occurrence in the text wins
TEMPLATE_PLACEHOLDERS = ("Algorithm Name", "Input specification", "Output specification")

EMPTY_BRACES = "{}"
SUBSCRIPT_OPEN = "_{"

BLOCK_INDENT = "    "

# (document, offset) -> inside math
MathModeCheck = Callable[[str, int], bool]


class WrapStyle(str, Enum):
    NONE = "none"
    INLINE = "inline"
    BLOCK = "block"


@dataclass(frozen=True)
class InsertionPlan:
    """A planned replacement of ``document[replace_start:replace_end]``.

    Attributes:
        replace_start: Trigger offset
        replace_end: Caret offset when the palette was committed
        text: Final (possibly wrapped) snippet text
        cursor: Absolute caret offset after the replacement
        wrap: How the snippet was wrapped
    """

    replace_start: int
    replace_end: int
    text: str
    cursor: int
    wrap: WrapStyle = WrapStyle.NONE

    def apply(self, document: str) -> str:
        """Return the document with the replacement performed."""
        return document[: self.replace_start] + self.text + document[self.replace_end :]


def is_line_blank_around(document: str, trigger_offset: int, caret: int) -> bool:
    """Whether the trigger line has nothing but whitespace outside ``/query``.

    Looks at the text from the line start up to the trigger, and from
    the caret up to the line end.
    """
    line_start = document.rfind("\n", 0, trigger_offset) + 1
    line_end = document.find("\n", caret)
    if line_end == -1:
        line_end = len(document)
    before = document[line_start:trigger_offset]
    after = document[caret:line_end]
    return not before.strip() and not after.strip()


def wrap_snippet(snippet: str, style: WrapStyle) -> str:
    if style is WrapStyle.BLOCK:
        return f"\\[\n{BLOCK_INDENT}{snippet}\n\\]"
    if style is WrapStyle.INLINE:
        return f"${snippet}$"
    return snippet


def choose_wrap(
    entry: CatalogEntry,
    document: str,
    trigger_offset: int,
    caret: int,
    in_math: MathModeCheck = is_in_math_mode,
) -> WrapStyle:
    if not entry.requires_math_mode or in_math(document, trigger_offset):
        return WrapStyle.NONE
    if is_line_blank_around(document, trigger_offset, caret):
        return WrapStyle.BLOCK
    return WrapStyle.INLINE


# =============================================================================
# CURSOR RULES
# =============================================================================

# (name, applies, offset) - offset is relative to the start of the final text
CursorRule = tuple[
    str,
    Callable[[CatalogEntry, str], bool],
    Callable[[CatalogEntry, str], Optional[int]],
]


def _first_placeholder(entry: CatalogEntry, final_text: str) -> Optional[int]:
    hits = [final_text.find(p) for p in TEMPLATE_PLACEHOLDERS]
    hits = [h for h in hits if h != -1]
    return min(hits) if hits else None


def _inside_braces(entry: CatalogEntry, final_text: str) -> Optional[int]:
    return final_text.find(EMPTY_BRACES) + 1


def _after_range_start(entry: CatalogEntry, final_text: str) -> Optional[int]:
    equals = final_text.find("=")
    if equals != -1:
        return equals + 1
    return final_text.find(SUBSCRIPT_OPEN) + len(SUBSCRIPT_OPEN)


CURSOR_RULES: tuple[CursorRule, ...] = (
    ("template_placeholder", lambda e, t: e.is_template, _first_placeholder),
    ("empty_braces", lambda e, t: EMPTY_BRACES in e.id, _inside_braces),
    ("subscript_range", lambda e, t: SUBSCRIPT_OPEN in e.id, _after_range_start),
)


def cursor_offset(entry: CatalogEntry, final_text: str) -> tuple[str, int]:
    """Caret position inside ``final_text`` and the rule that chose it.

    The first rule whose predicate holds decides. A rule that finds
    nothing to point at falls back to the end of the text, as does
    the case where no rule applies.
    """
    for name, applies, offset in CURSOR_RULES:
        if applies(entry, final_text):
            position = offset(entry, final_text)
            if position is None:
                return "end", len(final_text)
            return name, position
    return "end", len(final_text)


def plan_insertion(
    entry: CatalogEntry,
    document: str,
    trigger_offset: int,
    caret: int,
    in_math: MathModeCheck = is_in_math_mode,
) -> InsertionPlan:
    """Plan replacing ``document[trigger_offset:caret]`` with ``entry``.

    Args:
        entry: Selected catalog entry
        document: Current document text
        trigger_offset: Offset of the trigger character
        caret: Current caret offset (end of the typed query)
        in_math: Math-mode check, full re-scan by default

    Returns:
        InsertionPlan with the final text and the absolute caret offset
    """
    caret = max(caret, trigger_offset)
    wrap = choose_wrap(entry, document, trigger_offset, caret, in_math)
    final_text = wrap_snippet(entry.id, wrap)
    rule, relative = cursor_offset(entry, final_text)

    logger.debug(
        "Insertion planned",
        extra={
            "context": {
                "label": entry.label,
                "wrap": wrap.value,
                "cursor_rule": rule,
                "trigger_offset": trigger_offset,
            }
        },
    )
    return InsertionPlan(
        replace_start=trigger_offset,
        replace_end=caret,
        text=final_text,
        cursor=trigger_offset + relative,
        wrap=wrap,
    )
