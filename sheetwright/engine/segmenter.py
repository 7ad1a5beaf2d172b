"""Split an exercise sheet into one document per exercise.

A segment starts at a boundary marker such as
``\\exercisetitle{Exercise 3: Sorting}`` and runs up to the next marker
or the end of the document. Anything before the first marker belongs
to no segment.

The marker label ends at the first closing brace. Labels containing
nested braces are cut short; that is a known limitation, not handled.

Usage:
    from sheetwright.engine.segmenter import segment_document

    segments = segment_document(text)
    if not segments:
        raise NoSegmentsError("No \\exercisetitle found")
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Union

from sheetwright.core.logging import get_logger

logger = get_logger(__name__)


def build_marker_pattern(command: str, label_prefix: str = "") -> Pattern[str]:
    """Compile a boundary pattern ``<command>{[prefix] <n>: <title>}``.

    Args:
        command: Literal command text, e.g. ``\\exercisetitle`` or ``M``
        label_prefix: Word before the number, e.g. ``Exercise``

    Returns:
        Case-insensitive pattern with groups ``number`` and ``title``
    """
    prefix = rf"{re.escape(label_prefix)}\s*" if label_prefix else ""
    return re.compile(
        rf"{re.escape(command)}\{{\s*{prefix}(?P<number>\d+)\s*:(?P<title>[^}}]*)\}}",
        re.IGNORECASE,
    )


EXERCISE_MARKER = build_marker_pattern("\\exercisetitle", "Exercise")


@dataclass(frozen=True)
class DocumentSegment:
    """One exercise cut out of a sheet.

    Attributes:
        ordinal: 1-based position among the segments
        text: From this marker up to the next marker or document end
        start: Offset of the marker in the source document
        number: Exercise number carried by the marker, if any
        title: Title text after the colon, stripped
    """

    ordinal: int
    text: str
    start: int = 0
    number: Optional[int] = None
    title: str = ""

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def label(self) -> str:
        """Numeric label used for the exercise counter."""
        return str(self.number if self.number is not None else self.ordinal)


def _as_pattern(marker: Union[str, Pattern[str], None]) -> Pattern[str]:
    if marker is None:
        return EXERCISE_MARKER
    if isinstance(marker, str):
        return re.compile(marker, re.IGNORECASE)
    return marker


def segment_document(
    document: str, marker: Union[str, Pattern[str], None] = None
) -> list[DocumentSegment]:
    """Split ``document`` at every boundary marker.

    Args:
        document: Full editor content
        marker: Boundary pattern; defaults to the exercise title marker.
            A plain string is compiled case-insensitively.

    Returns:
        Segments in document order. Empty when no marker occurs; the
        caller must report that to the user.
    """
    pattern = _as_pattern(marker)
    matches = [m for m in pattern.finditer(document) if m.end() > m.start()]

    if not matches:
        logger.info("No boundary markers found", extra={"context": {"length": len(document)}})
        return []

    starts = [m.start() for m in matches] + [len(document)]
    segments: list[DocumentSegment] = []
    for ordinal, m in enumerate(matches, start=1):
        groups = m.groupdict()
        number = groups.get("number")
        segments.append(
            DocumentSegment(
                ordinal=ordinal,
                text=document[starts[ordinal - 1] : starts[ordinal]],
                start=m.start(),
                number=int(number) if number is not None else None,
                title=(groups.get("title") or "").strip(),
            )
        )

    logger.debug(
        "Document segmented",
        extra={"context": {"segments": len(segments), "discarded_prefix": starts[0]}},
    )
    return segments


def select_segments(
    segments: Iterable[DocumentSegment], numbers: Optional[Iterable[int]] = None
) -> list[DocumentSegment]:
    """Keep segments whose label is one of ``numbers``, in document order.

    ``None`` keeps everything.
    """
    if numbers is None:
        return list(segments)
    wanted = {str(n) for n in numbers}
    return [s for s in segments if s.label in wanted]


def join_segments(segments: Iterable[DocumentSegment]) -> str:
    """Concatenate segment texts in order."""
    return "".join(s.text for s in segments)
