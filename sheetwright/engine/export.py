"""Whole-sheet and per-exercise compilation.

Assembles compilable documents from the carrier template and hands
them to a compiler. The compiler is anything with
``compile(text) -> CompileResult``; the pdflatex integration is the
production one.

Usage:
    from sheetwright.engine.export import compile_segments

    exports = compile_segments(content, carrier, compiler, numbers=[1, 3])
    for item in exports:
        if item.result.success:
            Path(item.filename).write_bytes(item.result.pdf)
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Protocol, Union

from sheetwright.core.exceptions import NoSegmentsError
from sheetwright.core.logging import get_logger
from sheetwright.engine.segmenter import DocumentSegment, segment_document, select_segments
from sheetwright.engine.templates import embed, embed_segment
from sheetwright.integrations.latex import CompileResult

logger = get_logger(__name__)


class Compiler(Protocol):
    def compile(self, document: str) -> CompileResult: ...


@dataclass
class SegmentExport:
    """Compile outcome for one exercise.

    Attributes:
        segment: The exercise that was compiled
        result: Compiler outcome
    """

    segment: DocumentSegment
    result: CompileResult

    @property
    def filename(self) -> str:
        return f"exercise_{self.segment.label}.pdf"


def sheet_filename(number: int | str) -> str:
    return f"sheet_{number}.pdf"


def compile_document(
    content: str,
    carrier: str,
    compiler: Compiler,
    number: int | str = 1,
    review: bool = False,
) -> CompileResult:
    """Compile the whole editor content as one sheet."""
    document = embed(carrier, content, number, review=review)
    return compiler.compile(document)


def compile_segments(
    content: str,
    carrier: str,
    compiler: Compiler,
    numbers: Optional[Iterable[int]] = None,
    review: bool = False,
    marker: Union[str, Pattern[str], None] = None,
) -> list[SegmentExport]:
    """Compile every exercise (or the selected ones) on its own.

    A failing exercise is recorded and the rest still compile.

    Args:
        content: Editor content
        carrier: Carrier template text
        compiler: Compiler collaborator
        numbers: Exercise numbers to keep; None keeps all
        review: Compile in review mode
        marker: Boundary pattern override

    Returns:
        One SegmentExport per compiled exercise, in document order

    Raises:
        NoSegmentsError: If the content has no boundary marker, or none
            of the requested numbers exist
    """
    segments = segment_document(content, marker)
    if not segments:
        raise NoSegmentsError(
            "No exercises found. Start each exercise with "
            "\\exercisetitle{Exercise <n>: <title>}."
        )

    chosen = select_segments(segments, numbers)
    if not chosen:
        available = ", ".join(s.label for s in segments)
        raise NoSegmentsError(f"None of the requested exercises exist (found: {available})")

    exports: list[SegmentExport] = []
    for segment in chosen:
        result = compiler.compile(embed_segment(carrier, segment, review=review))
        if not result.success:
            logger.warning(
                f"Exercise {segment.label} failed to compile",
                extra={"context": {"ordinal": segment.ordinal, "error": result.message}},
            )
        exports.append(SegmentExport(segment=segment, result=result))

    logger.info(
        "Split compilation finished",
        extra={
            "context": {
                "segments": len(exports),
                "failed": sum(1 for e in exports if not e.result.success),
            }
        },
    )
    return exports
