"""Engine package - Editing and splitting logic.

This package contains the pure, synchronous core:
    - Command catalog and fuzzy ranking
    - Math-mode detection
    - Insertion planning (auto-wrapping and caret placement)
    - Sheet segmentation and document assembly
    - Compile orchestration over the compiler integration

Modules:
    - catalog: Snippet registry and shipped vocabulary
    - matcher: Query scoring and ranking
    - mode_detector: Math-mode scanning
    - insertion: Wrapping and caret rules
    - segmenter: Boundary markers and segments
    - templates: Carrier template and starter documents
    - export: Whole-sheet and per-exercise compilation
"""

from sheetwright.engine.catalog import CatalogEntry, CommandCatalog, default_catalog
from sheetwright.engine.insertion import InsertionPlan, WrapStyle, plan_insertion
from sheetwright.engine.matcher import MatchResult, match, rank
from sheetwright.engine.mode_detector import IncrementalModeDetector, is_in_math_mode
from sheetwright.engine.segmenter import (
    EXERCISE_MARKER,
    DocumentSegment,
    build_marker_pattern,
    segment_document,
)

__all__ = [
    # Catalog
    "CatalogEntry",
    "CommandCatalog",
    "default_catalog",
    # Matching
    "MatchResult",
    "match",
    "rank",
    # Mode detection
    "IncrementalModeDetector",
    "is_in_math_mode",
    # Insertion
    "InsertionPlan",
    "WrapStyle",
    "plan_insertion",
    # Segmentation
    "EXERCISE_MARKER",
    "DocumentSegment",
    "build_marker_pattern",
    "segment_document",
]
