"""Command catalog - the snippets the slash palette can insert.

The catalog is loaded once and never mutated. Components that need it
receive a CommandCatalog instance instead of reaching for module state.

Usage:
    from sheetwright.engine.catalog import default_catalog

    catalog = default_catalog()
    entry = catalog.get("\\\\BigO{}")
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from sheetwright.core.exceptions import CatalogError
from sheetwright.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SYMBOL = "📝"


@dataclass(frozen=True)
class CatalogEntry:
    """One invocable snippet.

    Attributes:
        id: Literal snippet text, unique key
        label: Display name
        description: One-line help text
        symbol: Display glyph
        keywords: Extra search terms
        is_template: Multi-line scaffold rather than a single command
        requires_math_mode: Must be placed inside $...$ or \\[...\\]
    """

    id: str
    label: str
    description: str = ""
    symbol: str = DEFAULT_SYMBOL
    keywords: tuple[str, ...] = ()
    is_template: bool = False
    requires_math_mode: bool = False


class CommandCatalog:
    """Ordered, read-only registry of catalog entries."""

    def __init__(self, entries: list[CatalogEntry] | tuple[CatalogEntry, ...]) -> None:
        by_id: dict[str, CatalogEntry] = {}
        for entry in entries:
            if entry.id in by_id:
                raise CatalogError(f"Duplicate snippet id: {entry.id!r}")
            if not entry.label:
                raise CatalogError(f"Snippet {entry.id!r} has no label")
            by_id[entry.id] = entry
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._by_id = by_id

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __contains__(self, snippet_id: object) -> bool:
        return snippet_id in self._by_id

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def get(self, snippet_id: str) -> Optional[CatalogEntry]:
        """Look up an entry by its snippet text."""
        return self._by_id.get(snippet_id)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Mapping[str, Any]]) -> "CommandCatalog":
        """Build a catalog from an ordered ``{snippet: metadata}`` mapping.

        Metadata keys: label, description, symbol, keywords,
        isTemplate / is_template, requiresMathMode / requires_math_mode.

        Raises:
            CatalogError: If an entry is malformed
        """
        entries: list[CatalogEntry] = []
        for snippet_id, info in mapping.items():
            if not isinstance(info, Mapping):
                raise CatalogError(f"Snippet {snippet_id!r} metadata must be a mapping")
            keywords = info.get("keywords") or ()
            if isinstance(keywords, str) or not all(isinstance(k, str) for k in keywords):
                raise CatalogError(f"Snippet {snippet_id!r} keywords must be a list of strings")
            entries.append(
                CatalogEntry(
                    id=snippet_id,
                    label=str(info.get("label", "")),
                    description=str(info.get("description", "")),
                    symbol=str(info.get("symbol") or DEFAULT_SYMBOL),
                    keywords=tuple(keywords),
                    is_template=bool(info.get("isTemplate", info.get("is_template", False))),
                    requires_math_mode=bool(
                        info.get("requiresMathMode", info.get("requires_math_mode", False))
                    ),
                )
            )
        return cls(entries)


def load_catalog(path: Path) -> CommandCatalog:
    """Load a catalog from a JSON object file.

    Args:
        path: JSON file mapping snippet text to metadata

    Returns:
        Loaded catalog

    Raises:
        CatalogError: If the file is not a JSON object or an entry is malformed
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {path} must contain a JSON object")

    catalog = CommandCatalog.from_mapping(data)
    logger.info(
        "Catalog loaded",
        extra={"context": {"path": str(path), "entries": len(catalog)}},
    )
    return catalog


# =============================================================================
# SHIPPED VOCABULARY
# =============================================================================

ALGORITHM_TEMPLATE = r"""
\begin{algorithm}
\caption{Algorithm Name}\label{alg:label}
\begin{algorithmic}[1]
\Require Input specification
\Ensure Output specification
\State $x \gets 0$
\While{$condition$}
    \State do something
\EndWhile
\State \Return $x$
\end{algorithmic}
\end{algorithm}
"""

MULTILINE_FUNCTION_TEMPLATE = r"""
\begin{multilinefunction}[label]
    T(n) = \begin{cases}
        \Theta(1) & \text{if } n = 1\\
        f(n) & \text{if } n > 1
    \end{cases}
\end{multilinefunction}
"""


def _math(
    snippet: str, label: str, description: str, keywords: tuple[str, ...], symbol: str
) -> CatalogEntry:
    return CatalogEntry(snippet, label, description, symbol, keywords, requires_math_mode=True)


def _text(
    snippet: str, label: str, description: str, keywords: tuple[str, ...], symbol: str
) -> CatalogEntry:
    return CatalogEntry(snippet, label, description, symbol, keywords)


DEFAULT_ENTRIES: tuple[CatalogEntry, ...] = (
    # Complexity and number notation
    _math(r"\BigO{}", "Big O", "O(n) complexity notation", ("bigo", "complexity", "time", "big", "o"), "⊙"),
    _math(r"\BigOmega{}", "Big Omega", "Ω(n) lower bound", ("bigomega", "omega", "complexity", "lower"), "Ω"),
    _math(r"\BigTheta{}", "Big Theta", "Θ(n) tight bound", ("bigtheta", "theta", "complexity", "tight"), "Θ"),
    _math(r"\floor{}", "Floor", "⌊x⌋ round down", ("floor", "round", "down"), "⌊⌋"),
    _math(r"\ceil{}", "Ceiling", "⌈x⌉ round up", ("ceil", "ceiling", "round", "up"), "⌈⌉"),
    _math(r"\abs{}", "Absolute Value", "|x| absolute value", ("abs", "absolute", "value"), "|x|"),
    _math(r"\set{}", "Set", "{1,2,3} set notation", ("set", "collection"), "{ }"),
    _math(r"\card{}", "Cardinality", "|A| set cardinality", ("card", "cardinality", "size"), "|A|"),
    _math(r"x \gets y", "Assignment", "x ← y assignment", ("assignment", "gets", "assign", "arrow"), "←"),
    _math(r"\AND", "Logical AND", "∧ logical and", ("and", "logical", "conjunction"), "∧"),
    _math(r"\OR", "Logical OR", "∨ logical or", ("or", "logical", "disjunction"), "∨"),
    _math(r"\NOT", "Logical NOT", "¬ logical not", ("not", "logical", "negation"), "¬"),
    _math(r"\N", "Natural Numbers", "ℕ natural numbers", ("natural", "numbers", "n", "positive"), "ℕ"),
    _math(r"\Z", "Integers", "ℤ integers", ("integers", "z", "whole"), "ℤ"),
    _math(r"\R", "Real Numbers", "ℝ real numbers", ("real", "numbers", "r"), "ℝ"),
    _math(r"\TRUE", "True", "TRUE boolean value", ("true", "boolean", "bool"), "⊤"),
    _math(r"\FALSE", "False", "FALSE boolean value", ("false", "boolean", "bool"), "⊥"),
    # Comparison operators
    _math(r"\leq", "Less or Equal", "≤ less than or equal to", ("leq", "less", "equal", "le"), "≤"),
    _math(r"\geq", "Greater or Equal", "≥ greater than or equal to", ("geq", "greater", "equal", "ge"), "≥"),
    _math(r"\neq", "Not Equal", "≠ not equal to", ("neq", "not", "equal", "ne"), "≠"),
    _math(r"\approx", "Approximately", "≈ approximately equal", ("approx", "approximately", "about"), "≈"),
    _math(r"\equiv", "Equivalent", "≡ equivalent to", ("equiv", "equivalent", "congruent"), "≡"),
    # Set operations
    _math(r"\in", "Element Of", "∈ element of set", ("in", "element", "member"), "∈"),
    _math(r"\notin", "Not Element Of", "∉ not element of set", ("notin", "not", "element"), "∉"),
    _math(r"\subset", "Subset", "⊂ proper subset", ("subset", "sub"), "⊂"),
    _math(r"\subseteq", "Subset or Equal", "⊆ subset or equal", ("subseteq", "subset", "equal"), "⊆"),
    _math(r"\cup", "Union", "∪ set union", ("cup", "union"), "∪"),
    _math(r"\cap", "Intersection", "∩ set intersection", ("cap", "intersection", "inter"), "∩"),
    _math(r"\emptyset", "Empty Set", "∅ empty set", ("emptyset", "empty", "null"), "∅"),
    # Functions and operators
    _math(r"\sum_{i=0}^{n}", "Summation", "Σ summation with limits", ("sum", "summation", "sigma"), "Σ"),
    _math(r"\prod_{i=0}^{n}", "Product", "Π product with limits", ("prod", "product", "pi"), "Π"),
    _math(r"\lim_{n \to \infty}", "Limit", "lim limit as n approaches", ("lim", "limit", "approaches"), "lim"),
    _math(r"\infty", "Infinity", "∞ infinity symbol", ("infty", "infinity", "inf"), "∞"),
    _math(r"\log_{}", "Logarithm", "log with base", ("log", "logarithm"), "log"),
    _math(r"\ln", "Natural Log", "ln natural logarithm", ("ln", "natural", "log"), "ln"),
    _math(r"\sqrt{}", "Square Root", "√x square root", ("sqrt", "square", "root"), "√"),
    _math(r"\frac{}{}", "Fraction", "a/b fraction", ("frac", "fraction", "divide"), "⁄"),
    # Quantifiers
    _math(r"\forall", "For All", "∀ for all (universal quantifier)", ("forall", "all", "universal"), "∀"),
    _math(r"\exists", "There Exists", "∃ there exists (existential quantifier)", ("exists", "exist", "existential"), "∃"),
    # Arrows and implications
    _math(r"\rightarrow", "Right Arrow", "→ right arrow", ("rightarrow", "arrow", "right", "to"), "→"),
    _math(r"\leftarrow", "Left Arrow", "← left arrow", ("leftarrow", "arrow", "left"), "←"),
    _math(r"\Rightarrow", "Implies", "⇒ implies (logical implication)", ("implies", "rightarrow", "implication"), "⇒"),
    _math(r"\Leftrightarrow", "If and Only If", "⇔ if and only if (iff)", ("iff", "leftrightarrow", "equivalent", "biconditional"), "⇔"),
    # Text mode
    _text(r"\textbf{}", "Bold Text", "Bold formatting", ("bold", "textbf", "strong", "format"), "𝐁"),
    _text(r"\textit{}", "Italic Text", "Italic formatting", ("italic", "textit", "emphasis", "format"), "𝐼"),
    _text(r"\emph{}", "Emphasized Text", "Emphasized formatting", ("emph", "emphasis", "italic", "format"), "𝐸"),
    _text(r"\underline{}", "Underlined Text", "Underline formatting", ("underline", "under", "format"), "U̲"),
    _text(r"\texttt{}", "Monospace Text", "Monospace/code formatting", ("monospace", "texttt", "code", "mono", "format"), "⌨"),
    _text(r"\section{}", "Section", "Section heading", ("section", "heading", "title"), "§"),
    _text(r"\subsection{}", "Subsection", "Subsection heading", ("subsection", "heading", "subtitle"), "§§"),
    _text(r"\exercisetitle{}", "Exercise Title", "Start new exercise section", ("exercise", "title", "heading"), "📝"),
    _text(r"\exercisepart{}", "Exercise Part", "Part (a), (b), etc.", ("exercise", "part", "section"), "📋"),
    _text(r"\points{}", "Points", "[5 points] for a section", ("points", "score", "marks"), "✓"),
    _text(r"\totalpoints{}", "Total Points", "Total: 20 points", ("total", "points", "sum", "score"), "∑"),
    _text(r"\score{}{}", "Score", "Points: 2/3 format", ("score", "grade", "marks", "review", "points"), "✎"),
    _text(
        "\\begin{itemize}\n    \\item {}\n\\end{itemize}",
        "List",
        "Bulleted list with one item",
        ("list", "itemize", "bullet", "items", "ul"),
        "•",
    ),
    CatalogEntry(
        ALGORITHM_TEMPLATE,
        "Algorithm Block",
        "Complete algorithm environment",
        "🔧",
        ("algorithm", "alg", "pseudocode", "block"),
        is_template=True,
    ),
    CatalogEntry(
        MULTILINE_FUNCTION_TEMPLATE,
        "Multiline Function",
        "Numbered multi-line equation environment",
        "🔢",
        ("multiline", "function", "equation", "cases", "numbered", "recurrence"),
        is_template=True,
    ),
)


def default_catalog() -> CommandCatalog:
    """Build the shipped exercise-sheet vocabulary."""
    return CommandCatalog(DEFAULT_ENTRIES)
