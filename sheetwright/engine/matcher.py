"""Fuzzy matching of palette queries against catalog entries.

Scoring tiers:
    - Empty query: matches everything, score 0
    - Substring of the label: 100
    - Substring of a keyword: 80
    - In-order subsequence of the label: 50 minus 2 per skipped character
    - Otherwise: no match

Usage:
    from sheetwright.engine.matcher import rank

    results = rank("bgo", catalog)
    best = results[0].entry
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

from sheetwright.engine.catalog import CatalogEntry

LABEL_SCORE = 100
KEYWORD_SCORE = 80
SUBSEQUENCE_CEILING = 50
GAP_PENALTY = 2


@dataclass(frozen=True)
class MatchScore:
    """Outcome of matching one query against one text."""

    is_match: bool
    score: int


@dataclass(frozen=True)
class MatchResult:
    """A catalog entry with its relevance for the current query."""

    entry: CatalogEntry
    score: int  # Higher is better
    is_match: bool


NO_MATCH = MatchScore(False, 0)


def match(query: str, label: str, keywords: Sequence[str] = ()) -> MatchScore:
    """Score a query against a label and its keywords.

    Never fails; a miss is a normal non-matching result.
    """
    needle = query.lower().strip()
    text = label.lower()

    if not needle:
        return MatchScore(True, 0)

    if needle in text:
        return MatchScore(True, LABEL_SCORE)

    for keyword in keywords:
        if needle in keyword.lower():
            return MatchScore(True, KEYWORD_SCORE)

    gaps = _subsequence_gaps(needle, text)
    if gaps is None:
        return NO_MATCH
    return MatchScore(True, max(0, SUBSEQUENCE_CEILING - GAP_PENALTY * gaps))


def _subsequence_gaps(needle: str, text: str) -> int | None:
    """Total characters skipped between matched positions, or None.

    Matches greedily left to right; leading characters before the
    first hit are not counted.
    """
    gaps = 0
    last = -1
    pos = 0
    for ch in needle:
        found = text.find(ch, pos)
        if found == -1:
            return None
        if last >= 0:
            gaps += found - last - 1
        last = found
        pos = found + 1
    return gaps


def score_entry(query: str, entry: CatalogEntry) -> MatchResult:
    """Best score of the query over an entry's label and keywords.

    The label pass already honours the keyword-substring tier. Each
    keyword is then matched as a label on its own. A keyword that only
    reaches score 0 does not make the entry a match.
    """
    label_score = match(query, entry.label, entry.keywords)
    keyword_best = max((match(query, kw).score for kw in entry.keywords), default=0)
    return MatchResult(
        entry=entry,
        score=max(label_score.score, keyword_best),
        is_match=label_score.is_match or keyword_best > 0,
    )


def rank(query: str, entries: Iterable[CatalogEntry]) -> list[MatchResult]:
    """Rank catalog entries for the palette.

    A blank query returns every entry in catalog order with score 0.
    Otherwise only matching entries are kept, sorted by descending
    score; ties keep catalog order.
    """
    if not query.strip():
        return [MatchResult(entry=e, score=0, is_match=True) for e in entries]

    scored = [score_entry(query, e) for e in entries]
    return sorted((r for r in scored if r.is_match), key=lambda r: r.score, reverse=True)
