"""Keyword scanner — categorized banned-term matching.

Matching is case-insensitive substring containment, not word-boundary
matching: "hurt" also hits "hurts" and "hurtful". This over-matches on
purpose, favouring recall.
"""

from __future__ import annotations

from collections import Counter
from typing import Mapping, Sequence

from confess.moderation.models import UNKNOWN_CATEGORY, KeywordMatch, KeywordScanResult

DEFAULT_MAX_KEYWORD_MATCHES = 3


def find_matches(text: str, categories: Mapping[str, Sequence[str]]) -> list[KeywordMatch]:
    """Return one match per configured (category, term) entry found in *text*.

    Repeated occurrences of a term in the text count once; a term listed
    under two categories counts once per category.
    """
    normalized = text.lower()
    return [
        KeywordMatch(term=term, category=category)
        for category, terms in categories.items()
        for term in terms
        if term.lower() in normalized
    ]


def dominant_category(matches: Sequence[KeywordMatch], order: Sequence[str]) -> str:
    """Category with the most matches; ties go to the first declared."""
    if not matches:
        return UNKNOWN_CATEGORY
    counts = Counter(m.category for m in matches)
    best = max(counts.values())
    return next(c for c in order if counts.get(c) == best)


def scan_keywords(
    text: str,
    categories: Mapping[str, Sequence[str]],
    max_keyword_matches: int = DEFAULT_MAX_KEYWORD_MATCHES,
) -> KeywordScanResult:
    """Scan *text* against the banned-keyword table.

    ``confidence`` is ``min(matches / max_keyword_matches, 1)``: a linear
    scale saturating at ``max_keyword_matches`` hits.
    """
    matches = find_matches(text, categories)
    count = len(matches)
    return KeywordScanResult(
        flagged=count > 0,
        matches=tuple(m.term for m in matches),
        category=dominant_category(matches, list(categories)),
        confidence=min(count / max_keyword_matches, 1.0),
        match_count=count,
    )
