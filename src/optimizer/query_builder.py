"""Keyword search query built from a product title without an AI call.

Stop words and unit words are bundled as immutable sets and passed in as
parameters, so callers can supply their own vocabulary.
"""

from __future__ import annotations

import re
from collections.abc import Collection

STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "shall", "can", "need", "dare",
    "new", "latest", "best", "top", "premium", "ultra", "super", "mega",
    "max", "plus", "pro", "advanced", "original", "classic", "edition",
})

UNIT_WORDS: frozenset[str] = frozenset({
    "count", "ct", "pack", "pk", "pcs", "pieces", "units", "ea", "each",
    "oz", "fl", "ml", "liter", "litre", "gallon", "gal", "lb", "lbs",
    "kg", "gram", "grams", "mg", "inch", "inches", "ft", "feet", "cm", "mm",
})

DEFAULT_MAX_KEYWORDS = 5

_SEPARATORS = re.compile(r"[,\-–—|()\[\]{}]")
_NUMBER = re.compile(r"^\d+$")
_DIMENSION = re.compile(r"^\d+[x×]\d*$")


def build_search_query_fallback(
    title: str | None,
    stop_words: Collection[str] = STOP_WORDS,
    unit_words: Collection[str] = UNIT_WORDS,
    max_keywords: int = DEFAULT_MAX_KEYWORDS,
) -> str:
    """Keep the first few meaningful words of a title.

    Examples:
        "Amazon Basics 12-Pack AA Batteries, 1.5 Volt" → "amazon basics aa batteries 1.5"
        "The Best Wireless Mouse" → "wireless mouse"
    """
    if not title:
        return ""

    words = [
        w.strip().lower()
        for w in _SEPARATORS.sub(" ", title).split()
    ]
    keywords = [
        w for w in words
        if len(w) > 1
        and w not in stop_words
        and w not in unit_words
        and not _NUMBER.match(w)
        and not _DIMENSION.match(w)
    ]
    return " ".join(keywords[:max_keywords])
