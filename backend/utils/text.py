"""Text normalization and keyword extraction for catalog search."""

from __future__ import annotations

import re
import unicodedata

# Short connective words (Portuguese and English) that never count as keywords.
STOP_WORDS = frozenset({"de", "da", "do", "para", "com", "em", "a", "o", "e", "the", "and", "of", "in", "to"})

_COMBINING_MARKS_RE = re.compile(r"[\u0300-\u036f]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Lowercase, strip accents and surrounding whitespace.

    >>> normalize_text("  Maiô Lilás ")
    'maio lilas'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return _COMBINING_MARKS_RE.sub("", decomposed).strip()


def singularize(word: str) -> str:
    """Drop one trailing "s" from words longer than three characters.

    A plural heuristic only: irregular plurals are not handled and words that
    simply end in "s" ("lens") lose it as well.
    """
    if len(word) > 3 and word.endswith("s"):
        return word[:-1]
    return word


def extract_keywords(text: str | None) -> list[str]:
    """Significant, singularized, de-duplicated terms of a query (first-seen order)."""
    norm = normalize_text(text)
    if not norm:
        return []
    keywords: dict[str, None] = {}
    for token in _WHITESPACE_RE.split(norm):
        if len(token) <= 1 or token in STOP_WORDS:
            continue
        keywords.setdefault(singularize(token), None)
    return list(keywords)
