#!/usr/bin/env python3
"""
text_utils.py: Text normalization and whole-word matching.

Every "does X appear in the task" question in the engine goes through
has_whole_word(), so a keyword such as "api" never matches inside "rapid".
"""

import re
from functools import lru_cache

_NON_WORD_CHARS = re.compile(r"[^\w\s-]")
_WHITESPACE_RUNS = re.compile(r"\s+")

# Enough for every keyword and pattern in a realistic catalog
PATTERN_CACHE_SIZE = 4096


def normalize_task(text: str) -> str:
    """Lowercase, replace punctuation other than hyphens with spaces, collapse whitespace."""
    lowered = text.lower()
    cleaned = _NON_WORD_CHARS.sub(" ", lowered)
    return _WHITESPACE_RUNS.sub(" ", cleaned).strip()


@lru_cache(maxsize=PATTERN_CACHE_SIZE)
def whole_word_pattern(word: str) -> re.Pattern:
    """Compiled word-boundary pattern for a literal word or phrase."""
    return re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)


@lru_cache(maxsize=PATTERN_CACHE_SIZE)
def alternation_pattern(pattern: str) -> re.Pattern:
    """
    Compiled word-boundary pattern for a catalog task pattern.

    Task patterns are regular expressions themselves (usually an alternation
    like ``fix|debug|resolve``), so they are not escaped.
    """
    return re.compile(rf"\b({pattern})\b", re.IGNORECASE)


def has_whole_word(text: str, word: str) -> bool:
    """Return True if word appears in text bounded by word boundaries."""
    if not word:
        return False
    return whole_word_pattern(word).search(text) is not None


def matches_alternation(text: str, pattern: str) -> bool:
    return alternation_pattern(pattern).search(text) is not None
