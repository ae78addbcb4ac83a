"""Small text helpers for generated story content."""

import math
import re

WORDS_PER_MINUTE = 150

_MISSING_SPACE_AFTER = re.compile(r"([.!?])([A-Z])")
_SPACE_BEFORE = re.compile(r"[ \t]+([.,!?])")


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def estimate_reading_time(word_count: int) -> int:
    """Minutes needed to read a story aloud, rounded up."""
    return math.ceil(word_count / WORDS_PER_MINUTE)


def normalize_punctuation_spacing(text: str) -> str:
    """Put a space after sentence-ending punctuation and none before punctuation."""
    text = _MISSING_SPACE_AFTER.sub(r"\1 \2", text)
    return _SPACE_BEFORE.sub(r"\1", text)
