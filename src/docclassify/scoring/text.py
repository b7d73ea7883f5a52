"""Text matching helpers shared by the signal scorers."""

from __future__ import annotations

import re

from docclassify.types import Complexity

_SENTENCE_END = re.compile(r"[.!?]+")

# Word-count and sentence-length cutoffs for complexity estimation
_SIMPLE_MAX_WORDS = 500
_COMPLEX_MIN_WORDS = 2000
_COMPLEX_SENTENCE_LENGTH = 25
_SIMPLE_SENTENCE_LENGTH = 15


def normalize(value: str) -> str:
    """Lowercase, strip, and turn slug separators into spaces."""
    return value.strip().lower().replace("-", " ").replace("_", " ")


def titles_match(title: str, name: str) -> bool:
    """True when either lowercase title contains the other. Empty never matches."""
    title = title.strip().lower()
    name = name.strip().lower()
    if not title or not name:
        return False
    return name in title or title in name


def find_title(titles: list[str], name: str) -> int | None:
    """Index of the first title matching ``name``, or None."""
    for index, title in enumerate(titles):
        if titles_match(title, name):
            return index
    return None


def contains_word(text: str, phrase: str) -> bool:
    """Whole-word, case-insensitive phrase search."""
    if not phrase:
        return False
    return re.search(rf"\b{re.escape(phrase.lower())}\b", text.lower()) is not None


def words(text: str) -> list[str]:
    return text.split()


def estimate_complexity(text: str) -> Complexity:
    """Guess document complexity from length and average sentence length."""
    word_count = len(words(text))
    sentence_count = len(_SENTENCE_END.findall(text))
    avg_sentence = word_count / sentence_count if sentence_count else 0.0

    if word_count < _SIMPLE_MAX_WORDS:
        return Complexity.SIMPLE
    if word_count > _COMPLEX_MIN_WORDS:
        return Complexity.COMPLEX
    if avg_sentence > _COMPLEX_SENTENCE_LENGTH:
        return Complexity.COMPLEX
    if avg_sentence < _SIMPLE_SENTENCE_LENGTH:
        return Complexity.SIMPLE
    return Complexity.MEDIUM
