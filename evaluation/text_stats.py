import re
from collections import Counter
from typing import Any, Dict, List, Tuple

from evaluation.constants import (
    MAX_REPETITION_NOTES,
    REPETITION_MIN_COUNT,
    REPETITION_MIN_LENGTH,
)

SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
PARAGRAPH_BOUNDARY = re.compile(r"\n\s*\n+")
NON_WORD_CHARS = re.compile(r"[^a-z\s']")


def normalize_text(text: Any) -> str:
    """Anything that is not a string counts as empty text"""
    return text if isinstance(text, str) else ""


def count_words(text: Any) -> int:
    """Count whitespace-separated tokens"""
    return len(normalize_text(text).split())


def count_sentences(text: Any) -> int:
    """Count segments ending in . ! or ? followed by whitespace"""
    t = normalize_text(text).strip()
    if not t:
        return 0
    return len([s for s in SENTENCE_BOUNDARY.split(t) if s.strip()])


def count_paragraphs(text: Any) -> int:
    """Count blocks separated by one or more blank lines"""
    t = normalize_text(text).strip()
    if not t:
        return 0
    return len([p for p in PARAGRAPH_BOUNDARY.split(t) if p.strip()])


def calculate_text_stats(text: Any) -> Dict[str, int]:
    """Word, sentence and paragraph counts in one pass over the inputs."""
    return {
        "word_count": count_words(text),
        "sentence_count": count_sentences(text),
        "paragraph_count": count_paragraphs(text),
    }


def find_repeated_words(text: Any) -> List[Tuple[str, int]]:
    """
    Find obviously over-used words.

    Only words longer than three letters that appear at least four times
    are reported, most frequent first, capped at five entries.
    """
    cleaned = NON_WORD_CHARS.sub(" ", normalize_text(text).lower())
    words = [w for w in cleaned.split() if len(w) >= REPETITION_MIN_LENGTH]

    repeated = [
        (word, count)
        for word, count in Counter(words).items()
        if count >= REPETITION_MIN_COUNT
    ]
    repeated.sort(key=lambda item: item[1], reverse=True)
    return repeated[:MAX_REPETITION_NOTES]
