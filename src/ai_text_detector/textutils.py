from __future__ import annotations

import re
import unicodedata
from collections import Counter
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence, Tuple

TOKEN_RE = re.compile(r"\w+(?:['\-]\w+)*", re.UNICODE)
PUNCTUATION_CHARS = frozenset(".,!?;:")


def normalize_text(value: object) -> str:
    """Normalize arbitrary text so comparisons share identical tokens."""
    if not isinstance(value, str):
        value = str(value)
    normalized = unicodedata.normalize("NFKC", value)
    normalized = normalized.lower()
    normalized = re.sub(r"\s+", " ", normalized)
    return normalized.strip()


def iter_tokens(value: str) -> Iterable[str]:
    """Yield punctuation-free word tokens from normalized text."""
    normalized = normalize_text(value)
    for match in TOKEN_RE.finditer(normalized):
        yield match.group(0)


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, resolving a zero denominator to 0.0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


def count_occurrences(text: str, phrases: Iterable[str]) -> int:
    """Count case-insensitive, non-overlapping substring hits of each phrase."""
    lowered = text.lower()
    return sum(lowered.count(phrase.lower()) for phrase in phrases if phrase)


def word_frequencies(words: Iterable[str]) -> Mapping[str, int]:
    """Return a read-only mapping of case-folded word -> occurrence count."""
    return MappingProxyType(dict(Counter(word.casefold() for word in words)))


def repeating_words(words: Sequence[str], min_count: int = 3) -> List[Tuple[str, int]]:
    """Return (word, count) pairs seen at least min_count times, most frequent first."""
    frequencies = word_frequencies(words)
    repeats = [(word, count) for word, count in frequencies.items() if count >= min_count]
    repeats.sort(key=lambda item: (-item[1], item[0]))
    return repeats
