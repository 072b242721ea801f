"""Readability indices (Flesch, Flesch-Kincaid, Gunning fog, SMOG, ARI)."""

from __future__ import annotations

import math
import re
from typing import Sequence

from .models import ReadabilityScores, TextSample
from .textutils import iter_tokens

_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y_RE = re.compile(r"^y")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")
_COMPLEX_WORD_SYLLABLES = 3


def count_syllables(word: str) -> int:
    """Estimate the syllable count of a single word (minimum 1)."""
    word = word.lower()
    if len(word) <= 3:
        return 1
    word = _SILENT_SUFFIX_RE.sub("", word)
    word = _LEADING_Y_RE.sub("", word)
    groups = _VOWEL_GROUP_RE.findall(word)
    return len(groups) or 1


def compute_readability(tokens: Sequence[str], sentence_count: int) -> ReadabilityScores:
    """Compute readability indices from word tokens and a sentence count."""
    word_count = len(tokens)
    if word_count == 0 or sentence_count == 0:
        return ReadabilityScores()

    syllables = [count_syllables(token) for token in tokens]
    total_syllables = sum(syllables)
    complex_words = sum(1 for count in syllables if count >= _COMPLEX_WORD_SYLLABLES)
    characters = sum(len(token) for token in tokens)

    words_per_sentence = word_count / sentence_count
    syllables_per_word = total_syllables / word_count

    return ReadabilityScores(
        flesch_reading_ease=206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word,
        flesch_kincaid_grade=0.39 * words_per_sentence + 11.8 * syllables_per_word - 15.59,
        gunning_fog=0.4 * (words_per_sentence + 100.0 * complex_words / word_count),
        smog_index=1.043 * math.sqrt(complex_words * 30.0 / sentence_count) + 3.1291,
        automated_readability_index=(
            4.71 * characters / word_count + 0.5 * words_per_sentence - 21.43
        ),
        avg_syllables_per_word=syllables_per_word,
    )


def readability_for_sample(sample: TextSample) -> ReadabilityScores:
    tokens = list(iter_tokens(sample.text))
    return compute_readability(tokens, len(sample.sentences))
