from __future__ import annotations

import logging
import re
import statistics
from typing import List, Sequence

from .languages import (
    ACADEMIC,
    COMPLEX_STRUCTURES,
    CONSISTENT_TONE,
    CONTRACTIONS,
    FORMAL,
    IDIOMS,
    INFORMAL,
    NATURAL,
    SUBORDINATORS,
    TRANSITIONS,
    UNNATURAL,
    LanguageProfile,
    ProfileTable,
    load_profile_table,
)
from .models import ComplexityMetrics, FeatureVector, TextSample
from .readability import readability_for_sample
from .textutils import (
    PUNCTUATION_CHARS,
    clamp,
    count_occurrences,
    iter_tokens,
    safe_div,
    word_frequencies,
)

logger = logging.getLogger(__name__)

_FORMAL_GROUPS = (FORMAL, ACADEMIC)
_INFORMAL_GROUPS = (INFORMAL, CONTRACTIONS)
_LINKING_GROUPS = (TRANSITIONS, FORMAL)
_CLAUSE_BREAK_RE = re.compile(r"\S\s*[,;:]\s*\S")
LONG_WORD_LENGTH = 7


def sentence_lengths(sample: TextSample) -> List[int]:
    return [len(sentence.split()) for sentence in sample.sentences]


def mean_and_variance(values: List[int]) -> tuple[float, float]:
    """Population mean and variance; (0, 0) for an empty list."""
    if not values:
        return 0.0, 0.0
    return statistics.fmean(values), float(statistics.pvariance(values))


def _rate(hits: int, text_length: int, per: int) -> float:
    return safe_div(hits * per, text_length)


def formality_score(text: str, profile: LanguageProfile) -> float:
    """Weighted formal-minus-informal phrase rate per 100 chars, mapped to [0, 1]."""
    length = len(text)
    formal = sum(
        _rate(profile.count(name, text), length, 100) * profile.weight(name)
        for name in _FORMAL_GROUPS
    )
    informal = sum(
        _rate(profile.count(name, text), length, 100) * profile.weight(name)
        for name in _INFORMAL_GROUPS
    )
    return clamp((formal - informal + 1.0) / 2.0)


def idiomatic_usage(text: str, profile: LanguageProfile) -> float:
    return clamp(_rate(profile.count(IDIOMS, text), len(text), 200))


def naturalness_score(text: str, profile: LanguageProfile) -> float:
    """Penalise stock "unnatural" phrasing relative to conversational markers."""
    if not profile.group(NATURAL).phrases and not profile.group(UNNATURAL).phrases:
        return 0.5
    length = len(text)
    natural_rate = _rate(profile.count(NATURAL, text), length, 100)
    unnatural_rate = _rate(profile.count(UNNATURAL, text), length, 100)
    return clamp(1.0 - unnatural_rate / (natural_rate + 1.0))


def lexical_density(tokens: List[str], stop_words: frozenset[str]) -> float:
    content = sum(1 for token in tokens if token not in stop_words)
    return safe_div(content, len(tokens))


def coherence_score(sentences: Sequence[str], profile: LanguageProfile) -> float:
    """
    Mean link strength between adjacent sentences: 0.6 when the later sentence
    contains a linking phrase, plus up to 0.4 for words shared with the
    previous sentence (saturating at three). Fewer than two sentences give 1.
    """
    if len(sentences) < 2:
        return 1.0
    total = 0.0
    for previous, current in zip(sentences, sentences[1:]):
        has_link = any(profile.count(name, current) for name in _LINKING_GROUPS)
        previous_words = set(iter_tokens(previous))
        shared = sum(1 for token in iter_tokens(current) if token in previous_words)
        total += (0.6 if has_link else 0.0) + 0.4 * min(1.0, shared / 3.0)
    return total / (len(sentences) - 1)


def complexity_metrics(
    sample: TextSample, tokens: Sequence[str], profile: LanguageProfile
) -> ComplexityMetrics:
    complex_sentences = sum(
        1 for sentence in sample.sentences if _CLAUSE_BREAK_RE.search(sentence)
    )
    return ComplexityMetrics(
        long_words=sum(1 for token in tokens if len(token) >= LONG_WORD_LENGTH),
        complex_sentences=complex_sentences,
        subordinate_clauses=profile.count(SUBORDINATORS, sample.text),
        complex_structures=profile.count(COMPLEX_STRUCTURES, sample.text),
        tone_markers=profile.count(CONSISTENT_TONE, sample.text),
        sentence_complexity_ratio=safe_div(complex_sentences, len(sample.sentences)),
    )


def extract_features(
    sample: TextSample,
    profile: LanguageProfile,
    table: ProfileTable | None = None,
) -> FeatureVector:
    """Compute the full feature vector for a segmented text."""
    if sample.is_empty:
        return FeatureVector()

    table = table or load_profile_table()
    text = sample.text
    word_count = len(sample.words)
    unique_word_count = len(word_frequencies(sample.words))
    avg_sentence_length, variance = mean_and_variance(sentence_lengths(sample))
    tokens = list(iter_tokens(text))

    features = FeatureVector(
        word_count=word_count,
        sentence_count=len(sample.sentences),
        avg_sentence_length=avg_sentence_length,
        unique_word_count=unique_word_count,
        repetition_score=safe_div(word_count - unique_word_count, word_count),
        sentence_length_variance=variance,
        transition_phrase_count=count_occurrences(text, table.transition_phrases),
        punctuation_ratio=safe_div(
            sum(1 for ch in text if ch in PUNCTUATION_CHARS), len(text)
        ),
        formality_score=formality_score(text, profile),
        idiomatic_usage=idiomatic_usage(text, profile),
        avg_word_length=safe_div(sum(len(token) for token in tokens), len(tokens)),
        lexical_density=lexical_density(tokens, table.stop_words),
        naturalness=naturalness_score(text, profile),
        coherence=coherence_score(sample.sentences, profile),
        complexity=complexity_metrics(sample, tokens, profile),
        readability=readability_for_sample(sample),
    )
    logger.debug(
        "Extracted features for %d words / %d sentences (profile %s)",
        features.word_count,
        features.sentence_count,
        profile.code,
    )
    return features
