from __future__ import annotations

import copy
import html
import logging
from functools import lru_cache
from typing import Iterable, List, Tuple

from .confidence import estimate_confidence
from .config import DetectorConfig, validate_config
from .errors import ensure_text
from .features import extract_features
from .languages import (
    LanguageProfile,
    ProfileTable,
    detect_language as detect_profile_language,
    load_profile_table,
    resolve_profile,
)
from .models import ComparisonResult, HighlightSegment, ScoreResult, SentimentResult
from .scoring import FACTOR_NAMES, score_features
from .segmentation import segment, split_sentence_spans
from .sentiment import analyze_sentiment
from .textutils import iter_tokens, repeating_words as count_repeating_words

logger = logging.getLogger(__name__)

HIGHLIGHT_CLASS = "ai-highlight"


class Detector:
    """Runs the segment -> features -> score -> confidence pipeline under one config."""

    def __init__(
        self,
        config: DetectorConfig | None = None,
        table: ProfileTable | None = None,
    ) -> None:
        self._config = validate_config(copy.deepcopy(config or DetectorConfig()))
        self._table = table or load_profile_table()

    @property
    def config(self) -> DetectorConfig:
        """A copy of the active configuration; edits do not affect this detector."""
        return copy.deepcopy(self._config)

    @property
    def table(self) -> ProfileTable:
        return self._table

    def detect_language(self, text: str) -> str:
        """Return the detected language code, ``"unknown"`` when nothing matches."""
        text = ensure_text(text)
        return detect_profile_language(text, self._table).value

    def resolve(self, text: str, language_code: str | None = None) -> Tuple[LanguageProfile, bool]:
        """Pick the profile for text: explicit code, configured default, then detection."""
        code = language_code or self._config.default_language
        if code is None:
            code = detect_profile_language(text, self._table)
        return resolve_profile(code, self._table)

    def analyze(self, text: str, language_code: str | None = None) -> ScoreResult:
        """Score a single text."""
        text = ensure_text(text)
        profile, supported = self.resolve(text, language_code)
        return self._score(text, profile, supported)

    def compare(
        self, text_a: str, text_b: str, language_code: str | None = None
    ) -> ComparisonResult:
        """Analyze both texts independently and measure their vocabulary overlap."""
        text_a = ensure_text(text_a, "text_a")
        text_b = ensure_text(text_b, "text_b")
        first = self.analyze(text_a, language_code)
        second = self.analyze(text_b, language_code)
        similarity, common = jaccard_similarity(iter_tokens(text_a), iter_tokens(text_b))
        logger.debug("Compared texts: similarity %.3f", similarity)
        return ComparisonResult(
            first=first,
            second=second,
            similarity=similarity,
            common_words=common,
        )

    def highlight(self, text: str, language_code: str | None = None) -> List[HighlightSegment]:
        """
        Score every sentence span separately with the profile chosen for the whole
        text. Joining the returned segment texts reproduces the input.
        """
        text = ensure_text(text)
        profile, supported = self.resolve(text, language_code)
        threshold = self._config.highlight_threshold
        segments: List[HighlightSegment] = []
        for span in split_sentence_spans(text):
            result = self._score(span, profile, supported, with_sentiment=False)
            segments.append(
                HighlightSegment(text=span, score=result.score, is_flagged=result.score > threshold)
            )
        logger.debug(
            "Highlighted %d of %d spans above %.1f",
            sum(1 for item in segments if item.is_flagged),
            len(segments),
            threshold,
        )
        return segments

    def repeating_words(self, text: str, min_count: int | None = None) -> List[Tuple[str, int]]:
        """Words appearing at least min_count times (configured default when omitted)."""
        text = ensure_text(text)
        threshold = self._config.repeating_word_min_count if min_count is None else min_count
        return count_repeating_words(segment(text).words, threshold)

    def _score(
        self,
        text: str,
        profile: LanguageProfile,
        supported: bool,
        *,
        with_sentiment: bool = True,
    ) -> ScoreResult:
        sample = segment(text)
        if sample.is_empty:
            return ScoreResult(
                score=0,
                confidence=0.0,
                factors={name: 0 for name in FACTOR_NAMES},
                features=extract_features(sample, profile, self._table),
                language=profile.code,
                language_supported=supported,
            )

        features = extract_features(sample, profile, self._table)
        score, factors = score_features(features, self._config.scoring)
        confidence = estimate_confidence(
            features,
            factors,
            language_supported=supported,
            fallback_factor=self._config.fallback_confidence_factor,
        )
        sentiment = analyze_sentiment(text, self._table) if with_sentiment else SentimentResult()
        result = ScoreResult(
            score=score,
            confidence=confidence,
            factors=factors,
            features=features,
            baseline=int(round(self._config.scoring.baseline)),
            language=profile.code,
            language_supported=supported,
            sentiment=sentiment,
        )
        logger.debug(
            "Scored %d words as %d (confidence %.2f, language %s)",
            features.word_count,
            score,
            confidence,
            profile.code,
        )
        return result


def jaccard_similarity(
    first: Iterable[str], second: Iterable[str]
) -> Tuple[float, Tuple[str, ...]]:
    """Jaccard index of two token streams and their sorted shared vocabulary."""
    left = set(first)
    right = set(second)
    if not left and not right:
        return 1.0, ()
    common = left & right
    return len(common) / len(left | right), tuple(sorted(common))


def render_highlight(segments: Iterable[HighlightSegment]) -> str:
    """Render segments as HTML, wrapping flagged spans in a highlight element."""
    parts: List[str] = []
    for item in segments:
        escaped = html.escape(item.text)
        if item.is_flagged:
            parts.append(
                f'<span class="{HIGHLIGHT_CLASS}" data-score="{item.score}">{escaped}</span>'
            )
        else:
            parts.append(escaped)
    return "".join(parts)


@lru_cache(maxsize=1)
def default_detector() -> Detector:
    return Detector()


def _detector_for(config: DetectorConfig | None) -> Detector:
    return default_detector() if config is None else Detector(config)


def analyze(
    text: str, language_code: str | None = None, *, config: DetectorConfig | None = None
) -> ScoreResult:
    return _detector_for(config).analyze(text, language_code)


def compare(
    text_a: str,
    text_b: str,
    language_code: str | None = None,
    *,
    config: DetectorConfig | None = None,
) -> ComparisonResult:
    return _detector_for(config).compare(text_a, text_b, language_code)


def highlight(
    text: str, language_code: str | None = None, *, config: DetectorConfig | None = None
) -> List[HighlightSegment]:
    return _detector_for(config).highlight(text, language_code)


def detect_language(text: str) -> str:
    return default_detector().detect_language(text)


def repeating_words(
    text: str, min_count: int | None = None, *, config: DetectorConfig | None = None
) -> List[Tuple[str, int]]:
    return _detector_for(config).repeating_words(text, min_count)


__all__ = [
    "Detector",
    "analyze",
    "compare",
    "default_detector",
    "detect_language",
    "highlight",
    "jaccard_similarity",
    "render_highlight",
    "repeating_words",
]
