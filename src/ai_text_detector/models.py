from __future__ import annotations

from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Tuple

SENTIMENT_POSITIVE = "positive"
SENTIMENT_NEGATIVE = "negative"
SENTIMENT_NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class TextSample:
    """Raw input plus its whitespace-split words and terminator-split sentences."""

    text: str
    words: Tuple[str, ...]
    sentences: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.words


@dataclass(frozen=True, slots=True)
class ReadabilityScores:
    """Classic readability indices; all zero when the text has no words."""

    flesch_reading_ease: float = 0.0
    flesch_kincaid_grade: float = 0.0
    gunning_fog: float = 0.0
    smog_index: float = 0.0
    automated_readability_index: float = 0.0
    avg_syllables_per_word: float = 0.0


@dataclass(frozen=True, slots=True)
class ComplexityMetrics:
    """Structural complexity counts; auxiliary, not used by the scorer."""

    long_words: int = 0
    complex_sentences: int = 0
    subordinate_clauses: int = 0
    complex_structures: int = 0
    tone_markers: int = 0
    sentence_complexity_ratio: float = 0.0


@dataclass(frozen=True, slots=True)
class FeatureVector:
    """Named numeric features derived from a TextSample and a LanguageProfile."""

    word_count: int = 0
    sentence_count: int = 0
    avg_sentence_length: float = 0.0
    unique_word_count: int = 0
    repetition_score: float = 0.0
    sentence_length_variance: float = 0.0
    transition_phrase_count: int = 0
    punctuation_ratio: float = 0.0
    formality_score: float = 0.0
    idiomatic_usage: float = 0.0
    avg_word_length: float = 0.0
    lexical_density: float = 0.0
    naturalness: float = 0.0
    coherence: float = 0.0
    complexity: ComplexityMetrics = field(default_factory=ComplexityMetrics)
    readability: ReadabilityScores = field(default_factory=ReadabilityScores)


@dataclass(frozen=True, slots=True)
class SentimentResult:
    """Lexicon-based polarity of a text."""

    label: str = SENTIMENT_NEUTRAL
    score: float = 0.0
    magnitude: float = 0.0
    positive_words: Tuple[str, ...] = ()
    negative_words: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Authorship-likelihood score, confidence and the evidence behind them."""

    score: int
    confidence: float
    factors: Mapping[str, int]
    features: FeatureVector
    baseline: int = 0
    language: str = "unknown"
    language_supported: bool = False
    sentiment: SentimentResult = field(default_factory=SentimentResult)

    def __post_init__(self) -> None:
        # Freeze the factor mapping so the result stays immutable.
        object.__setattr__(self, "factors", MappingProxyType(dict(self.factors)))

    @property
    def word_count(self) -> int:
        return self.features.word_count

    @property
    def sentence_count(self) -> int:
        return self.features.sentence_count

    @property
    def contributing_factors(self) -> Tuple[str, ...]:
        return tuple(name for name, value in self.factors.items() if value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "confidence": self.confidence,
            "baseline": self.baseline,
            "factors": dict(self.factors),
            "language": self.language,
            "language_supported": self.language_supported,
            "features": asdict(self.features),
            "sentiment": asdict(self.sentiment),
        }


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Two independent analyses plus their lexical (Jaccard) similarity."""

    first: ScoreResult
    second: ScoreResult
    similarity: float
    common_words: Tuple[str, ...] = ()

    @property
    def score_difference(self) -> int:
        return self.first.score - self.second.score

    @property
    def confidence_difference(self) -> float:
        return self.first.confidence - self.second.confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "similarity": self.similarity,
            "score_difference": self.score_difference,
            "confidence_difference": self.confidence_difference,
            "common_words": list(self.common_words),
            "first": self.first.to_dict(),
            "second": self.second.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class HighlightSegment:
    """One sentence-sized piece of the original text with its own score."""

    text: str
    score: int
    is_flagged: bool

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "score": self.score, "is_flagged": self.is_flagged}
