from __future__ import annotations

from typing import Dict, Tuple

from .config import ScoringSettings
from .models import FeatureVector

FACTOR_NAMES: Tuple[str, ...] = (
    "sentence_length",
    "vocabulary",
    "variance",
    "transitions",
    "density",
)


def triggered_factors(features: FeatureVector, settings: ScoringSettings) -> Dict[str, bool]:
    """Evaluate each threshold rule against the feature vector."""
    return {
        "sentence_length": (
            settings.sentence_length_min
            < features.avg_sentence_length
            < settings.sentence_length_max
        ),
        "vocabulary": features.repetition_score < settings.repetition_max,
        "variance": features.sentence_length_variance < settings.variance_max,
        "transitions": features.transition_phrase_count > settings.transition_min,
        "density": (
            features.word_count > settings.density_min_words
            and features.sentence_count < settings.density_max_sentences
        ),
    }


def score_features(
    features: FeatureVector, settings: ScoringSettings | None = None
) -> Tuple[int, Dict[str, int]]:
    """
    Return (score, factors) for a feature vector.
    Empty input scores 0 with every factor at 0; otherwise the score is the
    baseline plus each triggered increment, clamped to [0, 100] and rounded.
    """
    settings = settings or ScoringSettings()
    if features.word_count == 0:
        return 0, {name: 0 for name in FACTOR_NAMES}

    increments = settings.increments()
    triggered = triggered_factors(features, settings)
    factors = {
        name: int(round(increments[name])) if triggered[name] else 0
        for name in FACTOR_NAMES
    }
    raw = settings.baseline + sum(increments[name] for name in FACTOR_NAMES if triggered[name])
    score = int(round(max(0.0, min(100.0, raw))))
    return score, factors
