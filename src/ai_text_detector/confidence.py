from __future__ import annotations

from typing import Mapping

from .models import FeatureVector
from .textutils import clamp, safe_div


def estimate_confidence(
    features: FeatureVector,
    factors: Mapping[str, int],
    *,
    language_supported: bool = True,
    fallback_factor: float = 0.5,
) -> float:
    """Share of scoring factors that fired, damped when the fallback profile was used."""
    if features.word_count == 0 or not factors:
        return 0.0
    contributing = sum(1 for value in factors.values() if value)
    confidence = safe_div(contributing, len(factors))
    if not language_supported:
        confidence *= fallback_factor
    return clamp(confidence)
