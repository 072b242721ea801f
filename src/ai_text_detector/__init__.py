"""
ai_text_detector package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import DetectorConfig, ScoringSettings, config_from_dict, config_from_yaml, load_config
from .detector import (
    Detector,
    analyze,
    compare,
    default_detector,
    detect_language,
    highlight,
    render_highlight,
    repeating_words,
)
from .errors import (
    ConfigError,
    DetectorError,
    InvalidInputError,
    ProfileDataError,
    UnsupportedLanguageError,
)
from .languages import Language, get_profile, require_profile, resolve_profile
from .models import (
    ComparisonResult,
    ComplexityMetrics,
    FeatureVector,
    HighlightSegment,
    ReadabilityScores,
    ScoreResult,
    SentimentResult,
    TextSample,
)

__all__ = [
    "DetectorConfig",
    "ScoringSettings",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "Detector",
    "analyze",
    "compare",
    "default_detector",
    "detect_language",
    "highlight",
    "render_highlight",
    "repeating_words",
    "ConfigError",
    "DetectorError",
    "InvalidInputError",
    "ProfileDataError",
    "UnsupportedLanguageError",
    "Language",
    "get_profile",
    "require_profile",
    "resolve_profile",
    "ComparisonResult",
    "ComplexityMetrics",
    "FeatureVector",
    "HighlightSegment",
    "ReadabilityScores",
    "ScoreResult",
    "SentimentResult",
    "TextSample",
]

__version__ = "0.1.0"
