from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from .errors import ConfigError

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(slots=True)
class ScoringSettings:
    """Baseline, thresholds and increments used by the probability scorer."""

    baseline: float = 20.0
    sentence_length_min: float = 8.0
    sentence_length_max: float = 16.0
    sentence_length_increment: float = 25.0
    repetition_max: float = 0.3
    repetition_increment: float = 20.0
    variance_max: float = 15.0
    variance_increment: float = 20.0
    transition_min: int = 1
    transition_increment: float = 20.0
    density_min_words: int = 100
    density_max_sentences: int = 15
    density_increment: float = 15.0

    def increments(self) -> dict[str, float]:
        return {
            "sentence_length": self.sentence_length_increment,
            "vocabulary": self.repetition_increment,
            "variance": self.variance_increment,
            "transitions": self.transition_increment,
            "density": self.density_increment,
        }


@dataclass(slots=True)
class DetectorConfig:
    """Configuration options for the detection engine and CLI."""

    default_language: str | None = None
    highlight_threshold: float = 60.0
    fallback_confidence_factor: float = 0.5
    repeating_word_min_count: int = 3
    log_level: str = "WARNING"
    scoring: ScoringSettings = field(default_factory=ScoringSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: DetectorConfig) -> DetectorConfig:
    """Raise ConfigError when values would break score bounds or monotonicity."""
    if not isinstance(config.scoring, ScoringSettings):
        raise ConfigError("'scoring' must be a mapping.")
    for item in fields(ScoringSettings):
        value = getattr(config.scoring, item.name)
        if not _is_number(value):
            raise ConfigError(f"scoring.{item.name} must be a number, got {value!r}")
    for name in ("highlight_threshold", "fallback_confidence_factor", "repeating_word_min_count"):
        value = getattr(config, name)
        if not _is_number(value):
            raise ConfigError(f"{name} must be a number, got {value!r}")
    if config.default_language is not None and not isinstance(config.default_language, str):
        raise ConfigError("default_language must be a string or null.")
    if not isinstance(config.log_level, str):
        raise ConfigError(f"log_level must be a string, got {config.log_level!r}")
    if config.scoring.sentence_length_min > config.scoring.sentence_length_max:
        raise ConfigError("scoring.sentence_length_min must not exceed sentence_length_max.")
    for name, increment in config.scoring.increments().items():
        if increment < 0:
            raise ConfigError(f"Increment for {name!r} must be >= 0, got {increment}")
    if config.scoring.baseline < 0:
        raise ConfigError("Scoring baseline must be >= 0.")
    if not 0.0 <= config.highlight_threshold <= 100.0:
        raise ConfigError("highlight_threshold must be within [0, 100].")
    if not 0.0 <= config.fallback_confidence_factor <= 1.0:
        raise ConfigError("fallback_confidence_factor must be within [0, 1].")
    if config.repeating_word_min_count < 1:
        raise ConfigError("repeating_word_min_count must be >= 1.")
    if config.log_level.upper() not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level {config.log_level!r}.")
    return config


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(DetectorConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "scoring" in data:
        scoring_value = data["scoring"]
        if isinstance(scoring_value, ScoringSettings):
            kwargs["scoring"] = scoring_value
        elif isinstance(scoring_value, Mapping):
            kwargs["scoring"] = _build_scoring_settings(scoring_value)
        else:
            raise ConfigError("'scoring' must be a mapping.")
    return kwargs


def _build_scoring_settings(data: Mapping[str, Any]) -> ScoringSettings:
    scoring_allowed = {field.name for field in fields(ScoringSettings)}
    filtered = {key: data[key] for key in data if key in scoring_allowed}
    return ScoringSettings(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> DetectorConfig:
    """Build a DetectorConfig from a dictionary-like input."""
    if data is None:
        return DetectorConfig()
    return validate_config(DetectorConfig(**_build_kwargs(data)))


def config_from_yaml(path: str | Path) -> DetectorConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(contents) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse configuration {path}: {exc}") from exc
    if not isinstance(parsed, MutableMapping):
        raise ConfigError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> DetectorConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return DetectorConfig()
    return config_from_yaml(path)


def configure_logging(config: DetectorConfig) -> None:
    """Install a basic root handler at the configured level (CLI use only)."""
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
