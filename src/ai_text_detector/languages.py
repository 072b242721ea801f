"""Language profiles: closed set of supported languages, phrase tables and detection."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Tuple

import yaml

from .errors import ProfileDataError, UnsupportedLanguageError

logger = logging.getLogger(__name__)

_EXPECTED_VERSION = "1.0"

FORMAL = "formal"
ACADEMIC = "academic"
INFORMAL = "informal"
CONTRACTIONS = "contractions"
TRANSITIONS = "transitions"
IDIOMS = "idioms"
NATURAL = "natural"
UNNATURAL = "unnatural"
SUBORDINATORS = "subordinators"
COMPLEX_STRUCTURES = "complex_structures"
CONSISTENT_TONE = "consistent_tone"

GROUP_NAMES = (
    FORMAL,
    ACADEMIC,
    INFORMAL,
    CONTRACTIONS,
    TRANSITIONS,
    IDIOMS,
    NATURAL,
    UNNATURAL,
    SUBORDINATORS,
    COMPLEX_STRUCTURES,
    CONSISTENT_TONE,
)


class Language(str, Enum):
    """Supported language variants; UNKNOWN is the fallback profile."""

    EN = "en"
    ES = "es"
    FR = "fr"
    DE = "de"
    CS = "cs"
    RU = "ru"
    UK = "uk"
    UNKNOWN = "unknown"


DEFAULT_LANGUAGE = Language.UNKNOWN

# Fixed priority used to break detection ties.
DETECTION_PRIORITY: Tuple[Language, ...] = (
    Language.EN,
    Language.ES,
    Language.FR,
    Language.DE,
    Language.CS,
    Language.RU,
    Language.UK,
)

_ALIASES: Dict[str, Language] = {
    "eng": Language.EN,
    "english": Language.EN,
    "esp": Language.ES,
    "spa": Language.ES,
    "spanish": Language.ES,
    "fra": Language.FR,
    "fre": Language.FR,
    "french": Language.FR,
    "deu": Language.DE,
    "ger": Language.DE,
    "german": Language.DE,
    "cze": Language.CS,
    "ces": Language.CS,
    "czech": Language.CS,
    "rus": Language.RU,
    "russian": Language.RU,
    "ukr": Language.UK,
    "ukrainian": Language.UK,
}


@dataclass(frozen=True, slots=True)
class PhraseGroup:
    """A named list of phrases matched as whole words, case-insensitively."""

    name: str
    phrases: Tuple[str, ...]
    weight: float = 0.0
    pattern: re.Pattern[str] | None = field(default=None, compare=False, repr=False)

    def count(self, text: str) -> int:
        if self.pattern is None or not text:
            return 0
        return sum(1 for _ in self.pattern.finditer(text))


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Immutable pattern/weight record for one language."""

    language: Language
    name: str
    groups: Mapping[str, PhraseGroup]
    fingerprint: Mapping[str, float]
    is_fallback: bool = False

    @property
    def code(self) -> str:
        return self.language.value

    def group(self, name: str) -> PhraseGroup:
        found = self.groups.get(name)
        if found is None:
            return PhraseGroup(name=name, phrases=())
        return found

    def count(self, name: str, text: str) -> int:
        return self.group(name).count(text)

    def weight(self, name: str) -> float:
        return self.group(name).weight


@dataclass(frozen=True, slots=True)
class ProfileTable:
    """All profiles plus the language-independent word lists."""

    profiles: Mapping[Language, LanguageProfile]
    fingerprint_letters: Tuple[str, ...]
    transition_phrases: Tuple[str, ...]
    positive_words: FrozenSet[str]
    negative_words: FrozenSet[str]
    stop_words: FrozenSet[str]

    @property
    def default_profile(self) -> LanguageProfile:
        return self.profiles[DEFAULT_LANGUAGE]

    @property
    def supported_languages(self) -> Tuple[Language, ...]:
        return tuple(lang for lang in DETECTION_PRIORITY if lang in self.profiles)


def compile_phrases(phrases: Tuple[str, ...]) -> re.Pattern[str] | None:
    """Build one case-insensitive whole-word alternation for a phrase list."""
    if not phrases:
        return None
    # Longest first so multi-word phrases win over their prefixes.
    alternatives = sorted({re.escape(p) for p in phrases}, key=len, reverse=True)
    return re.compile(
        r"(?<!\w)(?:" + "|".join(alternatives) + r")(?!\w)",
        re.IGNORECASE | re.UNICODE,
    )


def _default_data_path() -> Path:
    return Path(str(resources.files("ai_text_detector") / "data" / "profiles.yaml"))


def _as_phrase_tuple(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ProfileDataError(f"{where} must be a list of phrases")
    return tuple(str(item) for item in value)


def _build_profile(language: Language, raw: Mapping[str, Any]) -> LanguageProfile:
    raw_groups = raw.get("groups") or {}
    weights = raw.get("weights") or {}
    if not isinstance(raw_groups, Mapping) or not isinstance(weights, Mapping):
        raise ProfileDataError(f"Profile {language.value!r} has malformed groups/weights")

    groups: Dict[str, PhraseGroup] = {}
    for name in GROUP_NAMES:
        phrases = _as_phrase_tuple(raw_groups.get(name), f"{language.value}.{name}")
        groups[name] = PhraseGroup(
            name=name,
            phrases=phrases,
            weight=float(weights.get(name, 0.0)),
            pattern=compile_phrases(phrases),
        )

    fingerprint = {
        str(letter): float(freq) for letter, freq in (raw.get("fingerprint") or {}).items()
    }
    return LanguageProfile(
        language=language,
        name=str(raw.get("name", language.value)),
        groups=MappingProxyType(groups),
        fingerprint=MappingProxyType(fingerprint),
        is_fallback=bool(raw.get("fallback", False)),
    )


def parse_profile_table(data: Mapping[str, Any]) -> ProfileTable:
    """Validate parsed YAML data and turn it into an immutable ProfileTable."""
    version = data.get("version")
    if version != _EXPECTED_VERSION:
        raise ProfileDataError(
            f"Expected profile data version {_EXPECTED_VERSION!r}, got {version!r}"
        )
    raw_profiles = data.get("profiles")
    if not isinstance(raw_profiles, Mapping):
        raise ProfileDataError("Profile data must define a 'profiles' mapping")

    profiles: Dict[Language, LanguageProfile] = {}
    for code, raw in raw_profiles.items():
        try:
            language = Language(str(code))
        except ValueError as exc:
            raise ProfileDataError(f"Unknown language code {code!r} in profile data") from exc
        if not isinstance(raw, Mapping):
            raise ProfileDataError(f"Profile {code!r} must be a mapping")
        profiles[language] = _build_profile(language, raw)

    if DEFAULT_LANGUAGE not in profiles:
        raise ProfileDataError("Profile data must include the 'unknown' fallback profile")

    sentiment = data.get("sentiment") or {}
    return ProfileTable(
        profiles=MappingProxyType(profiles),
        fingerprint_letters=_as_phrase_tuple(data.get("fingerprint_letters"), "fingerprint_letters"),
        transition_phrases=_as_phrase_tuple(data.get("transition_phrases"), "transition_phrases"),
        positive_words=frozenset(
            w.lower() for w in _as_phrase_tuple(sentiment.get("positive"), "sentiment.positive")
        ),
        negative_words=frozenset(
            w.lower() for w in _as_phrase_tuple(sentiment.get("negative"), "sentiment.negative")
        ),
        stop_words=frozenset(
            w.lower() for w in _as_phrase_tuple(data.get("stop_words"), "stop_words")
        ),
    )


def load_profile_table_from_path(path: str | Path) -> ProfileTable:
    """Read and parse a profile table from a YAML file."""
    path = Path(path)
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ProfileDataError(f"Unable to read profile data from {path}: {exc}") from exc
    if not isinstance(parsed, Mapping):
        raise ProfileDataError("Profile data YAML must define a mapping")
    table = parse_profile_table(parsed)
    logger.debug("Loaded %d language profiles from %s", len(table.profiles), path)
    return table


@lru_cache(maxsize=1)
def load_profile_table() -> ProfileTable:
    """Load the bundled profile table once per process."""
    return load_profile_table_from_path(_default_data_path())


def normalize_language_code(code: str | Language | None) -> Language | None:
    """Map a user-supplied code (``en``, ``ENG``, ``en-US``) onto a Language."""
    if code is None:
        return None
    if isinstance(code, Language):
        return code
    cleaned = str(code).strip().lower().replace("_", "-")
    if not cleaned:
        return None
    if cleaned in _ALIASES:
        return _ALIASES[cleaned]
    primary = cleaned.split("-", 1)[0]
    try:
        return Language(primary)
    except ValueError:
        return _ALIASES.get(primary)


def resolve_profile(
    code: str | Language | None, table: ProfileTable | None = None
) -> Tuple[LanguageProfile, bool]:
    """Return (profile, supported); unsupported codes resolve to the fallback profile."""
    table = table or load_profile_table()
    language = normalize_language_code(code)
    profile = table.profiles.get(language) if language is not None else None
    if profile is None or profile.is_fallback:
        if code is not None and language is not DEFAULT_LANGUAGE:
            logger.info("No profile for language %r; using fallback profile", code)
        return table.default_profile, False
    return profile, True


def get_profile(code: str | Language | None, table: ProfileTable | None = None) -> LanguageProfile:
    """Return the profile for code, or the default profile when unsupported."""
    profile, _ = resolve_profile(code, table)
    return profile


def require_profile(code: str | Language, table: ProfileTable | None = None) -> LanguageProfile:
    """Strict lookup raising UnsupportedLanguageError for unsupported codes."""
    profile, supported = resolve_profile(code, table)
    if not supported:
        raise UnsupportedLanguageError(str(code))
    return profile


def letter_frequencies(text: str, letters: Tuple[str, ...]) -> Dict[str, float]:
    """Share of each letter among all alphabetic characters in text."""
    lowered = text.lower()
    total = sum(1 for ch in lowered if ch.isalpha())
    if total == 0:
        return {letter: 0.0 for letter in letters}
    return {letter: lowered.count(letter) / total for letter in letters}


def fingerprint_similarity(
    profile: LanguageProfile, actual: Mapping[str, float], letters: Tuple[str, ...]
) -> float:
    """Average of ``1 - |expected - actual|`` over the fingerprint letters."""
    if not letters:
        return 0.0
    total = sum(
        1.0 - abs(profile.fingerprint.get(letter, 0.0) - actual.get(letter, 0.0))
        for letter in letters
    )
    return total / len(letters)


def detect_language(text: str, table: ProfileTable | None = None) -> Language:
    """Pick the profile whose letter fingerprint best matches text."""
    table = table or load_profile_table()
    if not any(ch.isalpha() for ch in text):
        return DEFAULT_LANGUAGE

    letters = table.fingerprint_letters
    actual = letter_frequencies(text, letters)
    if not any(actual.values()):
        logger.debug("No fingerprint letters in text; language unknown")
        return DEFAULT_LANGUAGE

    best_language = DEFAULT_LANGUAGE
    best_score = float("-inf")
    best_margin = 0.0
    for language in table.supported_languages:
        profile = table.profiles[language]
        score = fingerprint_similarity(profile, actual, letters)
        # Strict comparison keeps the earlier (higher priority) language on ties.
        if score > best_score:
            best_language, best_score = language, score
            # Gain over what a text with none of the letters would get.
            best_margin = score - fingerprint_similarity(profile, {}, letters)
    if best_margin <= 0.0:
        logger.debug("Letter frequencies match no profile; language unknown")
        return DEFAULT_LANGUAGE
    logger.debug("Detected language %s (similarity %.4f)", best_language.value, best_score)
    return best_language
