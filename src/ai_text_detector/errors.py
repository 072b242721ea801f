from __future__ import annotations


class DetectorError(Exception):
    """Base error for all ai_text_detector failures."""


class InvalidInputError(DetectorError, TypeError):
    """Raised when a public operation receives a non-string input."""


class UnsupportedLanguageError(DetectorError, LookupError):
    """Raised by strict profile lookups when a language code has no profile."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Language {code!r} is not supported")
        self.code = code


class ConfigError(DetectorError, ValueError):
    """Raised when configuration data is malformed or out of range."""


class ProfileDataError(DetectorError):
    """Raised when the bundled language profile table cannot be parsed."""


def ensure_text(value: object, name: str = "text") -> str:
    """Return value unchanged when it is a str, otherwise raise InvalidInputError."""
    if not isinstance(value, str):
        raise InvalidInputError(
            f"{name} must be a string, got {type(value).__name__}"
        )
    return value
