from __future__ import annotations

from .languages import ProfileTable, load_profile_table
from .models import (
    SENTIMENT_NEGATIVE,
    SENTIMENT_NEUTRAL,
    SENTIMENT_POSITIVE,
    SentimentResult,
)
from .textutils import iter_tokens, safe_div


def analyze_sentiment(text: str, table: ProfileTable | None = None) -> SentimentResult:
    """Classify text as positive, negative or neutral from the bundled word lexicon."""
    table = table or load_profile_table()
    tokens = list(iter_tokens(text))
    positive = tuple(token for token in tokens if token in table.positive_words)
    negative = tuple(token for token in tokens if token in table.negative_words)

    if len(positive) > len(negative):
        label = SENTIMENT_POSITIVE
    elif len(negative) > len(positive):
        label = SENTIMENT_NEGATIVE
    else:
        label = SENTIMENT_NEUTRAL

    balance = len(positive) - len(negative)
    return SentimentResult(
        label=label,
        score=safe_div(balance, len(tokens)),
        magnitude=safe_div(abs(balance), len(tokens)),
        positive_words=positive,
        negative_words=negative,
    )
