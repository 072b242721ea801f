from __future__ import annotations

import re
from typing import List

from .models import TextSample

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
SENTENCE_END_RE = re.compile(r"[.!?]+\s*")


def split_sentences(text: str) -> List[str]:
    """Split text on runs of sentence terminators, dropping empty spans."""
    return [part.strip() for part in SENTENCE_SPLIT_RE.split(text) if part.strip()]


def split_words(text: str) -> List[str]:
    """Split text on whitespace runs, dropping empty tokens."""
    return text.split()


def split_sentence_spans(text: str) -> List[str]:
    """
    Split text into sentence pieces that keep their terminators and trailing
    whitespace, so that ``"".join(split_sentence_spans(text)) == text``.
    """
    spans: List[str] = []
    start = 0
    for match in SENTENCE_END_RE.finditer(text):
        spans.append(text[start : match.end()])
        start = match.end()
    if start < len(text):
        spans.append(text[start:])
    return spans


def segment(text: str) -> TextSample:
    """Build a TextSample for the given text."""
    return TextSample(
        text=text,
        words=tuple(split_words(text)),
        sentences=tuple(split_sentences(text)),
    )
