"""Naive word counting for proposal bodies."""
from __future__ import annotations

import unicodedata


def is_trimmable(char: str) -> bool:
    return unicodedata.category(char)[0] in {"P", "S"}


def trim_token(token: str) -> str:
    start = 0
    end = len(token)
    while start < end and is_trimmable(token[start]):
        start += 1
    while end > start and is_trimmable(token[end - 1]):
        end -= 1
    return token[start:end]


def word_count(text: str) -> int:
    """Count whitespace-separated tokens that are not pure punctuation.

    This is an approximation: markup such as ``**bold**`` or link targets
    counts as words once surrounding punctuation is trimmed.
    """
    return sum(1 for token in text.split() if trim_token(token))
