"""Name normalisation helpers for registry items."""

from __future__ import annotations

import re
from typing import List

# Runs of Unicode letters and digits; underscores and punctuation separate words.
_CHUNK_RE = re.compile(r"[^\W_]+")
# camelCase and acronym boundaries inside a chunk: useDebounce, HTMLParser.
_CASE_BOUNDARY_RE = re.compile(r"(?<=[^\W_])(?<![A-Z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][^\W\dA-Z_])")
_TITLE_SPLIT_RE = re.compile(r"[-_]")


def split_words(value: str) -> List[str]:
    """Split camelCase, PascalCase, snake_case and dashed strings into words."""
    words: List[str] = []
    for chunk in _CHUNK_RE.findall(value):
        words.extend(part for part in _CASE_BOUNDARY_RE.split(chunk) if part)
    return words


def to_kebab_case(value: str) -> str:
    """Return the canonical dash-separated lower-case form of ``value``.

    Non-ASCII letters are kept (``café`` stays ``café``); a value with no
    letters or digits at all yields an empty string.
    """
    return "-".join(word.lower() for word in split_words(value))


def to_title(value: str) -> str:
    """Capitalise each dash/underscore separated word: ``use-debounce`` -> ``Use Debounce``."""
    return " ".join(word[:1].upper() + word[1:] for word in _TITLE_SPLIT_RE.split(value))


__all__ = ["split_words", "to_kebab_case", "to_title"]
