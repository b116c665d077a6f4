# Slicer Search - Text Normalizer
# ================================
"""
Text normalization shared by the search engines.

Strips diacritics (NFD decomposition, combining marks removed), optionally
lower-cases, and splits text into word tokens.
"""

import re
import unicodedata
from typing import List

# Combining diacritical marks block (U+0300 - U+036F)
_COMBINING_MARKS = re.compile("[\u0300-\u036f]")

# Anything that is neither a word character nor whitespace
_NON_WORD = re.compile(r"[^\w\s]")

_WHITESPACE = re.compile(r"\s+")

# Separator between the display name and extra searchable text
SEARCH_TEXT_SEPARATOR = "|"


def strip_diacritics(text: str) -> str:
    """Remove accents: "Café" -> "Cafe"."""
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", text))


def normalize_text(text: str, case_sensitive: bool = False) -> str:
    """
    Normalize text for searching.

    Args:
        text: Raw text
        case_sensitive: Keep original casing when True

    Returns:
        Text without diacritics, lower-cased unless case_sensitive
    """
    stripped = strip_diacritics(text)
    return stripped if case_sensitive else stripped.lower()


def tokenize(text: str) -> List[str]:
    """
    Split text into word tokens.

    Punctuation is treated as a separator, so "mask-airway (LMA)" yields
    ["mask", "airway", "LMA"]. Casing is left to the caller.
    """
    cleaned = _NON_WORD.sub(" ", text)
    return [token for token in _WHITESPACE.split(cleaned) if token]


def split_words(text: str) -> List[str]:
    """Split on whitespace only (punctuation stays attached)."""
    return [word for word in _WHITESPACE.split(text) if word]


def build_search_text(name: str) -> str:
    """
    Build the search text for a display name.

    Appends the normalized form when it differs, so accented names are
    found by unaccented queries: "Crème" -> "Crème|creme".
    """
    normalized = normalize_text(name, case_sensitive=False)
    if normalized and normalized != name:
        return f"{name}{SEARCH_TEXT_SEPARATOR}{normalized}"
    return name


def split_search_text(search_text: str) -> List[str]:
    """Split a combined search text into its non-empty parts."""
    parts = [part.strip() for part in search_text.split(SEARCH_TEXT_SEPARATOR)]
    return [part for part in parts if part]
