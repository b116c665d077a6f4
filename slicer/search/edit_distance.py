# Slicer Search - Edit Distance
# ==============================
"""
Edit-distance helpers backed by RapidFuzz.

- levenshtein: classic insert/delete/substitute distance
- best_substring_distance: smallest distance of the query against any
  same-length window of the text
- fuzzy_similarity: the 0-1 similarity used by the ranking engine
"""

from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str) -> int:
    """Levenshtein distance between two strings (unit costs)."""
    return Levenshtein.distance(a, b)


def best_substring_distance(text: str, query: str) -> int:
    """
    Minimum edit distance between query and every len(query) window of text.

    When the text is shorter than the query there is no window, and the
    full query length is returned.
    """
    width = len(query)
    if width == 0:
        return 0

    best = None
    for start in range(len(text) - width + 1):
        distance = Levenshtein.distance(text[start:start + width], query)
        if best is None or distance < best:
            best = distance
            if best == 0:
                break

    return width if best is None else best


def fuzzy_similarity(text: str, query: str) -> float:
    """
    Similarity between text and query in [0, 1].

    Takes the better of whole-string similarity and best-window similarity,
    so a typo inside a long label still scores well.
    """
    max_length = max(len(text), len(query))
    if max_length == 0:
        return 1.0

    similarity = 1 - levenshtein(text, query) / max_length

    if not query:
        return similarity

    substring_score = 1 - best_substring_distance(text, query) / len(query)
    return max(similarity, substring_score)
