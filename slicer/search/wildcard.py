# Slicer Search - Wildcard Matcher
# =================================
"""
Wildcard pattern matching with '*' as a multi-character placeholder.

"SA*" matches "SA123" but not "XSA1"; "*45" matches "A45" but not "45A";
"A*B*C" matches text starting with A, ending with C, with B in between.
Tight, short, anchored matches score highest.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .text_normalizer import normalize_text

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class WildcardPattern:
    """A parsed wildcard pattern."""
    tokens: Tuple[str, ...]
    has_leading_wildcard: bool
    has_trailing_wildcard: bool
    case_sensitive: bool = False

    @classmethod
    def parse(cls, pattern: str, case_sensitive: bool = False) -> "WildcardPattern":
        normalized = normalize_text(pattern.strip(), case_sensitive)
        tokens = tuple(t.strip() for t in normalized.split(WILDCARD) if t.strip())
        return cls(
            tokens=tokens,
            has_leading_wildcard=normalized.startswith(WILDCARD),
            has_trailing_wildcard=normalized.endswith(WILDCARD),
            case_sensitive=case_sensitive,
        )


@dataclass(frozen=True)
class WildcardMatch:
    """A candidate that satisfied a wildcard pattern."""
    text: str
    score: float


class WildcardMatcher:
    """
    Anchored, ordered wildcard matching.

    Scoring:
    - anchored start: +5 (with a leading wildcard: 2 - 0.05 x first index)
    - anchored end: +3
    - each gap between consecutive tokens: -0.02 per character
    - candidate length: -0.005 per character
    """

    ANCHORED_START_SCORE = 5.0
    FLOATING_START_SCORE = 2.0
    FLOATING_START_PENALTY = 0.05
    ANCHORED_END_SCORE = 3.0
    GAP_PENALTY = 0.02
    LENGTH_PENALTY = 0.005

    def __init__(self, pattern: str, case_sensitive: bool = False):
        self.pattern = WildcardPattern.parse(pattern, case_sensitive)

    def score(self, text: str) -> Optional[float]:
        """
        Score a candidate against the pattern.

        Returns:
            The score, or None when the candidate does not match
        """
        pattern = self.pattern
        if not pattern.tokens:
            return 0.0

        source = normalize_text(text, pattern.case_sensitive)
        positions = self._locate(source)
        if positions is None:
            return None

        tokens = pattern.tokens
        score = 0.0

        if pattern.has_leading_wildcard:
            score += self.FLOATING_START_SCORE - positions[0] * self.FLOATING_START_PENALTY
        else:
            score += self.ANCHORED_START_SCORE

        if not pattern.has_trailing_wildcard:
            score += self.ANCHORED_END_SCORE

        for i in range(1, len(positions)):
            gap = positions[i] - (positions[i - 1] + len(tokens[i - 1]))
            score -= gap * self.GAP_PENALTY

        score -= len(source) * self.LENGTH_PENALTY
        return score

    def _locate(self, source: str) -> Optional[List[int]]:
        """Start positions of each token, or None if the pattern fails."""
        pattern = self.pattern
        tokens = pattern.tokens
        positions: List[int] = []
        cursor = 0

        for i, token in enumerate(tokens):
            is_first = i == 0
            is_last = i == len(tokens) - 1

            if is_first and not pattern.has_leading_wildcard:
                index = 0 if source.startswith(token) else -1
            else:
                index = source.find(token, cursor)

            if index == -1:
                return None

            if is_last and not pattern.has_trailing_wildcard:
                # Last token must sit at the very end
                end_index = len(source) - len(token)
                if not source.endswith(token) or end_index < cursor:
                    return None
                if is_first and not pattern.has_leading_wildcard and end_index != 0:
                    return None
                index = end_index

            positions.append(index)
            cursor = index + len(token)

        return positions

    def matches(self, text: str) -> bool:
        return self.score(text) is not None

    def filter(self, candidates: Sequence[str]) -> List[WildcardMatch]:
        """
        Matching candidates ranked by score, ties kept in input order.
        """
        matched = []
        for candidate in candidates:
            if not isinstance(candidate, str):
                continue
            score = self.score(candidate)
            if score is not None:
                matched.append(WildcardMatch(text=candidate, score=score))

        matched.sort(key=lambda m: -m.score)
        return matched


def wildcard_filter(candidates: Sequence[str],
                    pattern: str,
                    case_sensitive: bool = False) -> List[WildcardMatch]:
    """Match and rank candidates against a wildcard pattern."""
    return WildcardMatcher(pattern, case_sensitive).filter(candidates)
