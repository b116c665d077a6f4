# Slicer Search - Query Parser
# =============================
"""
Parses free-text slicer queries.

Syntax:
- words are AND-ed:              red apple
- "quoted phrases" stay whole:   "new york"
- OR separates AND-groups:       cat OR dog
- -word excludes:                cat -dog
- * marks a wildcard pattern:    SA*
"""

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from .text_normalizer import normalize_text

# A quoted phrase or a run of non-space characters
_QUERY_PART = re.compile(r'"([^"]+)"|(\S+)')

OR_KEYWORD = "or"
EXCLUDE_PREFIX = "-"


@dataclass
class ParsedQuery:
    """Structured form of a query string."""
    raw: str
    normalized: str
    include_all: List[str] = field(default_factory=list)
    or_groups: List[List[str]] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    has_wildcard: bool = False
    case_sensitive: bool = False

    @property
    def positive_groups(self) -> List[List[str]]:
        """Term groups a text may satisfy: the OR-groups, or the single AND-group."""
        if self.or_groups:
            return self.or_groups
        if self.include_all:
            return [self.include_all]
        return []

    def matches(self, text: str) -> bool:
        """
        Check a text against the query.

        Fails if any excluded term is contained; otherwise passes when one
        OR-group (or the AND-group) has all of its terms contained.
        """
        if not self.raw:
            return True

        normalized_text = normalize_text(text, self.case_sensitive)

        if any(token in normalized_text for token in self.exclude):
            return False

        if self.or_groups:
            return any(all(token in normalized_text for token in group)
                       for group in self.or_groups)

        return all(token in normalized_text for token in self.include_all)


def _scan_parts(raw: str) -> List[Tuple[str, bool]]:
    """Split into (text, is_phrase) parts."""
    parts = []
    for match in _QUERY_PART.finditer(raw):
        phrase, word = match.group(1), match.group(2)
        if phrase:
            parts.append((phrase, True))
        elif word:
            parts.append((word, False))
    return parts


def parse_query(query: str, case_sensitive: bool = False) -> ParsedQuery:
    """
    Parse a query string into AND/OR/NOT term lists.

    Args:
        query: Raw user query
        case_sensitive: Keep casing of terms when True

    Returns:
        ParsedQuery
    """
    raw = (query or "").strip()

    groups: List[List[str]] = []
    current: List[str] = []
    exclude: List[str] = []
    has_or = False

    for text, is_phrase in _scan_parts(raw):
        value = normalize_text(text, case_sensitive)
        if not value:
            continue

        if not is_phrase and value.lower() == OR_KEYWORD:
            has_or = True
            if current:
                groups.append(current)
                current = []
            continue

        if not is_phrase and value.startswith(EXCLUDE_PREFIX):
            term = value[len(EXCLUDE_PREFIX):]
            if term:
                exclude.append(term)
            continue

        current.append(value)

    if current:
        groups.append(current)

    include_all: List[str] = []
    or_groups: List[List[str]] = []

    if has_or and groups:
        or_groups = groups
    elif groups:
        include_all = [token for group in groups for token in group]

    return ParsedQuery(
        raw=raw,
        normalized=normalize_text(raw, case_sensitive),
        include_all=include_all,
        or_groups=or_groups,
        exclude=exclude,
        has_wildcard="*" in raw,
        case_sensitive=case_sensitive,
    )


def text_matches_query(text: str, query: str, case_sensitive: bool = False) -> bool:
    """Parse the query and test a single text against it."""
    return parse_query(query, case_sensitive).matches(text)
