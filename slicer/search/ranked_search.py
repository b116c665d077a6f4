# Slicer Search - Ranked Search Engine
# =====================================
"""
Multi-strategy text matching with relevance scoring.

Each candidate is tested against a cascade of strategies and scored by the
first one that fires:

1. Exact        1.0
2. Starts with  0.95 minus length difference, floor 0.8
3. Contains     0.7 minus position, floor 0.5
4. Token match  per-word exact / prefix / substring / fuzzy
5. Acronym      0.6 ("LMA" -> "Laryngeal Mask Airway")
6. Fuzzy        Levenshtein similarity x 0.8
"""

import re
import logging
from typing import Any, List, Optional, Sequence

from .edit_distance import fuzzy_similarity
from .models import MatchResult, MatchType, SearchOptions
from .text_normalizer import normalize_text, split_words, tokenize

logger = logging.getLogger(__name__)


class RankedSearchEngine:
    """
    Scores and ranks candidate strings against a free-text query.

    The engine is stateless between calls: the same candidates and query
    always produce the same ranking.

    Example:
        engine = RankedSearchEngine()
        results = engine.search(["Laryngeal Mask Airway", "Banana"], "LMA")
        results[0].match_type  # MatchType.ACRONYM
    """

    EXACT_SCORE = 1.0
    ACRONYM_SCORE = 0.6
    FUZZY_WEIGHT = 0.8
    ALL_TOKENS_BONUS = 0.2

    def __init__(self, options: Optional[SearchOptions] = None):
        """
        Initialize the engine.

        Args:
            options: Default options for calls that do not pass their own
        """
        self.options = options or SearchOptions()

    def search(self,
               candidates: Sequence[Any],
               query: str,
               options: Optional[SearchOptions] = None) -> List[MatchResult]:
        """
        Rank candidates against a query.

        Args:
            candidates: Strings to score
            query: Free-text query
            options: Overrides the engine defaults for this call

        Returns:
            MatchResults sorted by score descending (stable for ties),
            limited to options.max_results
        """
        opts = options or self.options

        if not query or not query.strip():
            return [MatchResult(text=text, score=self.EXACT_SCORE, match_type=MatchType.EXACT)
                    for text in candidates if isinstance(text, str)]

        normalized_query = normalize_text(query, opts.case_sensitive)
        query_tokens = tokenize(normalized_query)

        results: List[MatchResult] = []
        skipped = 0

        for candidate in candidates:
            if not isinstance(candidate, str):
                skipped += 1
                continue

            try:
                result = self._match_item(candidate, normalized_query, query_tokens, opts)
            except Exception as e:
                logger.debug(f"Skipping candidate {candidate!r}: {e}")
                skipped += 1
                continue

            if result is not None and result.score >= opts.min_score:
                results.append(result)

        if skipped:
            logger.debug(f"Skipped {skipped} candidates while searching for {query!r}")

        results.sort(key=lambda r: -r.score)

        if opts.max_results and len(results) > opts.max_results:
            return results[:opts.max_results]

        return results

    def _match_item(self,
                    candidate: str,
                    query: str,
                    query_tokens: List[str],
                    opts: SearchOptions) -> Optional[MatchResult]:
        """Score one candidate with the first strategy that fires."""
        item = normalize_text(candidate, opts.case_sensitive)
        query_length = len(query)

        if item == query:
            return MatchResult(candidate, self.EXACT_SCORE, MatchType.EXACT)

        if item.startswith(query):
            score = 0.95 - (len(item) - query_length) * 0.01
            return MatchResult(candidate, max(score, 0.8), MatchType.STARTS_WITH)

        position = item.find(query)
        if position > -1:
            score = 0.7 - position * 0.01
            return MatchResult(candidate, max(score, 0.5), MatchType.CONTAINS)

        token_score = self._token_match_score(tokenize(item), query_tokens, opts)
        if token_score > opts.token_floors.for_length(query_length):
            return MatchResult(candidate, token_score, MatchType.TOKEN_MATCH)

        if query_length >= 2 and self._is_acronym_match(item, query):
            return MatchResult(candidate, self.ACRONYM_SCORE, MatchType.ACRONYM)

        fuzzy_score = fuzzy_similarity(item, query)
        if fuzzy_score > opts.fuzzy_floors.for_length(query_length):
            return MatchResult(candidate, fuzzy_score * self.FUZZY_WEIGHT, MatchType.FUZZY)

        return None

    def _token_match_score(self,
                           item_tokens: List[str],
                           query_tokens: List[str],
                           opts: SearchOptions) -> float:
        """
        Average best per-token match of the query against the item words.

        Exact token = 1, prefix = 0.9, substring = 0.7, fuzzy = similarity
        x 0.8. Adds a bonus when every query token matched exactly.
        """
        if not query_tokens or not item_tokens:
            return 0.0

        fuzzy_accept = 1 - opts.fuzzy_threshold
        exact_tokens = 0
        total = 0.0

        for query_token in query_tokens:
            best = 0.0

            for item_token in item_tokens:
                if item_token == query_token:
                    exact_tokens += 1
                    best = 1.0
                    break

                if item_token.startswith(query_token):
                    best = max(best, 0.9)
                elif query_token in item_token:
                    best = max(best, 0.7)

                similarity = fuzzy_similarity(item_token, query_token)
                if similarity > fuzzy_accept:
                    best = max(best, similarity * self.FUZZY_WEIGHT)

            total += best

        score = total / len(query_tokens)
        if exact_tokens == len(query_tokens):
            score += self.ALL_TOKENS_BONUS

        return min(score, 1.0)

    @staticmethod
    def _is_acronym_match(text: str, query: str) -> bool:
        """Query letters line up, in order, with first letters of the words."""
        words = split_words(text)
        if len(words) < len(query):
            return False

        query_index = 0
        for word in words:
            if query_index >= len(query):
                break
            if word[0].lower() == query[query_index].lower():
                query_index += 1

        return query_index == len(query)


# Module-level engine with default options
_default_engine = RankedSearchEngine()


def search(candidates: Sequence[Any],
           query: str,
           options: Optional[SearchOptions] = None) -> List[MatchResult]:
    """Rank candidates with the default engine."""
    return _default_engine.search(candidates, query, options)


def get_suggestions(candidates: Sequence[Any], query: str, limit: int = 5) -> List[str]:
    """Best few candidate texts for a partial query."""
    results = _default_engine.search(
        candidates,
        query,
        SearchOptions(min_score=0.4, max_results=limit),
    )
    return [r.text for r in results]


def highlight_matches(text: str, query: str,
                      open_tag: str = "<mark>", close_tag: str = "</mark>") -> str:
    """
    Wrap the matched part of text in highlight tags.

    The first case-insensitive occurrence of the whole query is wrapped;
    failing that, every occurrence of each query token is.
    """
    if not query:
        return text

    index = text.lower().find(query.lower())
    if index > -1:
        end = index + len(query)
        return f"{text[:index]}{open_tag}{text[index:end]}{close_tag}{text[end:]}"

    tokens = tokenize(query)
    if not tokens:
        return text

    # One pass over all tokens so inserted tags are never re-matched
    pattern = re.compile(
        "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True)),
        re.IGNORECASE,
    )
    return pattern.sub(lambda m: f"{open_tag}{m.group(0)}{close_tag}", text)
