# Slicer Search Module
# ====================
"""
Search and ranking for slicer value lists.

Components:
- text_normalizer: diacritic stripping, case folding, tokenizing
- edit_distance: Levenshtein and best-window distance (RapidFuzz)
- RankedSearchEngine: exact / prefix / substring / token / acronym / fuzzy cascade
- WildcardMatcher: anchored '*' patterns
- parse_query: quoted phrases, OR-groups and -exclusions
- HierarchicalFilter: prunes a node tree, keeping ancestors of matches
"""

from .models import (
    Node,
    MatchResult,
    MatchType,
    SearchOptions,
    ScoreFloors,
    TOKEN_SCORE_FLOORS,
    FUZZY_SCORE_FLOORS,
    iter_nodes,
    all_names,
    has_selected_descendant,
    search_candidates,
)

from .text_normalizer import (
    normalize_text,
    strip_diacritics,
    tokenize,
    build_search_text,
    split_search_text,
)

from .edit_distance import (
    levenshtein,
    best_substring_distance,
    fuzzy_similarity,
)

from .ranked_search import (
    RankedSearchEngine,
    search,
    get_suggestions,
    highlight_matches,
)

from .wildcard import (
    WildcardMatcher,
    WildcardPattern,
    WildcardMatch,
    wildcard_filter,
)

from .query_parser import (
    ParsedQuery,
    parse_query,
    text_matches_query,
)

from .hierarchical_filter import (
    HierarchicalFilter,
    filter_tree,
)


__all__ = [
    # Models
    "Node",
    "MatchResult",
    "MatchType",
    "SearchOptions",
    "ScoreFloors",
    "TOKEN_SCORE_FLOORS",
    "FUZZY_SCORE_FLOORS",
    "iter_nodes",
    "all_names",
    "has_selected_descendant",
    "search_candidates",

    # Text utilities
    "normalize_text",
    "strip_diacritics",
    "tokenize",
    "build_search_text",
    "split_search_text",
    "levenshtein",
    "best_substring_distance",
    "fuzzy_similarity",

    # Ranked search
    "RankedSearchEngine",
    "search",
    "get_suggestions",
    "highlight_matches",

    # Wildcards
    "WildcardMatcher",
    "WildcardPattern",
    "WildcardMatch",
    "wildcard_filter",

    # Query parsing
    "ParsedQuery",
    "parse_query",
    "text_matches_query",

    # Tree filtering
    "HierarchicalFilter",
    "filter_tree",
]
