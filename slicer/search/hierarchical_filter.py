# Slicer Search - Hierarchical Filter
# ====================================
"""
Filters a slicer node tree by a search query.

A node survives when it matches itself (it is kept with its whole subtree)
or when something below it matches (it is kept with only the surviving
children). Siblings are ordered by their best self/descendant score.

Strategy selection:
1. Simple mode: query predicate only (AND / OR / -exclude)
2. Wildcard query (contains '*'): WildcardMatcher on the node name
3. Code-like query ("SA", "B12"): strict substring on the node name
4. Otherwise: ranked search on the search text, post-filtered by the
   query predicate
"""

import re
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .models import Node, SearchOptions
from .query_parser import ParsedQuery, parse_query
from .ranked_search import RankedSearchEngine
from .text_normalizer import normalize_text
from .wildcard import WildcardMatcher

logger = logging.getLogger(__name__)

_CODE_LIKE = re.compile(r"^[A-Za-z0-9_]+$")

# Returns the node's own score, or None when the node itself does not match
NodeScorer = Callable[[Node], Optional[float]]


class HierarchicalFilter:
    """
    Prunes a node tree down to the nodes matching a query.

    Example:
        tree = [Node("Fruit", children=[Node("Apple"), Node("Banana")])]
        HierarchicalFilter().filter(tree, "app")
        # [Node("Fruit", children=(Node("Apple"),))]
    """

    def __init__(self,
                 options: Optional[SearchOptions] = None,
                 engine: Optional[RankedSearchEngine] = None):
        self.options = options or SearchOptions()
        self.engine = engine or RankedSearchEngine(self.options)

    def filter(self,
               nodes: Sequence[Node],
               query: str,
               case_sensitive: Optional[bool] = None,
               use_advanced: bool = True) -> List[Node]:
        """
        Filter a tree by a query.

        Args:
            nodes: Top-level nodes
            query: Raw search text
            case_sensitive: Overrides options.case_sensitive when given
            use_advanced: False restricts matching to the query predicate

        Returns:
            Pruned tree. An empty query returns the input as-is; an
            unexpected error also returns the input (and is logged).
        """
        if not nodes:
            return []

        if not query:
            return nodes

        if case_sensitive is None:
            case_sensitive = self.options.case_sensitive

        try:
            parsed = parse_query(query, case_sensitive)

            if not use_advanced:
                scorer = self._predicate_scorer(parsed)
            elif parsed.has_wildcard:
                scorer = self._wildcard_scorer(parsed.raw, case_sensitive)
            elif self.is_code_like(parsed.raw):
                scorer = self._code_scorer(parsed.raw, case_sensitive)
            else:
                scorer = self._ranked_scorer(nodes, parsed, case_sensitive)

            return [node for node, _ in self._prune(nodes, scorer)]
        except Exception:
            logger.exception(f"Error filtering tree for query {query!r}; returning unfiltered data")
            return list(nodes)

    def is_code_like(self, raw_query: str) -> bool:
        """Short alphanumeric queries are matched strictly."""
        return bool(_CODE_LIKE.match(raw_query)) and len(raw_query) <= self.options.code_like_max_length

    def _prune(self, nodes: Sequence[Node], scorer: NodeScorer) -> List[Tuple[Node, float]]:
        """Recursive pruning; returns (node, rank score) sorted best first."""
        kept: List[Tuple[Node, float]] = []

        for node in nodes:
            score = scorer(node)
            if score is not None:
                kept.append((node, score))
            elif node.children:
                children = self._prune(node.children, scorer)
                if children:
                    best_child = max(child_score for _, child_score in children)
                    kept.append((node.with_children([child for child, _ in children]), best_child))

        # sort() is stable, so equal scores keep their original order
        kept.sort(key=lambda entry: -entry[1])
        return kept

    @staticmethod
    def _predicate_scorer(parsed: ParsedQuery) -> NodeScorer:
        def score(node: Node) -> Optional[float]:
            return 1.0 if parsed.matches(node.search_text or node.name) else None
        return score

    @staticmethod
    def _wildcard_scorer(pattern: str, case_sensitive: bool) -> NodeScorer:
        matcher = WildcardMatcher(pattern, case_sensitive)

        def score(node: Node) -> Optional[float]:
            return matcher.score(node.name or "")
        return score

    @staticmethod
    def _code_scorer(code: str, case_sensitive: bool) -> NodeScorer:
        term = normalize_text(code, case_sensitive)

        def score(node: Node) -> Optional[float]:
            return 1.0 if term in normalize_text(node.name or "", case_sensitive) else None
        return score

    def _ranked_scorer(self,
                       nodes: Sequence[Node],
                       parsed: ParsedQuery,
                       case_sensitive: bool) -> NodeScorer:
        """
        Score every search text in the tree once, up front.

        Each positive term group is ranked as its own query so that
        "cat OR dog" scores "dogma" through the "dog" group. Texts that
        fail the query predicate are dropped.
        """
        texts: List[str] = []
        self._collect_texts(nodes, texts)

        options = SearchOptions(
            case_sensitive=case_sensitive,
            fuzzy_threshold=self.options.fuzzy_threshold,
            min_score=self.options.min_score,
            max_results=self.options.max_results,
            code_like_max_length=self.options.code_like_max_length,
            token_floors=self.options.token_floors,
            fuzzy_floors=self.options.fuzzy_floors,
        )

        scores: Dict[str, float] = {}
        groups = parsed.positive_groups

        if not groups:
            # Only exclusions: everything not excluded matches equally
            for text in texts:
                if parsed.matches(text):
                    scores[text] = 1.0
        else:
            for group in groups:
                for result in self.engine.search(texts, " ".join(group), options):
                    if not parsed.matches(result.text):
                        continue
                    if result.score > scores.get(result.text, -1.0):
                        scores[result.text] = result.score

        def score(node: Node) -> Optional[float]:
            return scores.get(node.search_text or node.name)
        return score

    def _collect_texts(self, nodes: Sequence[Node], texts: List[str]) -> None:
        for node in nodes:
            texts.append(node.search_text or node.name)
            if node.children:
                self._collect_texts(node.children, texts)


def filter_tree(nodes: Sequence[Node],
                query: str,
                case_sensitive: bool = False,
                use_advanced: bool = True,
                options: Optional[SearchOptions] = None) -> List[Node]:
    """Filter a node tree with a one-off HierarchicalFilter."""
    return HierarchicalFilter(options).filter(nodes, query, case_sensitive, use_advanced)
