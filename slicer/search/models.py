# Slicer Search - Models
# =======================
"""
Common dataclasses for the search engines: tree nodes, match results and
search options.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
from enum import Enum

from .text_normalizer import split_search_text


class MatchType(str, Enum):
    """How a candidate matched the query."""
    EXACT = "exact"
    STARTS_WITH = "startsWith"
    CONTAINS = "contains"
    TOKEN_MATCH = "tokenMatch"
    ACRONYM = "acronym"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class MatchResult:
    """A single ranked search hit."""
    text: str               # Original (un-normalized) candidate
    score: float            # 0-1
    match_type: MatchType

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "score": self.score,
            "match_type": self.match_type.value,
        }


@dataclass(frozen=True)
class ScoreFloors:
    """
    Minimum accepted score by query length.

    Short queries must match more precisely, otherwise two letters would
    fuzzy-match half the list.
    """
    tiny: float             # query length <= tiny_length
    short: float            # query length <= short_length
    default: float
    tiny_length: int = 2
    short_length: int = 3

    def for_length(self, length: int) -> float:
        if length <= self.tiny_length:
            return self.tiny
        if length <= self.short_length:
            return self.short
        return self.default


TOKEN_SCORE_FLOORS = ScoreFloors(tiny=0.7, short=0.55, default=0.45)
FUZZY_SCORE_FLOORS = ScoreFloors(tiny=0.85, short=0.7, default=0.5)


@dataclass
class SearchOptions:
    """Options for ranked search and tree filtering."""
    case_sensitive: bool = False

    # 0-1, lower = more strict. A per-token fuzzy match is accepted when its
    # similarity exceeds 1 - fuzzy_threshold.
    fuzzy_threshold: float = 0.3

    # Results below this score are dropped
    min_score: float = 0.3

    max_results: int = 30000

    # Queries of at most this many [A-Za-z0-9_] characters are treated as
    # codes and matched by plain substring on the node name
    code_like_max_length: int = 4

    token_floors: ScoreFloors = TOKEN_SCORE_FLOORS
    fuzzy_floors: ScoreFloors = FUZZY_SCORE_FLOORS


@dataclass(frozen=True)
class Node:
    """
    A node of the slicer tree.

    Nodes are immutable; filtering returns pruned copies. A parent owns its
    children tuple and nodes never point back to their parent.
    """
    name: str
    search_text: Optional[str] = None
    children: Tuple["Node", ...] = ()
    data_index: Optional[int] = None

    def __post_init__(self):
        if self.search_text is None:
            object.__setattr__(self, "search_text", self.name)
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def with_children(self, children: Sequence["Node"]) -> "Node":
        """Copy of this node with a different set of children."""
        return Node(
            name=self.name,
            search_text=self.search_text,
            children=tuple(children),
            data_index=self.data_index,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a nested dictionary."""
        data: Dict[str, Any] = {
            "name": self.name,
            "search_text": self.search_text,
            "children": [child.to_dict() for child in self.children],
        }
        if self.data_index is not None:
            data["data_index"] = self.data_index
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """Build a node (and its subtree) from a nested dictionary.

        Accepts snake_case or camelCase keys (search_text / searchText,
        data_index / dataIndex).
        """
        return cls(
            name=str(data.get("name", "")),
            search_text=data.get("search_text", data.get("searchText")),
            children=tuple(cls.from_dict(child) for child in data.get("children") or []),
            data_index=data.get("data_index", data.get("dataIndex")),
        )


def iter_nodes(nodes: Sequence[Node]) -> Iterator[Node]:
    """Yield every node in pre-order."""
    for node in nodes:
        yield node
        yield from iter_nodes(node.children)


def all_names(nodes: Sequence[Node]) -> List[str]:
    """Names of all nodes in pre-order."""
    return [node.name for node in iter_nodes(nodes)]


def has_selected_descendant(node: Node, selected: Sequence[str]) -> bool:
    """True if the node or any node below it is in the selected names."""
    if node.name in selected:
        return True
    return any(has_selected_descendant(child, selected) for child in node.children)


def search_candidates(node: Node) -> List[str]:
    """Distinct texts a node can be found by: its name plus each search-text part."""
    candidates: List[str] = []
    if node.name:
        candidates.append(node.name)
    for part in split_search_text(node.search_text or ""):
        if part not in candidates:
            candidates.append(part)
    return candidates
