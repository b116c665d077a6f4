# Slicer Data - Node Builder
# ===========================
"""
Turns source tables and nested mappings into slicer Node trees.

- leaf_nodes_from_column: flat list, one leaf per distinct value
- tree_from_levels: hierarchy from several columns (Region > Country > City)
- tree_from_mapping: nested dicts with "value"/"name" and "children"
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from ..search.models import Node
from ..search.text_normalizer import SEARCH_TEXT_SEPARATOR, build_search_text
from .snapshot import distinct_values

logger = logging.getLogger(__name__)


def _label(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _search_text(label: str, extras: Sequence[Any] = ()) -> str:
    parts = [build_search_text(label)]
    for extra in extras:
        if extra is None or (isinstance(extra, float) and np.isnan(extra)):
            continue
        text = _label(extra)
        if text and text != label:
            parts.append(text)
    return SEARCH_TEXT_SEPARATOR.join(parts)


def _first_rows(series: pd.Series) -> Dict[Any, int]:
    """Position of the first row holding each non-missing value."""
    first: Dict[Any, int] = {}
    for position, value in enumerate(series.tolist()):
        if pd.isna(value):
            continue
        first.setdefault(value, position)
    return first


def leaf_nodes_from_column(df: pd.DataFrame,
                           key: str,
                           aux_keys: Sequence[str] = ()) -> List[Node]:
    """
    One leaf per distinct value of a column, in sorted order.

    Each leaf's data_index is the first row holding the value. Values of
    the aux columns on that row are added to the search text, so a product
    can be found by its code as well as its name.

    Args:
        df: Source table
        key: Column for the leaf names
        aux_keys: Extra searchable columns

    Returns:
        List of leaf nodes ([] when the column is missing)
    """
    if df is None or key not in df.columns:
        logger.warning(f"Column {key} not found; no nodes built")
        return []

    present_aux = [k for k in aux_keys if k in df.columns]
    missing_aux = [k for k in aux_keys if k not in df.columns]
    if missing_aux:
        logger.warning(f"Ignoring missing search columns: {', '.join(missing_aux)}")

    first = _first_rows(df[key])
    nodes = []
    for value in distinct_values(df[key]):
        row = first.get(value)
        extras = [df[k].iloc[row] for k in present_aux] if row is not None else []
        label = _label(value)
        nodes.append(Node(
            name=label,
            search_text=_search_text(label, extras),
            data_index=row,
        ))

    logger.debug(f"Built {len(nodes)} leaf nodes from {key}")
    return nodes


def tree_from_levels(df: pd.DataFrame, level_keys: Sequence[str]) -> List[Node]:
    """
    Build a hierarchy from several columns, outermost level first.

    Rows with a missing value at some level stop at the level above.
    Siblings are sorted by value; leaves carry the first matching row.
    """
    if df is None or not level_keys:
        return []

    missing = [k for k in level_keys if k not in df.columns]
    if missing:
        logger.warning(f"Columns not found: {', '.join(missing)}; no tree built")
        return []

    frame = df[list(level_keys)].reset_index(drop=True)
    return _build_level(frame, list(level_keys), np.arange(len(frame)))


def _build_level(frame: pd.DataFrame, level_keys: List[str], rows: np.ndarray) -> List[Node]:
    key, rest = level_keys[0], level_keys[1:]
    column = frame[key].iloc[rows]

    nodes = []
    for value in distinct_values(column):
        matching = rows[(column == value).to_numpy()]
        children = _build_level(frame, rest, matching) if rest else []
        label = _label(value)
        nodes.append(Node(
            name=label,
            search_text=build_search_text(label),
            children=children,
            data_index=None if children else int(matching[0]),
        ))
    return nodes


def tree_from_mapping(mapping: Any) -> List[Node]:
    """
    Build nodes from nested mappings.

    Accepts a single mapping or a list of them. Each mapping names its node
    with "value" (or "name"), and may carry "children", "search_text" and
    "data_index".

    Example:
        tree_from_mapping([
            {"value": "Fruit", "children": [{"value": "Apple"}, {"value": "Banana"}]},
        ])
    """
    if mapping is None:
        return []
    if isinstance(mapping, Mapping):
        mapping = [mapping]

    nodes = []
    for item in mapping:
        node = _node_from_mapping(item)
        if node is not None:
            nodes.append(node)
    return nodes


def _node_from_mapping(item: Any) -> Optional[Node]:
    if not isinstance(item, Mapping):
        logger.debug(f"Skipping non-mapping tree item: {item!r}")
        return None

    value = item.get("value", item.get("name"))
    if value is None:
        return None

    label = _label(value)
    return Node(
        name=label,
        search_text=item.get("search_text") or build_search_text(label),
        children=tree_from_mapping(item.get("children") or []),
        data_index=item.get("data_index"),
    )
