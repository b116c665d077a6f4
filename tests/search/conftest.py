"""
Pytest fixtures for search tests.
"""

import sys
import pytest
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from slicer.search import Node, RankedSearchEngine, HierarchicalFilter


@pytest.fixture
def engine():
    """Ranked search engine with default options."""
    return RankedSearchEngine()


@pytest.fixture
def tree_filter():
    """Hierarchical filter with default options."""
    return HierarchicalFilter()


@pytest.fixture
def fruit_tree():
    """Fruit > Apple, Banana."""
    return [Node("Fruit", children=[Node("Apple"), Node("Banana")])]


@pytest.fixture
def geo_tree():
    """Region > Country > City."""
    return [
        Node("Europe", children=[
            Node("France", children=[Node("Paris"), Node("Lyon")]),
        ]),
        Node("Asia", children=[
            Node("Japan", children=[Node("Tokyo")]),
        ]),
    ]


@pytest.fixture
def animal_nodes():
    """Flat list used by the query syntax tests."""
    return [Node("category"), Node("dogma"), Node("fish")]
