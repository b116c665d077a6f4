"""
Pytest fixtures for cross-filter tests.
"""

import sys
import pytest
import pandas as pd
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from slicer.data import DataSnapshot
from slicer.crossfilter import CrossFilterEngine, FilterStateStore


@pytest.fixture
def table():
    """Five rows over three category fields, a number and a date."""
    return pd.DataFrame({
        'T.X': ['A', 'B', 'C', 'C', 'A'],
        'T.Y': ['y1', 'y1', 'y2', 'y2', 'y3'],
        'T.Z': ['p', 'q', 'r', 's', 'p'],
        'T.Amount': [1.0, 2.0, 3.0, 4.0, 5.0],
        'T.Date': pd.to_datetime([
            '2024-01-01', '2024-01-02', '2024-01-03', '2024-01-04', '2024-01-05',
        ]),
    })


@pytest.fixture
def snapshot(table):
    """Snapshot with X / Y / Z categories, Amount and Date."""
    return DataSnapshot.from_table(
        table,
        category_fields=['T.X', 'T.Y', 'T.Z'],
        numeric_fields=['T.Amount'],
        date_fields=['T.Date'],
    )


@pytest.fixture
def engine(snapshot):
    """Cross-filter engine over the snapshot."""
    return CrossFilterEngine(snapshot)


@pytest.fixture
def store():
    """Instant-mode filter state store."""
    return FilterStateStore()
