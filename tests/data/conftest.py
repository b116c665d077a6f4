"""
Pytest fixtures for data adapter tests.
"""

import sys
import pytest
import pandas as pd
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from slicer.data import TableSource


@pytest.fixture
def sales_df():
    """Qualified sales table with one missing region."""
    return pd.DataFrame({
        'Sales.Region': ['East', 'East', 'West', 'West', 'North', None],
        'Sales.Product': ['Apple', 'Banana', 'Apple', 'Cherry', 'Banana', 'Apple'],
        'Sales.Amount': [10.0, 20.0, 30.0, 40.0, 50.0, 60.0],
        'Sales.OrderDate': pd.to_datetime([
            '2024-01-01', '2024-02-01', '2024-03-01',
            '2024-04-01', '2024-05-01', '2024-06-01',
        ]),
    })


@pytest.fixture
def raw_df():
    """Unqualified table as it would sit in a file."""
    return pd.DataFrame({
        'Region': ['East', 'West'],
        'Amount': [10, 20],
    })


@pytest.fixture
def source():
    """Table source instance."""
    return TableSource()
