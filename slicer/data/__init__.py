# Slicer Data Module
# ==================
"""
Data adapter for the filter panel.

This module provides:
- FieldDescriptor: identifies a "table.column" source field
- TableSource: reads CSV, Parquet and DuckDB tables into qualified DataFrames
- DataSnapshot: source table plus the original view of every field
- Node builders: flat leaf lists and hierarchies from tables or mappings
"""

from .models import (
    FieldKind,
    FieldDescriptor,
    CategoryView,
    NumericView,
    DateView,
    parse_query_name,
)
from .table_source import TableSource, TableSourceError, DataFormat, qualify_columns
from .snapshot import (
    DataSnapshot,
    EMPTY_NUMERIC_RANGE,
    as_field,
    distinct_values,
    numeric_bounds,
    date_bounds,
)
from .node_builder import leaf_nodes_from_column, tree_from_levels, tree_from_mapping

__all__ = [
    # Models
    'FieldKind',
    'FieldDescriptor',
    'CategoryView',
    'NumericView',
    'DateView',
    'parse_query_name',
    # Table source
    'TableSource',
    'TableSourceError',
    'DataFormat',
    'qualify_columns',
    # Snapshot
    'DataSnapshot',
    'EMPTY_NUMERIC_RANGE',
    'as_field',
    'distinct_values',
    'numeric_bounds',
    'date_bounds',
    # Node builders
    'leaf_nodes_from_column',
    'tree_from_levels',
    'tree_from_mapping',
]
