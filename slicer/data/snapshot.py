# Slicer Data - Snapshot
# =======================
"""
The unfiltered picture of the source table.

A DataSnapshot holds the table plus the original view of every field
(distinct category values, numeric min/max, date min/max). Cross-filtering
derives constrained views from it but never modifies it, so switching
cross-filtering off can always fall back to the originals.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .models import CategoryView, DateView, FieldDescriptor, FieldKind, NumericView

logger = logging.getLogger(__name__)

FieldLike = Union[FieldDescriptor, str]

# Range reported for a numeric field with no numeric values at all
EMPTY_NUMERIC_RANGE = (0, 100)


def as_field(field: FieldLike) -> FieldDescriptor:
    """Accept a FieldDescriptor or a "table.column" query name."""
    if isinstance(field, FieldDescriptor):
        return field
    return FieldDescriptor.from_query_name(field)


def _to_python(value: Any) -> Any:
    """Unwrap numpy / pandas scalars."""
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        return value.item()
    return value


def distinct_values(series: pd.Series) -> List[Any]:
    """Sorted distinct non-missing values."""
    values = [_to_python(v) for v in series.dropna().unique()]
    try:
        return sorted(values)
    except TypeError:
        # Mixed types: order by type name, then text
        return sorted(values, key=lambda v: (type(v).__name__, str(v)))


def numeric_bounds(series: pd.Series) -> Optional[Tuple[Any, Any]]:
    """(min, max) of the numeric values, or None when there are none."""
    if pd.api.types.is_bool_dtype(series):
        return None
    numbers = pd.to_numeric(series, errors="coerce").dropna()
    if numbers.empty:
        return None
    return _to_python(numbers.min()), _to_python(numbers.max())


def date_bounds(series: pd.Series) -> Optional[Tuple[datetime, datetime]]:
    """(min, max) of the parseable dates, or None when there are none."""
    dates = pd.to_datetime(series, errors="coerce").dropna()
    if dates.empty:
        return None
    return _to_python(dates.min()), _to_python(dates.max())


class DataSnapshot:
    """
    Source table plus the original (unconstrained) view of each field.

    Example:
        snapshot = DataSnapshot.from_table(
            df,
            category_fields=["Sales.Region", "Sales.Product"],
            numeric_fields=["Sales.Amount"],
            date_fields=["Sales.OrderDate"],
        )
        snapshot.category_view("Sales.Region").values  # ['East', 'West']
    """

    def __init__(self,
                 table: Optional[pd.DataFrame],
                 category_views: Sequence[CategoryView] = (),
                 numeric_views: Sequence[NumericView] = (),
                 date_views: Sequence[DateView] = (),
                 measure_fields: Sequence[FieldDescriptor] = ()):
        self.table = table
        self.category_views: Tuple[CategoryView, ...] = tuple(category_views)
        self.numeric_views: Tuple[NumericView, ...] = tuple(numeric_views)
        self.date_views: Tuple[DateView, ...] = tuple(date_views)
        self.measure_fields: Tuple[FieldDescriptor, ...] = tuple(measure_fields)

    @classmethod
    def from_table(cls,
                   table: Optional[pd.DataFrame],
                   category_fields: Iterable[FieldLike] = (),
                   numeric_fields: Iterable[FieldLike] = (),
                   date_fields: Iterable[FieldLike] = (),
                   measure_fields: Iterable[FieldLike] = ()) -> "DataSnapshot":
        """
        Build original views from a table whose columns are named "table.column".

        Fields whose column is missing get an empty view (no values, 0-100
        numeric range, "now" date range) rather than an error.
        """
        category_views = []
        for field in map(as_field, category_fields):
            series = cls._series(table, field.key)
            values = distinct_values(series) if series is not None else []
            category_views.append(CategoryView(field=field, values=values))

        numeric_views = []
        for field in map(as_field, numeric_fields):
            series = cls._series(table, field.key)
            bounds = numeric_bounds(series) if series is not None else None
            low, high = bounds if bounds is not None else EMPTY_NUMERIC_RANGE
            numeric_views.append(NumericView(field=field, min=low, max=high))

        date_views = []
        for field in map(as_field, date_fields):
            series = cls._series(table, field.key)
            bounds = date_bounds(series) if series is not None else None
            if bounds is None:
                now = datetime.now()
                bounds = (now, now)
            date_views.append(DateView(field=field, min_date=bounds[0], max_date=bounds[1]))

        snapshot = cls(
            table=table,
            category_views=category_views,
            numeric_views=numeric_views,
            date_views=date_views,
            measure_fields=[as_field(f) for f in measure_fields],
        )

        logger.info(
            f"Built snapshot over {snapshot.row_count} rows: {len(category_views)} category, "
            f"{len(numeric_views)} numeric, {len(date_views)} date fields"
        )
        return snapshot

    @staticmethod
    def _series(table: Optional[pd.DataFrame], key: str) -> Optional[pd.Series]:
        if table is None or key not in table.columns:
            if table is not None:
                logger.warning(f"Column {key} not found in source table")
            return None
        return table[key]

    @property
    def row_count(self) -> int:
        return 0 if self.table is None else len(self.table)

    def has_column(self, key: str) -> bool:
        return self.table is not None and key in self.table.columns

    def column(self, key: str) -> Optional[pd.Series]:
        """The column for a field key, or None when it is not in the table."""
        if not self.has_column(key):
            return None
        return self.table[key]

    def fields(self) -> Dict[str, FieldKind]:
        """Every field key with its kind."""
        kinds: Dict[str, FieldKind] = {}
        for view in self.category_views:
            kinds[view.field.key] = FieldKind.CATEGORY
        for view in self.numeric_views:
            kinds[view.field.key] = FieldKind.NUMERIC
        for view in self.date_views:
            kinds[view.field.key] = FieldKind.DATE
        for field in self.measure_fields:
            kinds[field.key] = FieldKind.MEASURE
        return kinds

    def category_view(self, key: str) -> Optional[CategoryView]:
        return next((v for v in self.category_views if v.field.key == key), None)

    def numeric_view(self, key: str) -> Optional[NumericView]:
        return next((v for v in self.numeric_views if v.field.key == key), None)

    def date_view(self, key: str) -> Optional[DateView]:
        return next((v for v in self.date_views if v.field.key == key), None)
