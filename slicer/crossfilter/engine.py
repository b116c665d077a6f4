# Slicer Cross-Filter - Engine
# =============================
"""
Cross-filter constraint engine.

For every field F the engine computes the values (or ranges) still
reachable once the active filters on all *other* fields are applied:

1. Collect active filters on fields other than F
2. No such filters -> F keeps its original view
3. Otherwise intersect row-index sets of the category filters
4. Project F's column onto the surviving rows

Only category filters narrow the row set. Numeric, relative-date and Top-N
filters are collected but do not constrain other fields.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from ..data.models import CategoryView, DateView, NumericView
from ..data.snapshot import DataSnapshot, date_bounds, distinct_values, numeric_bounds
from .filter_state import FilterStateStore
from .models import CategoryOperator, CategorySelection, FilterConfig

logger = logging.getLogger(__name__)

FilterState = Union[FilterStateStore, Mapping[str, FilterConfig]]


@dataclass
class CrossFilterResult:
    """Constrained views for every field, in snapshot order."""
    category_views: List[CategoryView] = field(default_factory=list)
    numeric_views: List[NumericView] = field(default_factory=list)
    date_views: List[DateView] = field(default_factory=list)

    def category_values(self, key: str) -> Optional[List[Any]]:
        view = next((v for v in self.category_views if v.field.key == key), None)
        return None if view is None else view.values

    def numeric_range(self, key: str) -> Optional[NumericView]:
        return next((v for v in self.numeric_views if v.field.key == key), None)

    def date_range(self, key: str) -> Optional[DateView]:
        return next((v for v in self.date_views if v.field.key == key), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category_views": [v.to_dict() for v in self.category_views],
            "numeric_views": [v.to_dict() for v in self.numeric_views],
            "date_views": [v.to_dict() for v in self.date_views],
        }


def _active_filters(state: Optional[FilterState]) -> Dict[str, FilterConfig]:
    if state is None:
        return {}
    if isinstance(state, FilterStateStore):
        return state.filters()
    return {key: config for key, config in state.items() if config is not None and config.is_active}


class CrossFilterEngine:
    """
    Recomputes constrained field views from the filter state.

    Example:
        engine = CrossFilterEngine(snapshot)
        store.toggle_category("Sales.Region", "East", True)
        result = engine.recompute(store)
        result.category_values("Sales.Product")  # products sold in the East
    """

    def __init__(self, snapshot: DataSnapshot):
        self.snapshot = snapshot
        self.current = self.original_result()

    def original_result(self) -> CrossFilterResult:
        """Fresh copies of the original views."""
        return CrossFilterResult(
            category_views=[v.copy() for v in self.snapshot.category_views],
            numeric_views=[v.copy() for v in self.snapshot.numeric_views],
            date_views=[v.copy() for v in self.snapshot.date_views],
        )

    def recompute(self,
                  state: Optional[FilterState],
                  enable_cross_filtering: bool = True) -> CrossFilterResult:
        """
        Recompute every field's view.

        Args:
            state: FilterStateStore or mapping of field key -> filter payload
            enable_cross_filtering: False returns the original views

        Returns:
            CrossFilterResult (also kept as self.current)
        """
        filters = _active_filters(state)

        if not enable_cross_filtering or not filters:
            self.current = self.original_result()
            return self.current

        result = CrossFilterResult()

        for view in self.snapshot.category_views:
            rows = self._rows_for(view.field.key, filters)
            column = self.snapshot.column(view.field.key)
            if rows is None or column is None:
                result.category_views.append(view.copy())
            else:
                values = distinct_values(column.iloc[rows])
                result.category_views.append(CategoryView(field=view.field, values=values))

        for view in self.snapshot.numeric_views:
            rows = self._rows_for(view.field.key, filters)
            column = self.snapshot.column(view.field.key)
            if rows is None or column is None:
                result.numeric_views.append(view.copy())
            else:
                low, high = self._numeric_range(column.iloc[rows])
                result.numeric_views.append(NumericView(field=view.field, min=low, max=high))

        for view in self.snapshot.date_views:
            rows = self._rows_for(view.field.key, filters)
            column = self.snapshot.column(view.field.key)
            if rows is None or column is None:
                result.date_views.append(view.copy())
            else:
                bounds = date_bounds(column.iloc[rows])
                if bounds is None:
                    now = datetime.now()
                    bounds = (now, now)
                result.date_views.append(DateView(field=view.field, min_date=bounds[0], max_date=bounds[1]))

        self.current = result
        return result

    def _rows_for(self, key: str, filters: Dict[str, FilterConfig]) -> Optional[np.ndarray]:
        """Row positions allowed by the filters on other fields, or None for "unconstrained"."""
        others = {k: v for k, v in filters.items() if k != key}
        if not others:
            return None
        return self.valid_indices(others)

    def valid_indices(self, filters: Mapping[str, FilterConfig]) -> Optional[np.ndarray]:
        """
        Sorted row positions that satisfy every category filter.

        Non-category filters and filters on missing columns are ignored.
        Returns None when there is no table to index.
        """
        if self.snapshot.table is None:
            return None

        valid = np.arange(self.snapshot.row_count)

        for key, config in filters.items():
            if not isinstance(config, CategorySelection) or not config.is_active:
                continue

            column = self.snapshot.column(key)
            if column is None:
                logger.debug(f"Cross-filter column {key} not found; ignoring its filter")
                continue

            mask = column.isin(list(config.values)).to_numpy()
            if config.operator == CategoryOperator.NOT_IN:
                mask = ~mask
            valid = np.intersect1d(valid, np.flatnonzero(mask), assume_unique=True)

        return valid

    @staticmethod
    def _numeric_range(series: pd.Series):
        """(min, max) of the numeric values, (0, 0) when there are none."""
        bounds = numeric_bounds(series)
        return bounds if bounds is not None else (0, 0)
