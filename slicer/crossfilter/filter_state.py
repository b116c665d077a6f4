# Slicer Cross-Filter - Filter State Store
# =========================================
"""
Owns the filter state of the panel.

Category selections are edited value by value (toggle / select all) and
handed to the host when applied. In instant mode every toggle applies
immediately; in deferred mode toggles only mark pending changes until
apply_all(). Numeric, relative-date and Top-N filters are applied in one
step.

Every apply returns the filter descriptor for the host (or None when
nothing valid was built). The store never talks to the host itself.
Cross-filtering reads filters(), which reflects the live selections
including pending ones.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from ..data.models import FieldDescriptor
from ..data.snapshot import FieldLike, as_field
from .descriptors import (
    BasicFilterDescriptor,
    FilterDescriptor,
    build_advanced_filter,
    build_basic_filter,
    build_relative_date_filter,
    build_top_n_filter,
)
from .models import (
    ActiveFilterSummary,
    CategoryOperator,
    CategorySelection,
    FilterConfig,
    FilterKind,
    NumericRange,
    RelativeDateConfig,
    TopNConfig,
)

logger = logging.getLogger(__name__)


class ApplyMode(str, Enum):
    """When category toggles reach the host."""
    INSTANT = "instant"
    DEFERRED = "deferred"


class FilterStateStore:
    """
    Per-field filter state keyed by "table.column".

    Example:
        store = FilterStateStore()
        descriptor = store.toggle_category("Sales.Region", "East", True)
        descriptor.to_json()["values"]  # ['East']
        store.filters()  # {'Sales.Region': CategorySelection(values=('East',))}
    """

    def __init__(self, apply_mode: Union[ApplyMode, str] = ApplyMode.INSTANT):
        self.apply_mode = ApplyMode(apply_mode)
        self.pending_changes = False

        self._fields: Dict[str, FieldDescriptor] = {}
        # Ordered value sets (dict keys keep insertion order)
        self._selections: Dict[str, Dict[Any, None]] = {}
        self._operators: Dict[str, CategoryOperator] = {}
        self._configs: Dict[str, FilterConfig] = {}
        self._summaries: Dict[str, ActiveFilterSummary] = {}

        # Last descriptor handed out per field
        self.applied: Dict[str, FilterDescriptor] = {}

    # ------------------------------------------------------------------
    # Category selections
    # ------------------------------------------------------------------

    def toggle_category(self,
                        field: FieldLike,
                        value: Any,
                        checked: bool) -> Optional[BasicFilterDescriptor]:
        """
        Check or uncheck one value.

        Returns the applied descriptor in instant mode, else None. A field
        without a table or column leaves the state untouched.
        """
        field = self._register(field)
        if field is None:
            return None
        selection = self._selections.setdefault(field.key, {})

        if checked:
            selection[value] = None
        else:
            selection.pop(value, None)

        self.pending_changes = True

        if self.apply_mode == ApplyMode.INSTANT:
            return self.apply_category(field, self.operator(field.key))
        return None

    def select_all(self, field: FieldLike, values: Iterable[Any]) -> Optional[BasicFilterDescriptor]:
        """Add every value to the selection and apply it."""
        field = self._register(field)
        if field is None:
            return None
        selection = self._selections.setdefault(field.key, {})
        for value in values:
            selection[value] = None
        return self.apply_category(field, self.operator(field.key))

    def apply_category(self,
                       field: FieldLike,
                       operator: Union[CategoryOperator, str] = CategoryOperator.IN
                       ) -> Optional[BasicFilterDescriptor]:
        """
        Apply the current selection of a field.

        An empty selection removes the field's category filter; a range,
        relative-date or Top-N filter on the field is kept.
        """
        field = self._register(field)
        if field is None:
            return None
        operator = CategoryOperator(operator)
        values = list(self._selections.get(field.key, {}))

        descriptor = build_basic_filter(field.table, field.column, values, operator)
        if descriptor is None:
            self._clear_category(field.key)
        else:
            self._configs.pop(field.key, None)
            self._operators[field.key] = operator
            self.applied[field.key] = descriptor
            selection = CategorySelection(values=tuple(values), operator=operator)
            self._summaries[field.key] = ActiveFilterSummary(
                id=field.key,
                display_name=field.label,
                description=selection.describe(),
                kind=FilterKind.CATEGORY,
            )

        self.pending_changes = False
        return descriptor

    def apply_all(self) -> List[BasicFilterDescriptor]:
        """Apply every category selection (deferred mode's Apply button)."""
        descriptors = []
        for key in list(self._selections):
            descriptor = self.apply_category(self._fields[key], self.operator(key))
            if descriptor is not None:
                descriptors.append(descriptor)

        self.pending_changes = False
        logger.debug(f"Applied {len(descriptors)} category filters")
        return descriptors

    def operator(self, key: str) -> CategoryOperator:
        """Operator of the field's category selection (In unless NotIn was applied)."""
        return self._operators.get(key, CategoryOperator.IN)

    def selected_values(self, key: str) -> List[Any]:
        return list(self._selections.get(key, {}))

    def is_selected(self, key: str, value: Any) -> bool:
        return value in self._selections.get(key, {})

    # ------------------------------------------------------------------
    # One-step filters
    # ------------------------------------------------------------------

    def apply_numeric_range(self, field: FieldLike, numeric_range: NumericRange):
        """Apply a numeric range; an invalid range leaves the state untouched."""
        field = as_field(field)
        descriptor = build_advanced_filter(field.table, field.column, numeric_range)
        return self._store_config(field, numeric_range, descriptor, FilterKind.NUMERIC)

    def apply_relative_date(self, field: FieldLike, config: RelativeDateConfig):
        """Apply a relative date window."""
        field = as_field(field)
        descriptor = build_relative_date_filter(field.table, field.column, config)
        return self._store_config(field, config, descriptor, FilterKind.DATE)

    def apply_top_n(self, field: FieldLike, config: TopNConfig):
        """Apply a Top-N filter; without an order-by field nothing changes."""
        field = as_field(field)
        descriptor = build_top_n_filter(field.table, field.column, config)
        return self._store_config(field, config, descriptor, FilterKind.TOPN)

    def _store_config(self, field, config, descriptor, kind: FilterKind):
        if descriptor is None:
            logger.debug(f"Ignoring invalid {kind.value} filter for {field.key}")
            return None

        # One payload per field: a range or Top-N replaces any selection
        self._selections.pop(field.key, None)
        self._operators.pop(field.key, None)
        self._fields[field.key] = field
        self._configs[field.key] = config
        self.applied[field.key] = descriptor
        self._summaries[field.key] = ActiveFilterSummary(
            id=field.key,
            display_name=field.label,
            description=config.describe(),
            kind=kind,
        )
        return descriptor

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def clear(self, key: str) -> None:
        """Remove every kind of filter on a field."""
        self._selections.pop(key, None)
        self._operators.pop(key, None)
        self._configs.pop(key, None)
        self._summaries.pop(key, None)
        self.applied.pop(key, None)

    def _clear_category(self, key: str) -> None:
        self._selections.pop(key, None)
        self._operators.pop(key, None)
        summary = self._summaries.get(key)
        if summary is not None and summary.kind == FilterKind.CATEGORY:
            del self._summaries[key]
            self.applied.pop(key, None)

    def reset_all(self) -> None:
        """Remove all filters."""
        self._selections.clear()
        self._operators.clear()
        self._configs.clear()
        self._summaries.clear()
        self.applied.clear()
        self.pending_changes = False
        logger.debug("Reset all filters")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def filters(self) -> Dict[str, FilterConfig]:
        """Active filter payload per field key (live category selections included)."""
        active: Dict[str, FilterConfig] = {}
        for key, selection in self._selections.items():
            if selection:
                active[key] = CategorySelection(
                    values=tuple(selection),
                    operator=self.operator(key),
                )
        for key, config in self._configs.items():
            if config.is_active:
                active[key] = config
        return active

    def filters_except(self, key: str) -> Dict[str, FilterConfig]:
        """Active filters on every field other than key."""
        return {k: v for k, v in self.filters().items() if k != key}

    def has_active_filters(self) -> bool:
        return bool(self.filters())

    def active_filters(self) -> List[ActiveFilterSummary]:
        """Summaries of the applied filters, in application order."""
        return list(self._summaries.values())

    def field(self, key: str) -> Optional[FieldDescriptor]:
        return self._fields.get(key)

    def _register(self, field: FieldLike) -> Optional[FieldDescriptor]:
        """Remember the field; None for a field without table or column."""
        field = as_field(field)
        if not field.is_valid:
            logger.debug(f"Ignoring category change on invalid field {field.key!r}")
            return None
        self._fields.setdefault(field.key, field)
        return field
