# Slicer Cross-Filter Module
# ==========================
"""
Filter state, host filter descriptors and cross-filtering.

Components:
- models: tagged-union filter payloads (category / numeric / date / topn)
- descriptors: basic / advanced / relative-date / Top-N filter descriptors
- FilterStateStore: toggle, apply, clear and reset filters per field
- CrossFilterEngine: narrows each field's values by the filters on the others
"""

from .models import (
    FilterKind,
    CategoryOperator,
    RelativeDateOperator,
    RelativeDateTimeUnit,
    TopNDirection,
    CategorySelection,
    NumericRange,
    RelativeDateConfig,
    TopNConfig,
    FilterConfig,
    ActiveFilterSummary,
    parse_filter_config,
    is_active,
)

from .descriptors import (
    FilterTarget,
    BasicFilterDescriptor,
    AdvancedFilterCondition,
    AdvancedFilterDescriptor,
    RelativeDateFilterDescriptor,
    TopNFilterDescriptor,
    FilterDescriptor,
    parse_filter_descriptor,
    build_basic_filter,
    build_advanced_filter,
    build_relative_date_filter,
    build_top_n_filter,
)

from .filter_state import ApplyMode, FilterStateStore

from .engine import CrossFilterEngine, CrossFilterResult


__all__ = [
    # Filter payloads
    "FilterKind",
    "CategoryOperator",
    "RelativeDateOperator",
    "RelativeDateTimeUnit",
    "TopNDirection",
    "CategorySelection",
    "NumericRange",
    "RelativeDateConfig",
    "TopNConfig",
    "FilterConfig",
    "ActiveFilterSummary",
    "parse_filter_config",
    "is_active",

    # Descriptors
    "FilterTarget",
    "BasicFilterDescriptor",
    "AdvancedFilterCondition",
    "AdvancedFilterDescriptor",
    "RelativeDateFilterDescriptor",
    "TopNFilterDescriptor",
    "FilterDescriptor",
    "parse_filter_descriptor",
    "build_basic_filter",
    "build_advanced_filter",
    "build_relative_date_filter",
    "build_top_n_filter",

    # State
    "ApplyMode",
    "FilterStateStore",

    # Engine
    "CrossFilterEngine",
    "CrossFilterResult",
]
