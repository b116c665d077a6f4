# Slicer Cross-Filter - Filter Descriptors
# =========================================
"""
Filter descriptors handed to the host for each apply action.

Four descriptor kinds, serialized with camelCase keys by to_json():

- basic:        target In / NotIn a list of values
- advanced:     numeric range as >= / <= conditions joined by And / Or
- relativeDate: "in the last N units"
- topN:         top / bottom N items ordered by another target

The builders return None instead of raising when the target or payload is
unusable, so callers can simply skip the apply.
"""

import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from .models import (
    CategoryOperator,
    NumericRange,
    RelativeDateConfig,
    RelativeDateOperator,
    RelativeDateTimeUnit,
    TopNConfig,
    TopNDirection,
)

logger = logging.getLogger(__name__)

SCHEMA_BASE = "http://powerbi.com/product/schema"


class _Descriptor(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json(self) -> Dict[str, Any]:
        """camelCase dict ready for transmission."""
        return self.model_dump(mode="json", by_alias=True)


class FilterTarget(_Descriptor):
    table: str
    column: str


class BasicFilterDescriptor(_Descriptor):
    schema_uri: str = Field(default=f"{SCHEMA_BASE}#basic", alias="$schema")
    filter_type: Literal["basic"] = "basic"
    target: FilterTarget
    operator: CategoryOperator = CategoryOperator.IN
    values: List[Any]


class AdvancedFilterCondition(_Descriptor):
    operator: Literal["GreaterThanOrEqual", "LessThanOrEqual"]
    value: float


class AdvancedFilterDescriptor(_Descriptor):
    schema_uri: str = Field(default=f"{SCHEMA_BASE}#advanced", alias="$schema")
    filter_type: Literal["advanced"] = "advanced"
    target: FilterTarget
    logical_operator: Literal["And", "Or"] = "And"
    conditions: List[AdvancedFilterCondition]


class RelativeDateFilterDescriptor(_Descriptor):
    schema_uri: str = Field(default=f"{SCHEMA_BASE}#relativeDate", alias="$schema")
    filter_type: Literal["relativeDate"] = "relativeDate"
    target: FilterTarget
    operator: RelativeDateOperator
    time_units_count: int
    time_unit_type: RelativeDateTimeUnit
    include_today: bool = False


class TopNFilterDescriptor(_Descriptor):
    schema_uri: str = Field(default=f"{SCHEMA_BASE}#topN", alias="$schema")
    filter_type: Literal["topN"] = "topN"
    target: FilterTarget
    operator: TopNDirection
    item_count: int
    order_by: FilterTarget


FilterDescriptor = Annotated[
    Union[BasicFilterDescriptor, AdvancedFilterDescriptor,
          RelativeDateFilterDescriptor, TopNFilterDescriptor],
    Field(discriminator="filter_type"),
]

_descriptor_adapter = TypeAdapter(FilterDescriptor)


def parse_filter_descriptor(data: Dict[str, Any]) -> FilterDescriptor:
    """Validate a camelCase (or snake_case) dict back into a descriptor."""
    return _descriptor_adapter.validate_python(data)


def _target(table: Optional[str], column: Optional[str]) -> Optional[FilterTarget]:
    if not table or not column:
        return None
    return FilterTarget(table=table, column=column)


def build_basic_filter(table: str,
                       column: str,
                       values: Sequence[Any],
                       operator: Union[CategoryOperator, str] = CategoryOperator.IN
                       ) -> Optional[BasicFilterDescriptor]:
    """Membership filter; None without a target or without values."""
    target = _target(table, column)
    if target is None or not values:
        return None
    return BasicFilterDescriptor(
        target=target,
        operator=CategoryOperator(operator),
        values=list(values),
    )


def build_advanced_filter(table: str,
                          column: str,
                          numeric_range: NumericRange,
                          logical_operator: Literal["And", "Or"] = "And"
                          ) -> Optional[AdvancedFilterDescriptor]:
    """
    Numeric range filter.

    min becomes a GreaterThanOrEqual condition and max a LessThanOrEqual
    one. Returns None without a target or when both bounds are open.
    """
    target = _target(table, column)
    if target is None or numeric_range is None:
        return None

    conditions = []
    if numeric_range.min is not None:
        conditions.append(AdvancedFilterCondition(operator="GreaterThanOrEqual", value=numeric_range.min))
    if numeric_range.max is not None:
        conditions.append(AdvancedFilterCondition(operator="LessThanOrEqual", value=numeric_range.max))

    if not conditions:
        return None

    return AdvancedFilterDescriptor(
        target=target,
        logical_operator=logical_operator,
        conditions=conditions,
    )


def build_relative_date_filter(table: str,
                               column: str,
                               config: RelativeDateConfig
                               ) -> Optional[RelativeDateFilterDescriptor]:
    """Relative date filter; None without a target or config."""
    target = _target(table, column)
    if target is None or config is None:
        return None
    return RelativeDateFilterDescriptor(
        target=target,
        operator=config.operator,
        time_units_count=config.count,
        time_unit_type=config.unit,
        include_today=config.include_today,
    )


def build_top_n_filter(table: str,
                       column: str,
                       config: TopNConfig) -> Optional[TopNFilterDescriptor]:
    """Top-N filter; None without a target or a valid order-by field."""
    target = _target(table, column)
    if target is None or config is None:
        return None

    order_by = config.order_by
    if order_by is None or not order_by.is_valid:
        logger.debug(f"Top-N filter on {table}.{column} has no order-by field")
        return None

    return TopNFilterDescriptor(
        target=target,
        operator=config.direction,
        item_count=config.item_count,
        order_by=FilterTarget(table=order_by.table, column=order_by.column),
    )
