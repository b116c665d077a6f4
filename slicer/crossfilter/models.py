# Slicer Cross-Filter - Models
# =============================
"""
Per-field filter state.

Each active field holds exactly one filter payload, a tagged union
discriminated by `kind`:

- category: CategorySelection (In / NotIn a set of values)
- numeric:  NumericRange (optional min and/or max)
- date:     RelativeDateConfig ("in the last 3 months")
- topn:     TopNConfig ("top 10 by Sales.Amount")
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..data.models import FieldDescriptor


class FilterKind(str, Enum):
    """Filter payload kinds."""
    CATEGORY = "category"
    NUMERIC = "numeric"
    DATE = "date"
    TOPN = "topn"


class CategoryOperator(str, Enum):
    IN = "In"
    NOT_IN = "NotIn"


class RelativeDateOperator(str, Enum):
    IN_LAST = "InLast"
    IN_THIS = "InThis"
    IN_NEXT = "InNext"


class RelativeDateTimeUnit(str, Enum):
    DAYS = "Days"
    WEEKS = "Weeks"
    CALENDAR_WEEKS = "CalendarWeeks"
    MONTHS = "Months"
    CALENDAR_MONTHS = "CalendarMonths"
    YEARS = "Years"
    CALENDAR_YEARS = "CalendarYears"
    MINUTES = "Minutes"
    HOURS = "Hours"


class TopNDirection(str, Enum):
    TOP = "Top"
    BOTTOM = "Bottom"


class CategorySelection(BaseModel):
    """Selected values of a category field."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["category"] = "category"
    values: Tuple[Any, ...] = ()
    operator: CategoryOperator = CategoryOperator.IN

    @property
    def is_active(self) -> bool:
        return len(self.values) > 0

    def describe(self) -> str:
        if self.operator == CategoryOperator.NOT_IN:
            return f"{len(self.values)} excluded"
        return f"{len(self.values)} selected"


class NumericRange(BaseModel):
    """Inclusive numeric range; either bound may be open."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric"] = "numeric"
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self.min is not None or self.max is not None

    def describe(self) -> str:
        low = "" if self.min is None else f"{self.min:g}"
        high = "" if self.max is None else f"{self.max:g}"
        return f"{low} - {high}".strip()


class RelativeDateConfig(BaseModel):
    """Relative date window such as "in the last 7 days"."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["date"] = "date"
    operator: RelativeDateOperator = RelativeDateOperator.IN_LAST
    count: int = Field(default=1, ge=0)
    unit: RelativeDateTimeUnit = RelativeDateTimeUnit.DAYS
    include_today: bool = False

    @property
    def is_active(self) -> bool:
        return True

    def describe(self) -> str:
        return f"{self.operator.value} {self.count} {self.unit.value}"


class TopNConfig(BaseModel):
    """Keep the first/last N items ranked by another field."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["topn"] = "topn"
    item_count: int = Field(default=10, ge=1)
    direction: TopNDirection = TopNDirection.TOP
    order_by: Optional[FieldDescriptor] = None

    @property
    def is_active(self) -> bool:
        return self.order_by is not None and self.order_by.is_valid

    def describe(self) -> str:
        return f"{self.direction.value} {self.item_count}"


FilterConfig = Annotated[
    Union[CategorySelection, NumericRange, RelativeDateConfig, TopNConfig],
    Field(discriminator="kind"),
]

_filter_config_adapter = TypeAdapter(FilterConfig)


def parse_filter_config(data: Dict[str, Any]) -> FilterConfig:
    """
    Validate a plain dict into the matching filter payload.

    Raises:
        pydantic.ValidationError: Unknown kind or invalid fields
    """
    return _filter_config_adapter.validate_python(data)


def is_active(config: Optional[FilterConfig]) -> bool:
    """True when the payload actually constrains something."""
    return config is not None and config.is_active


@dataclass
class ActiveFilterSummary:
    """One line of the "active filters" list."""
    id: str
    display_name: str
    description: str
    kind: FilterKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "description": self.description,
            "kind": self.kind.value,
        }
