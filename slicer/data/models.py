# Slicer Data - Models
# =====================
"""
Field descriptors and per-field views of the source table.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict


class FieldKind(str, Enum):
    """Role a source column plays in the filter panel."""
    CATEGORY = "category"
    NUMERIC = "numeric"
    DATE = "date"
    MEASURE = "measure"


# "Sales[Region]" or "Model.Sales[Region]"
_BRACKET_NAME = re.compile(r"^(.+?)\[(.+)\]$")


class FieldDescriptor(BaseModel):
    """Identifies a source column. `key` ("table.column") indexes every per-field map."""
    model_config = ConfigDict(frozen=True)

    table: str
    column: str
    display_name: str = ""

    @property
    def key(self) -> str:
        return f"{self.table}.{self.column}"

    @property
    def label(self) -> str:
        return self.display_name or self.column

    @property
    def is_valid(self) -> bool:
        return bool(self.table) and bool(self.column)

    @classmethod
    def from_query_name(cls, query_name: str, display_name: str = "") -> "FieldDescriptor":
        """
        Parse a host query name.

        Supports "Table.Column", "Table[Column]" and "Model.Table[Column]".
        A bare name is used as the table, with the display name as column.
        """
        query_name = (query_name or "").strip()

        bracket = _BRACKET_NAME.match(query_name)
        if bracket:
            table = bracket.group(1).split(".")[-1]
            column = bracket.group(2)
        elif "." in query_name:
            table, column = query_name.split(".", 1)
        else:
            table = query_name
            column = display_name or query_name

        return cls(table=table, column=column, display_name=display_name or column)


@dataclass
class CategoryView:
    """Selectable values of a category field."""
    field: FieldDescriptor
    values: List[Any]

    def copy(self) -> "CategoryView":
        return CategoryView(field=self.field, values=list(self.values))

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.field.key, "values": list(self.values)}


@dataclass
class NumericView:
    """Available range of a numeric field."""
    field: FieldDescriptor
    min: float
    max: float

    def copy(self) -> "NumericView":
        return NumericView(field=self.field, min=self.min, max=self.max)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.field.key, "min": self.min, "max": self.max}


@dataclass
class DateView:
    """Available range of a date field."""
    field: FieldDescriptor
    min_date: datetime
    max_date: datetime

    def copy(self) -> "DateView":
        return DateView(field=self.field, min_date=self.min_date, max_date=self.max_date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.field.key,
            "min_date": self.min_date.isoformat(),
            "max_date": self.max_date.isoformat(),
        }


def parse_query_name(query_name: str, display_name: str = "") -> FieldDescriptor:
    """Shortcut for FieldDescriptor.from_query_name."""
    return FieldDescriptor.from_query_name(query_name, display_name)
