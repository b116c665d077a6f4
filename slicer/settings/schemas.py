"""
Settings Schemas
================
Models describing slicer settings: their definitions, resolved values
and the export format.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SettingType(str, Enum):
    """Value types a setting can hold."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"


class SettingSource(str, Enum):
    """Where a resolved value came from."""
    DEFAULT = "default"
    ENV = "env"
    USER = "user"


class SettingDefinition(BaseModel):
    """A setting's type, default and allowed values."""
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    description: str
    value_type: SettingType
    default_value: Any
    options: Optional[List[str]] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    integer: bool = False


class SettingValue(BaseModel):
    """Resolved value of one setting, with the definition's metadata."""
    category: str
    key: str
    value: Any
    value_type: SettingType
    label: str
    description: Optional[str] = None
    options: Optional[List[str]] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    source: SettingSource = SettingSource.DEFAULT

    @property
    def is_default(self) -> bool:
        return self.source == SettingSource.DEFAULT

    @classmethod
    def from_definition(cls,
                        category: str,
                        definition: SettingDefinition,
                        value: Any,
                        source: SettingSource) -> "SettingValue":
        return cls(
            category=category,
            key=definition.key,
            value=value,
            value_type=definition.value_type,
            label=definition.label,
            description=definition.description,
            options=definition.options,
            min_value=definition.min_value,
            max_value=definition.max_value,
            source=source,
        )


class SettingCategory(BaseModel):
    """Display group of settings (search, cross_filter, ui)."""
    id: str
    name: str
    description: str
    order: int
    settings: List[SettingValue] = Field(default_factory=list)

    def values(self) -> Dict[str, Any]:
        return {s.key: s.value for s in self.settings}


class SettingsExport(BaseModel):
    """Snapshot of every setting value, importable into another service."""
    version: str = "1.0"
    exported_at: str
    settings: Dict[str, Dict[str, Any]]
