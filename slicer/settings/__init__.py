# Slicer Settings Module
"""
Typed, validated configuration for search and cross-filtering.
Defaults can be overridden with SLICER_<CATEGORY>_<KEY> environment variables.
"""

from .service import SettingsService, get_settings_service, env_var_name
from .defaults import SETTING_CATEGORIES, SETTING_DEFINITIONS, get_default_value, get_all_defaults
from .schemas import (
    SettingType,
    SettingSource,
    SettingValue,
    SettingDefinition,
    SettingCategory,
    SettingsExport,
)

__all__ = [
    "SettingsService",
    "get_settings_service",
    "env_var_name",
    "SETTING_CATEGORIES",
    "SETTING_DEFINITIONS",
    "get_default_value",
    "get_all_defaults",
    "SettingType",
    "SettingSource",
    "SettingValue",
    "SettingDefinition",
    "SettingCategory",
    "SettingsExport",
]
