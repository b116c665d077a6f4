"""
Settings Defaults
=================
Default values and definitions for all slicer settings.
"""

from typing import Dict, List, Any
from .schemas import SettingDefinition, SettingType


# Category definitions with display order
SETTING_CATEGORIES = {
    "search": {
        "name": "Search",
        "description": "Ranked, fuzzy and wildcard search over slicer values",
        "order": 1,
    },
    "cross_filter": {
        "name": "Cross-Filtering",
        "description": "How filters on one field narrow the others",
        "order": 2,
    },
    "ui": {
        "name": "Panel Behaviour",
        "description": "Timing and limits used by the hosting panel",
        "order": 3,
    },
}


# All setting definitions grouped by category
SETTING_DEFINITIONS: Dict[str, List[SettingDefinition]] = {
    "search": [
        SettingDefinition(
            key="case_sensitive",
            label="Case Sensitive",
            description="Match letter case exactly",
            value_type=SettingType.BOOLEAN,
            default_value=False,
        ),
        SettingDefinition(
            key="use_advanced",
            label="Advanced Search",
            description="Ranked / fuzzy / wildcard matching instead of plain contains",
            value_type=SettingType.BOOLEAN,
            default_value=True,
        ),
        SettingDefinition(
            key="fuzzy_threshold",
            label="Fuzzy Threshold",
            description="Typo tolerance for word matches (0-1, lower is stricter)",
            value_type=SettingType.NUMBER,
            default_value=0.3,
            min_value=0.0,
            max_value=1.0,
        ),
        SettingDefinition(
            key="min_score",
            label="Minimum Score",
            description="Results scoring below this are dropped (0-1)",
            value_type=SettingType.NUMBER,
            default_value=0.3,
            min_value=0.0,
            max_value=1.0,
        ),
        SettingDefinition(
            key="max_results",
            label="Maximum Results",
            description="Upper bound on ranked results",
            value_type=SettingType.NUMBER,
            default_value=30000,
            min_value=1,
            max_value=1000000,
            integer=True,
        ),
        SettingDefinition(
            key="code_like_max_length",
            label="Code Query Length",
            description="Alphanumeric queries up to this length match as plain substrings",
            value_type=SettingType.NUMBER,
            default_value=4,
            min_value=0,
            max_value=20,
            integer=True,
        ),
    ],
    "cross_filter": [
        SettingDefinition(
            key="enabled",
            label="Enable Cross-Filtering",
            description="Narrow each field's values by the filters on the other fields",
            value_type=SettingType.BOOLEAN,
            default_value=True,
        ),
        SettingDefinition(
            key="apply_mode",
            label="Apply Mode",
            description="Apply category toggles immediately or on demand",
            value_type=SettingType.ENUM,
            default_value="instant",
            options=["instant", "deferred"],
        ),
    ],
    "ui": [
        SettingDefinition(
            key="search_debounce_ms",
            label="Search Debounce",
            description="Milliseconds the caller waits after typing before searching",
            value_type=SettingType.NUMBER,
            default_value=150,
            min_value=0,
            max_value=5000,
            integer=True,
        ),
        SettingDefinition(
            key="max_dropdown_items",
            label="Maximum Dropdown Items",
            description="Items rendered in a value list",
            value_type=SettingType.NUMBER,
            default_value=1000,
            min_value=1,
            max_value=100000,
            integer=True,
        ),
        SettingDefinition(
            key="suggestion_limit",
            label="Suggestion Limit",
            description="Number of search suggestions offered",
            value_type=SettingType.NUMBER,
            default_value=5,
            min_value=1,
            max_value=50,
            integer=True,
        ),
    ],
}


def get_definition(category: str, key: str) -> Any:
    """Get the definition for a setting, or None."""
    for definition in SETTING_DEFINITIONS.get(category, []):
        if definition.key == key:
            return definition
    return None


def get_default_value(category: str, key: str) -> Any:
    """Get the default value for a setting."""
    definition = get_definition(category, key)
    return definition.default_value if definition is not None else None


def get_all_defaults() -> Dict[str, Dict[str, Any]]:
    """Get all default values grouped by category."""
    defaults = {}
    for category, definitions in SETTING_DEFINITIONS.items():
        defaults[category] = {}
        for definition in definitions:
            defaults[category][definition.key] = definition.default_value
    return defaults
