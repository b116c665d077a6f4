"""
Settings Service
================
Validated access to slicer settings.

Values resolve in order: user updates, then SLICER_<CATEGORY>_<KEY>
environment variables (read when the service is created), then defaults.
"""

import os
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..search.models import SearchOptions
from .defaults import SETTING_DEFINITIONS, SETTING_CATEGORIES, get_definition
from .schemas import (
    SettingDefinition,
    SettingValue,
    SettingCategory,
    SettingSource,
    SettingType,
    SettingsExport,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "SLICER_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


# Singleton instance
_settings_service: Optional["SettingsService"] = None


def get_settings_service() -> "SettingsService":
    """Get or create the global settings service instance."""
    global _settings_service
    if _settings_service is None:
        _settings_service = SettingsService()
    return _settings_service


def env_var_name(category: str, key: str) -> str:
    """SLICER_SEARCH_FUZZY_THRESHOLD for search / fuzzy_threshold."""
    return f"{ENV_PREFIX}{category}_{key}".upper()


class SettingsService:
    """Service for reading and updating slicer settings."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        """Initialize the settings service.

        Args:
            environ: Environment to read overrides from (defaults to os.environ)
        """
        self._env_values: Dict[str, Dict[str, Any]] = {}
        self._user_values: Dict[str, Dict[str, Any]] = {}
        self._load_environment(os.environ if environ is None else environ)

    def _load_environment(self, environ) -> None:
        """Read SLICER_* overrides; invalid values are logged and ignored."""
        for category, definitions in SETTING_DEFINITIONS.items():
            for definition in definitions:
                raw = environ.get(env_var_name(category, definition.key))
                if raw is None:
                    continue
                try:
                    value = self._parse_env_value(raw, definition)
                    self._validate_value(value, definition)
                except ValueError as e:
                    logger.warning(f"Ignoring {env_var_name(category, definition.key)}: {e}")
                    continue
                self._env_values.setdefault(category, {})[definition.key] = value

    @staticmethod
    def _parse_env_value(raw: str, definition: SettingDefinition) -> Any:
        """Convert an environment string to the setting's type.

        Raises:
            ValueError: If the string cannot be converted
        """
        value_type = definition.value_type
        text = raw.strip()

        if value_type == SettingType.BOOLEAN:
            if text.lower() in _TRUE_STRINGS:
                return True
            if text.lower() in _FALSE_STRINGS:
                return False
            raise ValueError(f"{definition.key}: must be a boolean")

        if value_type == SettingType.NUMBER:
            try:
                number = float(text)
            except ValueError:
                raise ValueError(f"{definition.key}: must be a number") from None
            if definition.integer and number.is_integer():
                return int(number)
            return number

        return text

    def get(self, category: str, key: str, default: Any = None) -> Any:
        """Current value of a setting: user update, then environment, then default.

        Unknown settings return `default`.
        """
        if key in self._user_values.get(category, {}):
            return self._user_values[category][key]
        if key in self._env_values.get(category, {}):
            return self._env_values[category][key]

        definition = get_definition(category, key)
        if definition is None:
            return default
        return definition.default_value

    def source(self, category: str, key: str) -> SettingSource:
        """Which layer the current value of a setting comes from."""
        if key in self._user_values.get(category, {}):
            return SettingSource.USER
        if key in self._env_values.get(category, {}):
            return SettingSource.ENV
        return SettingSource.DEFAULT

    def get_category(self, category_id: str) -> Optional[SettingCategory]:
        """Resolved values of one category, or None for an unknown id."""
        info = SETTING_CATEGORIES.get(category_id)
        if info is None:
            return None

        return SettingCategory(
            id=category_id,
            name=info["name"],
            description=info["description"],
            order=info["order"],
            settings=[
                SettingValue.from_definition(
                    category_id,
                    definition,
                    self.get(category_id, definition.key),
                    self.source(category_id, definition.key),
                )
                for definition in SETTING_DEFINITIONS.get(category_id, [])
            ],
        )

    def get_all(self) -> List[SettingCategory]:
        """All categories with their settings, in display order."""
        categories = [self.get_category(category_id) for category_id in SETTING_CATEGORIES]
        categories.sort(key=lambda c: c.order)
        return categories

    def update_setting(self, category: str, key: str, value: Any) -> bool:
        """Store a user value for a setting.

        Raises:
            ValueError: Unknown setting, or a value its definition rejects
        """
        definition = get_definition(category, key)
        if definition is None:
            raise ValueError(f"Unknown setting: {category}/{key}")

        self._validate_value(value, definition)

        self._user_values.setdefault(category, {})[key] = value
        logger.debug(f"Setting {category}/{key} updated")
        return True

    def _validate_value(self, value: Any, definition: SettingDefinition) -> None:
        """Validate a value against its definition.

        Raises:
            ValueError: If validation fails
        """
        value_type = definition.value_type

        if value_type == SettingType.STRING:
            if not isinstance(value, str):
                raise ValueError(f"{definition.key}: must be a string")

        elif value_type == SettingType.NUMBER:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{definition.key}: must be a number")
            if definition.integer and not float(value).is_integer():
                raise ValueError(f"{definition.key}: must be a whole number")
            if definition.min_value is not None and value < definition.min_value:
                raise ValueError(f"{definition.key}: must be at least {definition.min_value}")
            if definition.max_value is not None and value > definition.max_value:
                raise ValueError(f"{definition.key}: must be at most {definition.max_value}")

        elif value_type == SettingType.BOOLEAN:
            if not isinstance(value, bool):
                raise ValueError(f"{definition.key}: must be a boolean")

        elif value_type == SettingType.ENUM:
            if definition.options and value not in definition.options:
                raise ValueError(f"{definition.key}: must be one of {definition.options}")

    def reset_category(self, category: str) -> bool:
        """Reset a category to its default (or environment) values.

        Returns:
            True if the category exists
        """
        if category not in SETTING_CATEGORIES:
            return False

        self._user_values.pop(category, None)
        return True

    def reset_all(self):
        """Drop every user update."""
        self._user_values = {}

    def export_settings(self) -> SettingsExport:
        """Export the current value of every setting."""
        export_data = {
            category: {d.key: self.get(category, d.key) for d in definitions}
            for category, definitions in SETTING_DEFINITIONS.items()
        }

        return SettingsExport(
            version="1.0",
            exported_at=datetime.now().isoformat(),
            settings=export_data,
        )

    def import_settings(
        self,
        settings: Dict[str, Dict[str, Any]],
        overwrite: bool = False
    ) -> Dict[str, int]:
        """Apply values from export_settings() data.

        Values the user already set are skipped unless overwrite is True.
        Unknown categories count every value they hold as an error.

        Returns:
            Counts under "imported", "skipped" and "errors"
        """
        counts = {"imported": 0, "skipped": 0, "errors": 0}

        for category, values in settings.items():
            if category not in SETTING_CATEGORIES:
                logger.warning(f"Import: unknown settings category {category!r}")
                counts["errors"] += len(values)
                continue

            user_values = self._user_values.get(category, {})
            for key, value in values.items():
                if key in user_values and not overwrite:
                    counts["skipped"] += 1
                    continue
                try:
                    self.update_setting(category, key, value)
                except ValueError as e:
                    logger.warning(f"Import: {e}")
                    counts["errors"] += 1
                else:
                    counts["imported"] += 1

        return counts

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def search_options(self) -> SearchOptions:
        """SearchOptions built from the search category."""
        return SearchOptions(
            case_sensitive=self.get("search", "case_sensitive"),
            fuzzy_threshold=float(self.get("search", "fuzzy_threshold")),
            min_score=float(self.get("search", "min_score")),
            max_results=int(self.get("search", "max_results")),
            code_like_max_length=int(self.get("search", "code_like_max_length")),
        )

    @property
    def cross_filter_enabled(self) -> bool:
        return bool(self.get("cross_filter", "enabled"))

    @property
    def apply_mode(self) -> str:
        return self.get("cross_filter", "apply_mode")
