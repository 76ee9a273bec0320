"""
Day Grid Settings

User preferences for the day grid: colors, grid lines, start policy,
layout scaling and grid shape. Stored under the external camelCase keys.
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from src.application.settings.base_settings import BaseSettings, BaseSettingsManager, validated_field
from src.features.day_grid.domain.grid import GridMode, InvalidGridError, ScalingMode, check_dimensions
from src.shared.application.validation import ValidationResult
from src.utils.message import Log


COLOR_PATTERN = r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$'
COLOR_MESSAGE = "must be a #rgb or #rrggbb color"

LAYOUT_MODES = ["fit", "fill", "stretch", "auto"]
GRID_MODES = [mode.value for mode in GridMode]


@dataclass
class DayGridSettings(BaseSettings):
    """Settings schema for the day grid."""
    FIELD_ALIASES: ClassVar[Dict[str, str]] = {
        "fill_color": "fillColor",
        "empty_color": "emptyColor",
        "show_grid": "showGrid",
        "start_from_now": "startFromNow",
        "layout_mode": "layoutMode",
        "grid_mode": "gridMode",
        "custom_cols": "customCols",
        "custom_rows": "customRows",
    }

    fill_color: str = validated_field("#2d7dff", pattern=COLOR_PATTERN, pattern_message=COLOR_MESSAGE)
    empty_color: str = validated_field("#0b0f1a", pattern=COLOR_PATTERN, pattern_message=COLOR_MESSAGE)
    show_grid: bool = False
    start_from_now: bool = True
    layout_mode: str = validated_field("fit", choices=LAYOUT_MODES)
    grid_mode: str = validated_field("auto", choices=GRID_MODES)
    custom_cols: int = validated_field(360, min_value=1)
    custom_rows: int = validated_field(240, min_value=1)

    @classmethod
    def from_dict(cls, data: Any) -> "DayGridSettings":
        """Load field by field; a stored custom grid that fails validation reverts to auto."""
        settings = super().from_dict(data)
        result = settings.validate_cross_fields()
        if not result.valid:
            Log.warning(f"DayGridSettings: {'; '.join(result.errors)}, using automatic grid")
            settings.grid_mode = GridMode.AUTO.value
        return settings

    @property
    def scaling(self) -> ScalingMode:
        return ScalingMode.from_setting(self.layout_mode)

    @property
    def grid_shape_mode(self) -> GridMode:
        return GridMode(self.grid_mode)

    @property
    def custom_shape(self) -> Optional[tuple]:
        if self.grid_shape_mode is GridMode.CUSTOM:
            return (self.custom_cols, self.custom_rows)
        return None

    def validate_cross_fields(self) -> ValidationResult:
        """A custom grid mode needs cols x rows covering the whole day."""
        result = ValidationResult()
        if self.grid_mode == GridMode.CUSTOM.value:
            try:
                check_dimensions(self.custom_cols, self.custom_rows)
            except InvalidGridError as e:
                result.add_error(f"custom grid: {e}")
        return result


class DayGridSettingsManager(BaseSettingsManager):
    """
    Persisted DayGridSettings.

    Property setters go through update(), so invalid values are rejected
    and valid ones are saved (debounced).
    """
    NAMESPACE = "day_grid"
    SETTINGS_CLASS = DayGridSettings

    @property
    def fill_color(self) -> str:
        return self._settings.fill_color

    @fill_color.setter
    def fill_color(self, value: str):
        self.update(fill_color=value)

    @property
    def empty_color(self) -> str:
        return self._settings.empty_color

    @empty_color.setter
    def empty_color(self, value: str):
        self.update(empty_color=value)

    @property
    def show_grid(self) -> bool:
        return self._settings.show_grid

    @show_grid.setter
    def show_grid(self, value: bool):
        self.update(show_grid=value)

    @property
    def start_from_now(self) -> bool:
        return self._settings.start_from_now

    @start_from_now.setter
    def start_from_now(self, value: bool):
        self.update(start_from_now=value)

    @property
    def layout_mode(self) -> str:
        return self._settings.layout_mode

    @layout_mode.setter
    def layout_mode(self, value: str):
        self.update(layout_mode=value)
