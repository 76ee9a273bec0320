"""
Application settings

Dataclass settings schemas and the persisted settings managers.
"""
from src.application.settings.base_settings import (
    BaseSettings,
    BaseSettingsManager,
    FieldValidator,
    validated_field,
)
from src.application.settings.day_grid_settings import (
    DayGridSettings,
    DayGridSettingsManager,
)

__all__ = [
    'BaseSettings',
    'BaseSettingsManager',
    'FieldValidator',
    'validated_field',
    'DayGridSettings',
    'DayGridSettingsManager',
]
