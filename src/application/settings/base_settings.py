"""
Base Settings Manager

Provides a standardized foundation for persisted settings.

Features:
- Dataclass-based schema with field validators
- Best-effort loading: each stored field is checked on its own, and a bad
  field falls back to its default without affecting the others
- External storage keys (e.g. camelCase JSON) via FIELD_ALIASES
- Debounced auto-save through a PreferencesRepository
- Signal emission for UI reactivity

Storage problems never propagate: the in-memory settings stay the source
of truth for the session.

Usage:
    1. Create a dataclass for your settings schema (inherit BaseSettings)
    2. Inherit from BaseSettingsManager, set NAMESPACE and SETTINGS_CLASS
"""
import json
import sqlite3
from dataclasses import dataclass, asdict, fields, field
from typing import Optional, Dict, Any, Type, List, Callable, ClassVar, Union, TYPE_CHECKING
from PyQt6.QtCore import QObject, pyqtSignal, QTimer

from src.shared.application.validation import (
    ChoicesValidator,
    PatternValidator,
    RangeValidator,
    ValidationResult,
    validate,
)
from src.utils.message import Log

if TYPE_CHECKING:
    from src.infrastructure.persistence.sqlite.preferences_repository_impl import PreferencesRepository


# Errors a storage backend may raise; all are treated as "storage unavailable"
STORAGE_ERRORS = (sqlite3.Error, OSError, ValueError, TypeError)


@dataclass
class FieldValidator:
    """
    Validation rules for a settings field.

    Example:
        @dataclass
        class MySettings(BaseSettings):
            size: int = field(default=50, metadata={
                'validator': FieldValidator(min_value=1)
            })
    """
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None
    choices: Optional[List[Any]] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None
    # Signature: (value, field_name) -> Optional[str] (error message or None)
    custom: Optional[Callable[[Any, str], Optional[str]]] = None

    def validate(self, value: Any, field_name: str) -> ValidationResult:
        validators = []
        if self.min_value is not None or self.max_value is not None:
            validators.append(RangeValidator(self.min_value, self.max_value))
        if self.choices is not None:
            validators.append(ChoicesValidator(self.choices))
        if self.pattern is not None:
            validators.append(PatternValidator(self.pattern, self.pattern_message))

        result = validate(value, validators, field_name=field_name)

        if self.custom is not None:
            error = self.custom(value, field_name)
            if error:
                result.add_error(error)

        return result


def validated_field(
    default: Any = None,
    *,
    min_value: Optional[Union[int, float]] = None,
    max_value: Optional[Union[int, float]] = None,
    choices: Optional[List[Any]] = None,
    pattern: Optional[str] = None,
    pattern_message: Optional[str] = None,
    custom: Optional[Callable[[Any, str], Optional[str]]] = None,
    **kwargs
):
    """
    Create a dataclass field with validation metadata.

    Example:
        @dataclass
        class MySettings(BaseSettings):
            layout_mode: str = validated_field('fit', choices=['fit', 'fill'])
    """
    validator = FieldValidator(
        min_value=min_value,
        max_value=max_value,
        choices=choices,
        pattern=pattern,
        pattern_message=pattern_message,
        custom=custom,
    )

    metadata = kwargs.pop('metadata', {})
    metadata['validator'] = validator

    return field(default=default, metadata=metadata, **kwargs)


def _matches_default_type(value: Any, default: Any) -> bool:
    """Stored value must have the same JSON type as the field default."""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if default is None:
        return True
    return isinstance(value, type(default))


@dataclass
class BaseSettings:
    """
    Base class for all settings dataclasses.

    Subclasses define fields with default values. FIELD_ALIASES maps field
    names to the keys used in stored dictionaries.
    """
    FIELD_ALIASES: ClassVar[Dict[str, str]] = {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a storage dictionary (aliased keys)."""
        return {self.FIELD_ALIASES.get(k, k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Any) -> 'BaseSettings':
        """
        Create settings from a stored dictionary.

        Unknown keys are ignored. Each known field is accepted only if its
        type matches the default and its validator passes; otherwise the
        default is kept. Non-dict input yields defaults.
        """
        settings = cls()
        if not isinstance(data, dict):
            return settings

        for f in fields(cls):
            key = cls.FIELD_ALIASES.get(f.name, f.name)
            if key not in data:
                continue
            value = data[key]
            default = getattr(settings, f.name)

            if not _matches_default_type(value, default):
                Log.debug(f"{cls.__name__}: ignoring stored {key}={value!r} (wrong type)")
                continue
            if isinstance(default, float):
                value = float(value)

            validator = f.metadata.get('validator') if f.metadata else None
            if isinstance(validator, FieldValidator) and not validator.validate(value, f.name).valid:
                Log.debug(f"{cls.__name__}: ignoring stored {key}={value!r} (invalid)")
                continue

            setattr(settings, f.name, value)

        return settings

    def validate(self) -> ValidationResult:
        """Validate all fields that carry a validator."""
        result = ValidationResult()
        for f in fields(self):
            validator = f.metadata.get('validator') if f.metadata else None
            if isinstance(validator, FieldValidator):
                result.merge(validator.validate(getattr(self, f.name), f.name))
        if result.valid:
            result.merge(self.validate_cross_fields())
        return result

    def validate_field(self, field_name: str) -> ValidationResult:
        """
        Validate a single field by name.

        Raises:
            AttributeError: If field doesn't exist
        """
        for f in fields(self):
            if f.name == field_name:
                validator = f.metadata.get('validator') if f.metadata else None
                if isinstance(validator, FieldValidator):
                    return validator.validate(getattr(self, field_name), field_name)
                return ValidationResult()

        raise AttributeError(f"Field '{field_name}' not found in {self.__class__.__name__}")

    def validate_cross_fields(self) -> ValidationResult:
        """Rules spanning several fields; subclasses override."""
        return ValidationResult()


class BaseSettingsManager(QObject):
    """
    Base class for settings managers.

    Provides:
    - Persistence to a PreferencesRepository (None = in-memory only)
    - Auto-save with debouncing
    - Signal emission when settings change
    - Validated updates (invalid values are rejected, not saved)

    Subclasses must define NAMESPACE and SETTINGS_CLASS.
    """

    settings_changed = pyqtSignal(str)  # Setting name that changed
    validation_failed = pyqtSignal(object)  # ValidationResult
    settings_save_failed = pyqtSignal(str)  # Error message

    NAMESPACE: str = ""
    SETTINGS_CLASS: Type[BaseSettings] = BaseSettings

    SAVE_DEBOUNCE_MS: int = 300

    def __init__(self, preferences_repo: Optional['PreferencesRepository'] = None, parent=None):
        super().__init__(parent)

        if not self.NAMESPACE:
            raise ValueError(f"{self.__class__.__name__} must define NAMESPACE")

        self._preferences_repo = preferences_repo
        self._settings: BaseSettings = self.SETTINGS_CLASS()
        self._save_timer = QTimer(self)
        self._save_timer.setSingleShot(True)
        self._save_timer.setInterval(self.SAVE_DEBOUNCE_MS)
        self._save_timer.timeout.connect(self._do_save)

        self._load_from_storage()

    @property
    def _storage_key(self) -> str:
        return f"{self.NAMESPACE}.settings"

    @property
    def settings(self) -> BaseSettings:
        return self._settings

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self._settings, key, default)

    def update(self, **changes: Any) -> ValidationResult:
        """
        Apply several changes at once.

        Every change is validated first; if any fails, nothing is applied.
        """
        result = ValidationResult()
        candidate = self.SETTINGS_CLASS(**asdict(self._settings))

        for key, value in changes.items():
            if not hasattr(candidate, key):
                result.add_error(f"Unknown setting: {key}")
                continue
            if not _matches_default_type(value, getattr(candidate, key)):
                result.add_error(f"{key}: Expected {type(getattr(candidate, key)).__name__}, "
                                 f"got {type(value).__name__}")
                continue
            setattr(candidate, key, value)
            result.merge(candidate.validate_field(key))

        if result.valid:
            result.merge(candidate.validate_cross_fields())

        if not result.valid:
            self.validation_failed.emit(result)
            return result

        changed = [k for k, v in changes.items() if getattr(self._settings, k) != v]
        self._settings = candidate
        for key in changed:
            self._save_setting(key)
        return result

    def _load_from_storage(self):
        if not self._preferences_repo:
            return

        try:
            stored = self._preferences_repo.get(self._storage_key, {})
        except STORAGE_ERRORS as e:
            Log.warning(f"{self.__class__.__name__}: Failed to load settings: {e}")
            stored = None

        if isinstance(stored, str):
            try:
                stored = json.loads(stored)
            except ValueError:
                Log.warning(f"{self.__class__.__name__}: Stored settings are not valid JSON, using defaults")
                stored = None

        self._settings = self.SETTINGS_CLASS.from_dict(stored)

    def _save_setting(self, key: str):
        """Queue a save operation (debounced)."""
        self._save_timer.start()
        self.settings_changed.emit(key)

    def _do_save(self):
        if not self._preferences_repo:
            return

        try:
            self._preferences_repo.set(self._storage_key, self._settings.to_dict())
        except STORAGE_ERRORS as e:
            Log.warning(f"{self.__class__.__name__}: Failed to save settings: {e}")
            self.settings_save_failed.emit(str(e))

    def force_save(self):
        """Force an immediate save (bypasses debounce)."""
        self._save_timer.stop()
        self._do_save()
