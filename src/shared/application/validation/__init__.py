"""Validation framework for settings and grid configuration"""

from src.shared.application.validation.validation_framework import (
    ValidationError,
    ValidationResult,
    Validator,
    RangeValidator,
    PatternValidator,
    ChoicesValidator,
    TypeValidator,
    All,
    validate,
)

__all__ = [
    'ValidationError',
    'ValidationResult',
    'Validator',
    'RangeValidator',
    'PatternValidator',
    'ChoicesValidator',
    'TypeValidator',
    'All',
    'validate',
]
