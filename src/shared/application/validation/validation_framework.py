"""
Validation Framework

Composable validators shared by settings and grid configuration.

Usage:
    result = validate(cols, [
        TypeValidator(int),
        RangeValidator(min_value=1),
    ], field_name="cols")
    if not result.valid:
        show_errors(result.errors)

    # Fail fast
    result.raise_if_invalid()
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, List, Union, Type, Set
import re


# =============================================================================
# Exceptions
# =============================================================================

class ValidationError(Exception):
    """
    Exception for validation failures.

    Raised when validation must fail immediately.
    """

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.message = message
        self.field_name = field_name
        full_message = f"{field_name}: {message}" if field_name else message
        super().__init__(full_message)


# =============================================================================
# Validation Result
# =============================================================================

@dataclass
class ValidationResult:
    """
    Result of validation operations.

    Attributes:
        valid: True if all validations passed
        errors: List of error messages (validation failures)
        field_name: Optional field name for context
    """
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    field_name: Optional[str] = None

    def add_error(self, message: str) -> None:
        """Add an error and mark as invalid."""
        if self.field_name and not message.startswith(self.field_name):
            message = f"{self.field_name}: {message}"
        self.errors.append(message)
        self.valid = False

    def merge(self, other: 'ValidationResult') -> None:
        """Merge another ValidationResult into this one."""
        if not other.valid:
            self.valid = False
        self.errors.extend(other.errors)

    def __bool__(self) -> bool:
        return self.valid

    def raise_if_invalid(self, error_class: Type[ValidationError] = ValidationError) -> None:
        """Raise error_class if result is invalid."""
        if not self.valid:
            raise error_class("; ".join(self.errors))


# =============================================================================
# Validators
# =============================================================================

class Validator(ABC):
    """
    Abstract base class for validators.

    Subclass and implement validate() to create custom validators.
    """

    @abstractmethod
    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        pass

    def __call__(self, value: Any, field_name: str = "") -> ValidationResult:
        return self.validate(value, field_name)


class RangeValidator(Validator):
    """
    Validates that a numeric value is within a range.

    Usage:
        validator = RangeValidator(min_value=1)
        result = validator.validate(cols, "cols")
    """

    def __init__(
        self,
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None,
        message: Optional[str] = None,
    ):
        self.min_value = min_value
        self.max_value = max_value
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)

        if value is None:
            return result

        try:
            num_value = float(value)
        except (TypeError, ValueError):
            result.add_error(f"must be a number, got {type(value).__name__}")
            return result

        if self.min_value is not None and num_value < self.min_value:
            result.add_error(self.message or f"must be at least {self.min_value}")

        if self.max_value is not None and num_value > self.max_value:
            result.add_error(self.message or f"must be at most {self.max_value}")

        return result


class PatternValidator(Validator):
    """
    Validates that a string matches a regex pattern.

    Usage:
        validator = PatternValidator(r'^#[0-9a-fA-F]{6}$', "must be a #rrggbb color")
    """

    def __init__(self, pattern: str, message: Optional[str] = None):
        self.pattern = pattern
        self.compiled = re.compile(pattern)
        self.message = message or f"does not match pattern: {pattern}"

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)

        if value is None:
            return result

        if not isinstance(value, str):
            result.add_error(f"must be a string, got {type(value).__name__}")
            return result

        if not self.compiled.match(value):
            result.add_error(self.message)

        return result


class ChoicesValidator(Validator):
    """
    Validates that a value is one of the allowed choices.
    """

    def __init__(self, choices: Union[List[Any], Set[Any]], message: Optional[str] = None):
        self.choices = set(choices) if not isinstance(choices, set) else choices
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)

        if value is None:
            return result

        if value not in self.choices:
            choices_str = ", ".join(repr(c) for c in sorted(str(c) for c in self.choices))
            result.add_error(self.message or f"must be one of: {choices_str}")

        return result


class TypeValidator(Validator):
    """
    Validates that a value is of the expected type(s).

    bool is rejected where int is expected unless bool is listed explicitly.
    """

    def __init__(self, expected_type: Union[Type, tuple], message: Optional[str] = None):
        self.expected_type = expected_type
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)

        if value is None:
            return result

        expected = self.expected_type if isinstance(self.expected_type, tuple) else (self.expected_type,)
        matches = isinstance(value, expected)
        if isinstance(value, bool) and bool not in expected:
            matches = False

        if not matches:
            type_names = " or ".join(t.__name__ for t in expected)
            result.add_error(self.message or f"must be {type_names}, got {type(value).__name__}")

        return result


class All(Validator):
    """
    Composes multiple validators with AND logic.
    """

    def __init__(self, *validators: Validator, stop_on_first_error: bool = False):
        self.validators = validators
        self.stop_on_first_error = stop_on_first_error

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)

        for validator in self.validators:
            sub_result = validator.validate(value, field_name)
            result.merge(sub_result)

            if self.stop_on_first_error and not sub_result.valid:
                break

        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def validate(
    value: Any,
    validators: Union[Validator, List[Validator]],
    field_name: str = "",
    stop_on_first_error: bool = False,
) -> ValidationResult:
    """
    Validate a value against one or more validators.
    """
    if isinstance(validators, Validator):
        return validators.validate(value, field_name)

    return All(*validators, stop_on_first_error=stop_on_first_error).validate(value, field_name)
