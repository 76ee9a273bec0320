"""
Unit tests for the shared validation framework.
"""
import pytest

from src.shared.application.validation import (
    All,
    ChoicesValidator,
    PatternValidator,
    RangeValidator,
    TypeValidator,
    ValidationError,
    ValidationResult,
    validate,
)


class TestValidationResult:

    def test_add_error_prefixes_field(self):
        result = ValidationResult(field_name="cols")
        result.add_error("must be at least 1")
        assert not result.valid
        assert result.errors == ["cols: must be at least 1"]

    def test_merge(self):
        result = ValidationResult()
        other = ValidationResult()
        other.add_error("bad")
        result.merge(other)
        assert not result.valid
        assert result.errors == ["bad"]

    def test_raise_if_invalid_uses_error_class(self):
        class GridProblem(ValidationError):
            pass

        result = ValidationResult()
        result.add_error("a")
        result.add_error("b")
        with pytest.raises(GridProblem) as exc_info:
            result.raise_if_invalid(GridProblem)
        assert str(exc_info.value) == "a; b"

    def test_raise_if_invalid_passes_when_valid(self):
        ValidationResult().raise_if_invalid()


class TestValidators:

    def test_range(self):
        assert RangeValidator(min_value=1).validate(1).valid
        assert not RangeValidator(min_value=1).validate(0).valid
        assert not RangeValidator(max_value=10).validate(11).valid
        assert not RangeValidator(min_value=1).validate("x").valid

    def test_pattern(self):
        color = PatternValidator(r"^#[0-9a-f]{6}$", "must be a color")
        assert color.validate("#00ff00").valid
        assert color.validate("green", "fill").errors == ["fill: must be a color"]
        assert not color.validate(5).valid

    def test_choices(self):
        assert ChoicesValidator(["fit", "fill"]).validate("fit").valid
        assert not ChoicesValidator(["fit", "fill"]).validate("zoom").valid

    def test_type_rejects_bool_for_int(self):
        assert TypeValidator(int).validate(5).valid
        assert not TypeValidator(int).validate(True).valid
        assert TypeValidator((int, bool)).validate(True).valid
        assert not TypeValidator(int).validate(5.0).valid

    def test_none_is_skipped(self):
        for validator in (RangeValidator(min_value=1), PatternValidator("x"),
                          ChoicesValidator([1]), TypeValidator(int)):
            assert validator.validate(None).valid

    def test_all_stop_on_first_error(self):
        validators = [TypeValidator(int), RangeValidator(min_value=1)]
        assert len(All(*validators).validate("x").errors) == 2
        assert len(All(*validators, stop_on_first_error=True).validate("x").errors) == 1

    def test_validate_helper(self):
        assert validate(5, RangeValidator(min_value=1)).valid
        result = validate(0, [TypeValidator(int), RangeValidator(min_value=1)], field_name="rows")
        assert result.errors == ["rows: must be at least 1"]
