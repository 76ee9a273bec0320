"""
Shared module containing cross-cutting concerns.

Structure:
    shared/
        application/
            validation/     - Validation framework for settings and user input

Usage:
    from src.shared.application.validation import validate, RangeValidator
"""
