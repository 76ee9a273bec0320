"""
Application API Layer

Result types shared by engine commands and the Qt UI.
"""
from .result_types import CommandResult, ResultStatus

__all__ = [
    "CommandResult",
    "ResultStatus",
]
