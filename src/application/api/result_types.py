"""
Result Types for Application Commands

Structured return types for engine commands invoked from the UI layer.
"""
from dataclasses import dataclass, field
from typing import Optional, List, TypeVar, Generic
from enum import Enum


class ResultStatus(Enum):
    """Status of a command execution"""
    SUCCESS = "success"
    ERROR = "error"


T = TypeVar('T')


@dataclass
class CommandResult(Generic[T]):
    """
    Structured result from engine commands.

    - status: Success or error
    - message: Human-readable result message
    - data: Structured data (e.g. the Grid that was applied)
    - errors: Detailed error messages (validation failures)

    Examples:
        CommandResult[Grid] - Returns the applied grid
        CommandResult[None] - Returns no data
    """
    status: ResultStatus
    message: str
    data: Optional[T] = None
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if command was successful"""
        return self.status == ResultStatus.SUCCESS

    @property
    def failed(self) -> bool:
        """Check if command failed"""
        return self.status == ResultStatus.ERROR

    @classmethod
    def success_result(cls, message: str, data: T = None) -> 'CommandResult[T]':
        return cls(status=ResultStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error_result(cls, message: str, errors: List[str] = None) -> 'CommandResult[T]':
        """
        Create an error result.

        Args:
            message: Human-readable error message
            errors: List of detailed error messages

        Returns:
            CommandResult[T] with ERROR status and no data
        """
        return cls(status=ResultStatus.ERROR, message=message, errors=errors or [])
