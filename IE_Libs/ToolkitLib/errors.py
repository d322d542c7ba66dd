"""
Error kinds and operation results for toolkit operations.

Toolkit operations report failures as values instead of raising, so callers
can tell "could not parse this color" from "the scratch buffer could not be
allocated" by inspecting `OperationResult.error.kind`.

Classes:
    ErrorKind: The four failure kinds a toolkit operation can report
    ToolkitError: A failure kind with its message
    OperationResult: Success value or ToolkitError
    ToolkitOperationError: Exception raised by OperationResult.unwrap()
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    INVALID_COLOR_FORMAT = "InvalidColorFormat"
    RESOURCE_ALLOCATION_FAILED = "ResourceAllocationFailed"
    COPY_FAILED = "CopyFailed"
    CAPABILITY_UNAVAILABLE = "CapabilityUnavailable"


@dataclass(frozen=True)
class ToolkitError:
    """A reported failure.

    Attributes:
        kind: Which of the ErrorKind failures occurred
        message: Human-readable detail
        destination_modified: True only when a copy-back into the destination
                              failed midway and its content is indeterminate
    """
    kind: ErrorKind
    message: str
    destination_modified: bool = False


class ToolkitOperationError(RuntimeError):
    """Raised when a failed OperationResult is unwrapped."""

    def __init__(self, error: ToolkitError):
        super().__init__(f"{error.kind.value}: {error.message}")
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ToolkitError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        destination_modified: bool = False,
    ) -> "OperationResult":
        return cls(error=ToolkitError(kind, message, destination_modified))

    def unwrap(self) -> T:
        """
        Return the success value.

        Raises:
            ToolkitOperationError: If the result is a failure
        """
        if self.error is not None:
            raise ToolkitOperationError(self.error)
        return self.value
