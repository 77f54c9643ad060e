"""Exception types and failure categories shared across the package."""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    """Coarse classification of expected operation failures."""

    INPUT_ERROR = "input_error"
    RESOURCE_ERROR = "resource_error"
    SECURITY_FAILURE = "security_failure"
    BACKEND_ERROR = "backend_error"


class TpmkitError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(TpmkitError, ValueError):
    """Raised when a value object is constructed from invalid input."""


class TpmError(TpmkitError):
    """Expected failure of a TPM operation, tagged with its category."""

    def __init__(self, category: ErrorCategory, message: str) -> None:
        super().__init__(message)
        self.category = category

    def __repr__(self) -> str:
        return f"TpmError({self.category!r}, {self.message!r})"