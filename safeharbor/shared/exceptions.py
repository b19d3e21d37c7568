"""Caller-facing validation errors.

Every error names the offending field so the HTTP layer can return it
verbatim in a 400 response.
"""
from typing import Any, Optional


class SafeHarborValidationError(ValueError):
    """Base class for input validation failures."""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict:
        return {"error": str(self), "field": self.field}


class InvalidResponseValue(SafeHarborValidationError):
    """Response outside the allowed range for its question kind."""

    def __init__(self, question_id: str, value: Any, allowed: Optional[str] = None):
        message = f"response {value!r} out of range"
        if allowed:
            message = f"{message} (allowed: {allowed})"
        super().__init__(question_id, message, value)


class ResponseTypeError(SafeHarborValidationError, TypeError):
    """Field has the wrong Python type."""

    def __init__(self, field: str, value: Any, expected: str):
        super().__init__(
            field,
            f"expected {expected}, got {type(value).__name__}",
            value,
        )


class InvalidMoodEntry(SafeHarborValidationError):
    """Mood entry field is missing or outside its range."""
