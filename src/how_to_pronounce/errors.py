"""Error types for how-to-pronounce.

Every failure the user can see is a PronounceError subclass carrying a
category, so screens can render it inline without knowing where it came
from. None of them are retried automatically.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Categories of errors for display and handling decisions."""

    VALIDATION = "validation"  # Bad user input
    PERMISSION = "permission"  # Microphone access refused
    RECOGNITION = "recognition"  # Speech engine reported a failure
    CONFIGURATION = "configuration"  # Bad settings or missing backend
    INTERNAL = "internal"  # Bug in code


class PronounceError(Exception):
    """Base exception for how-to-pronounce errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information
    """

    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (context: {self.context})"
        return self.message


class EmptyWordError(PronounceError):
    """The submitted word was blank or whitespace only."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str = "Please enter a word.", context: dict | None = None):
        super().__init__(message, context)


class PermissionDeniedError(PronounceError):
    """Microphone or speech recognition permission was not granted."""

    category = ErrorCategory.PERMISSION

    def __init__(
        self,
        message: str = "Microphone or speech recognition permission not granted.",
        context: dict | None = None,
    ):
        super().__init__(message, context)


class RecognitionError(PronounceError):
    """The speech recognition engine reported an error."""

    category = ErrorCategory.RECOGNITION

    def __init__(self, message: str = "Speech recognition error", context: dict | None = None):
        super().__init__(message or "Speech recognition error", context)


class ConfigurationError(PronounceError):
    """Configuration error.

    Examples: unreadable settings file, no Whisper backend installed.
    """

    category = ErrorCategory.CONFIGURATION


def format_error_for_display(error: Exception) -> str:
    """Format an error message for user display.

    Args:
        error: Error to format

    Returns:
        Human-readable error message
    """
    if isinstance(error, PronounceError):
        category = error.category.value
        if error.context:
            context_str = ", ".join(f"{k}={v}" for k, v in error.context.items())
            return f"[{category}] {error.message} ({context_str})"
        return f"[{category}] {error.message}"

    return f"[error] {type(error).__name__}: {error}"
