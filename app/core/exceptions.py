"""Custom exception classes for the application."""
from typing import Any, List, Optional


class AppException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, detail: Any = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(AppException):
    """Resource not found."""
    pass


class ValidationError(AppException):
    """Data validation error. Carries every failed rule, not just the first."""

    def __init__(self, message: str, errors: Optional[List[str]] = None, detail: Any = None):
        self.errors = errors or [message]
        super().__init__(message, detail)


class UnsupportedLanguageError(AppException):
    """Language outside of the supported en/ar pair."""
    pass


class LanguageStorageError(AppException):
    """The language preference could not be persisted."""
    pass


class MediaStorageError(AppException):
    """An uploaded media file could not be written."""
    pass
