"""Exceptions raised by Sinric Pro API clients."""
from __future__ import annotations


class SinricProApiError(Exception):
    """Base exception for Sinric Pro API errors."""

    def __init__(self, message: str, code: int | None = None) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self.code = code


class SinricProAuthError(SinricProApiError):
    """Authentication failure - invalid or expired credentials."""

    def __init__(self, message: str = "Invalid API key") -> None:
        """Initialize auth error."""
        super().__init__(message, code=401)


class SinricProConnectionError(SinricProApiError):
    """Connection error - network issues."""

    def __init__(self, message: str = "Failed to connect to Sinric Pro API") -> None:
        """Initialize connection error."""
        super().__init__(message)
