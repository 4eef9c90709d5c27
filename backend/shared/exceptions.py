"""
Base exception classes for the Mentor GPT backend.

Each module defines its own exceptions that inherit from these bases.
The API layer turns them into HTTP responses through ``to_dict()``.
"""

from typing import Optional, Any


class MentorError(Exception):
    """
    Base exception for all Mentor GPT errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(MentorError):
    """Resource not found."""

    status_code = 404


class ValidationError(MentorError):
    """Input validation failed."""

    status_code = 400


class ExternalServiceError(MentorError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
