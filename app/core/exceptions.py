"""
Application error taxonomy.

Every error raised by the service or API layer derives from ``AppError`` and
carries the HTTP status it maps to. The handlers registered in ``app.main``
render them into the standard response envelope.
"""

from typing import Dict, List, Optional

from fastapi import status


class AppError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    """Field-level, user-correctable input error."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "The given data was invalid"

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        super().__init__(message, errors)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "This action is unauthorized"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"
