# ebe/core/exceptions.py
"""
Application error hierarchy.

Services raise these; the handlers in ebe.middleware.error_handler turn
them into structured JSON responses.
"""

from typing import Optional


class ErrorCategory:
    """Error categories for structured error handling"""
    VALIDATION = "validation_error"
    DATABASE = "database_error"
    AUTHENTICATION = "authentication_error"
    FORBIDDEN = "forbidden_error"
    NOT_FOUND = "not_found_error"
    RATE_LIMIT = "rate_limit_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = 500,
        details: Optional[dict] = None,
        retry_after: Optional[int] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        self.retry_after = retry_after
        super().__init__(self.message)


class NotFoundError(AppError):
    """A meeting or waiting-room record does not exist."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            status_code=404,
            details=details,
        )


class ForbiddenError(AppError):
    """Caller is not a member, or lacks the role for the operation."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.FORBIDDEN,
            status_code=403,
            details=details,
        )


class ValidationError(AppError):
    """Validation errors"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=400,
            details=details,
        )


class AuthenticationError(AppError):
    """Missing, malformed or expired bearer token."""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHENTICATION,
            status_code=401,
        )


class DatabaseError(AppError):
    """Database-related errors"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.DATABASE,
            status_code=503,
            details=details,
            retry_after=30,
        )
