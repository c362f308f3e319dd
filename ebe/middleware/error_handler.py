"""
Centralized error handling.

Every error leaves the service as
``{"error": {"category", "message", "timestamp", "path", ...}}``.
Storage failures and unexpected exceptions are logged with their traceback
and returned with an opaque message.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ebe.core.exceptions import AppError, ErrorCategory

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def handle_app_error(error: AppError, request: Request) -> JSONResponse:
    """Handle structured application errors"""
    log = logger.error if error.status_code >= 500 else logger.warning
    log(
        f"Application error: {error.category} - {error.message}",
        extra={
            "category": error.category,
            "status_code": error.status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )

    headers = {}
    if error.retry_after:
        headers["Retry-After"] = str(error.retry_after)
    if error.category == ErrorCategory.AUTHENTICATION:
        headers["WWW-Authenticate"] = "Bearer"

    return JSONResponse(
        status_code=error.status_code,
        content={
            "error": {
                "category": error.category,
                "message": error.message,
                "timestamp": _timestamp(),
                "path": request.url.path,
                **error.details,
            }
        },
        headers=headers,
    )


_HTTP_STATUS_CATEGORIES = {
    401: ErrorCategory.AUTHENTICATION,
    403: ErrorCategory.FORBIDDEN,
    404: ErrorCategory.NOT_FOUND,
    429: ErrorCategory.RATE_LIMIT,
}


def handle_http_error(error: StarletteHTTPException, request: Request) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the same envelope."""
    if error.status_code in _HTTP_STATUS_CATEGORIES:
        category = _HTTP_STATUS_CATEGORIES[error.status_code]
    elif error.status_code < 500:
        category = ErrorCategory.VALIDATION
    else:
        category = ErrorCategory.INTERNAL

    logger.warning(
        f"HTTP {error.status_code} on {request.url.path}: {error.detail}",
        extra={"method": request.method},
    )

    return JSONResponse(
        status_code=error.status_code,
        content={
            "error": {
                "category": category,
                "message": str(error.detail),
                "timestamp": _timestamp(),
                "path": request.url.path,
            }
        },
        headers=getattr(error, "headers", None),
    )


def handle_validation_error(error: RequestValidationError, request: Request) -> JSONResponse:
    """Handle FastAPI validation errors (e.g. a missing userId)."""
    errors = []
    for err in error.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        })

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"errors": errors, "method": request.method},
    )

    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "category": ErrorCategory.VALIDATION,
                "message": "Validation failed",
                "timestamp": _timestamp(),
                "path": request.url.path,
                "validation_errors": errors,
            }
        },
    )


def handle_database_error(error: SQLAlchemyError, request: Request) -> JSONResponse:
    """Handle database errors"""
    is_connection_error = isinstance(error, OperationalError)
    is_integrity_error = isinstance(error, IntegrityError)

    if is_connection_error:
        message = "Database connection failed. Please try again."
    elif is_integrity_error:
        message = "Database constraint violation. Check your input data."
    else:
        message = "Database operation failed. Please try again."

    logger.error(
        f"Database error: {type(error).__name__}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "is_connection_error": is_connection_error,
            "is_integrity_error": is_integrity_error,
        },
        exc_info=error,
    )

    headers = {"Retry-After": "30"} if is_connection_error else {}

    return JSONResponse(
        status_code=503 if is_connection_error else 500,
        content={
            "error": {
                "category": ErrorCategory.DATABASE,
                "message": message,
                "timestamp": _timestamp(),
                "path": request.url.path,
            }
        },
        headers=headers,
    )


def handle_rate_limit_error(error: RateLimitExceeded, request: Request) -> JSONResponse:
    logger.warning(
        f"Rate limit exceeded on {request.url.path}: {error.detail}",
        extra={"method": request.method},
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "category": ErrorCategory.RATE_LIMIT,
                "message": f"Rate limit exceeded: {error.detail}",
                "timestamp": _timestamp(),
                "path": request.url.path,
            }
        },
        headers={"Retry-After": "60"},
    )


def handle_unexpected_error(error: Exception, request: Request) -> JSONResponse:
    """Handle unexpected errors"""
    logger.critical(
        f"Unexpected error: {type(error).__name__}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=error,
    )

    # Internal details stay in the logs.
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "category": ErrorCategory.INTERNAL,
                "message": "An unexpected error occurred.",
                "timestamp": _timestamp(),
                "path": request.url.path,
                "error_id": datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S"),
            }
        },
    )


# Exception handlers for FastAPI
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return handle_app_error(exc, request)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return handle_http_error(exc, request)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return handle_validation_error(exc, request)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    return handle_database_error(exc, request)


async def rate_limit_error_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return handle_rate_limit_error(exc, request)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return handle_unexpected_error(exc, request)
