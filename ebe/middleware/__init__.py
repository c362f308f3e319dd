from .error_handler import (
    app_error_handler,
    database_error_handler,
    http_error_handler,
    rate_limit_error_handler,
    unexpected_error_handler,
    validation_error_handler,
)

__all__ = [
    "app_error_handler",
    "database_error_handler",
    "http_error_handler",
    "rate_limit_error_handler",
    "unexpected_error_handler",
    "validation_error_handler",
]
