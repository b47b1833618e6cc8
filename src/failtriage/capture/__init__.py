"""Error capture: the coordinator, its module-level facades and the API facade."""

from failtriage.capture.expectations import NegativeTestExpectations
from failtriage.capture.handler import (
    ErrorHandler,
    capture_error,
    configure,
    generate_error_cache_key,
    get_default_handler,
    get_error_message,
    log_and_throw,
    reset_default_handler,
    set_default_handler,
)
from failtriage.capture.api import ApiErrorHandler, categorize_status

__all__ = [
    "NegativeTestExpectations",
    "ErrorHandler",
    "capture_error",
    "configure",
    "generate_error_cache_key",
    "get_default_handler",
    "get_error_message",
    "log_and_throw",
    "reset_default_handler",
    "set_default_handler",
    "ApiErrorHandler",
    "categorize_status",
]
