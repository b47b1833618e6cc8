"""failtriage - error classification and capture for UI, API and DB test suites.

Turns whatever a catch block receives into a categorized, deduplicated,
structured log record.
"""

from failtriage.capture import (
    ApiErrorHandler,
    ErrorHandler,
    NegativeTestExpectations,
    capture_error,
    configure,
    get_error_message,
    log_and_throw,
)
from failtriage.core.config import TriageConfig
from failtriage.core.errors import (
    AbortError,
    CategorizedError,
    Classification,
    ErrorCategory,
    ErrorClassifier,
    ErrorDetails,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AbortError",
    "ApiErrorHandler",
    "CategorizedError",
    "Classification",
    "ErrorCategory",
    "ErrorClassifier",
    "ErrorDetails",
    "ErrorHandler",
    "NegativeTestExpectations",
    "TriageConfig",
    "capture_error",
    "configure",
    "get_error_message",
    "log_and_throw",
]
