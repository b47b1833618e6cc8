"""Data models for error classification and capture.

This module provides:
- Classification: The (category, context) pair every classification produces
- ErrorDetails: Immutable structured record built per captured error
- ApiErrorResponse: Response-shaped record returned by the API facade
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple

from .codes import ErrorCategory


class Classification(NamedTuple):
    """Result of classifying one error value.

    Attributes:
        category: The semantic category.
        context: Short human-readable phrase for the failure family.
    """

    category: ErrorCategory
    context: str


@dataclass(frozen=True)
class ErrorDetails:
    """Structured record of one captured error.

    Created fresh per capture and never mutated. The category always comes
    from the classifier; the context may be overridden by the caller.
    """

    source: str
    """Call site that captured the error (e.g. "LoginPage.submit")."""

    context: str
    """Caller-supplied context, or the classifier's derived context."""

    message: str
    """Sanitized, single-line error message."""

    category: ErrorCategory

    timestamp: str
    """ISO-8601 UTC capture time."""

    environment: str
    """Deployment environment name (from ENV, default "dev")."""

    status_code: int | None = None
    """HTTP status extracted from the error, if any."""

    version: str | None = None
    """Application version (from APP_VERSION), if set."""

    details: dict[str, Any] | None = None
    """Payload carried by a typed application error, if any."""

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging, omitting unset optional fields."""
        result: dict[str, Any] = {
            "source": self.source,
            "context": self.context,
            "message": self.message,
            "category": self.category.value,
            "timestamp": self.timestamp,
            "environment": self.environment,
        }
        if self.status_code is not None:
            result["status_code"] = self.status_code
        if self.version is not None:
            result["version"] = self.version
        if self.details is not None:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class ApiErrorResponse:
    """Failure response produced by ApiErrorHandler.capture_error()."""

    error: str
    code: str
    """Category value, e.g. "NOT_FOUND_ERROR"."""

    status_code: int
    details: dict[str, Any] | None = None
    success: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "status_code": self.status_code,
        }
        if self.details is not None:
            result["details"] = self.details
        return result
