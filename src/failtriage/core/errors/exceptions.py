"""Exception hierarchy for failtriage.

All library exceptions inherit from TriageError, enabling callers to catch
broad (TriageError) or narrow (e.g., AbortError). CategorizedError is also
the typed application error collaborators raise to state a category
explicitly instead of relying on heuristics.
"""

from __future__ import annotations

from typing import Any

from .codes import ErrorCategory


class TriageError(Exception):
    """Base exception for all failtriage errors."""


class ConfigError(TriageError):
    """Raised when a configuration file cannot be read or fails validation."""


class AbortError(TriageError):
    """Raised by log_and_throw() after the failure has been logged.

    Used at setup-style call sites that must stop immediately.
    """

    def __init__(self, message: str, source: str) -> None:
        super().__init__(message)
        self.source = source


class CategorizedError(TriageError):
    """Application error carrying an explicit category.

    The classifier trusts the category directly once the type, code,
    framework, status and timeout stages have had their turn.

    Example:
        raise CategorizedError(
            "Order total mismatch",
            category=ErrorCategory.BUSINESS_RULE,
            details={"order_id": 42},
        )
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory | str = ErrorCategory.UNKNOWN,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.category = ErrorCategory.from_value(category)
        self.details = details


class UnexpectedNegativeTestError(TriageError):
    """Raised when a negative test fails unexpectedly with a non-exception value."""
