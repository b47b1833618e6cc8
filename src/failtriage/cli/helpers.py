"""Shared state and utilities for failtriage CLI commands.

Global CLI options (--log-level, --log-format) are recorded here by the app
callbacks and applied once by configure_global_logging().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from failtriage.core.errors import ErrorCategory
from failtriage.core.logging import configure_logging, get_logger

_logger = get_logger("cli")


@dataclass
class CliLoggingConfig:
    """CLI logging configuration collected from global options."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "console"] = "console"
    configured: bool = False


_log_config = CliLoggingConfig()


def set_log_level(level: str) -> None:
    """Set the log level.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).
    """
    _log_config.level = level.upper()  # type: ignore[assignment]


def set_log_format(fmt: str) -> None:
    """Set the log format.

    Args:
        fmt: Log format string (json or console).
    """
    _log_config.format = fmt.lower()  # type: ignore[assignment]


def configure_global_logging() -> None:
    """Configure logging from the global CLI options, once per session."""
    if _log_config.configured:
        return

    configure_logging(level=_log_config.level, format=_log_config.format)
    _log_config.configured = True


def reset_logging_state() -> None:
    """Reset CLI logging state (primarily for testing)."""
    _log_config.level = "WARNING"
    _log_config.format = "console"
    _log_config.configured = False


def build_error_value(
    message: str,
    name: str | None = None,
    code: str | None = None,
    status: int | None = None,
) -> dict[str, Any]:
    """Assemble an error-shaped mapping from command-line fields."""
    error: dict[str, Any] = {"message": message}
    if name:
        error["name"] = name
    if code:
        error["code"] = code
    if status is not None:
        error["status"] = status
    return error


def resolve_category(value: str) -> ErrorCategory | None:
    """Resolve a category argument; None when it names no category.

    Unlike ErrorCategory.from_value this does not fall back to UNKNOWN, so
    a typo is reported rather than silently matched.
    """
    category = ErrorCategory.from_value(value)
    if category is ErrorCategory.UNKNOWN and value.strip().upper() not in ("UNKNOWN", "UNKNOWN_ERROR"):
        _logger.debug("unknown_category_argument", value=value)
        return None
    return category
