"""Structured logging infrastructure for failtriage.

Provides structured logging using structlog with test-run context such as
run_id, test_name, and component names. Supports console, JSON and rotating
file output.

Example usage:
    from failtriage.core.logging import get_logger, configure_logging, with_context

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("capture")

    # Log with auto-context
    logger.warning("error_captured", category="TIMEOUT_ERROR")

    # Correlate every log line emitted while a test runs
    ctx = RunContext(test_name="test_login_rejects_bad_password")
    with with_context(ctx):
        logger.info("expected_negative_test_failure")  # Includes run_id, test_name
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Sensitive field patterns that should never be logged
SENSITIVE_PATTERNS = frozenset({
    "api_key",
    "apikey",
    "api-key",
    "token",
    "secret",
    "password",
    "credential",
    "auth",
    "bearer",
    "authorization",
    "cookie",
})

REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class RunContext:
    """Immutable context for correlating log entries across a test run.

    Attributes:
        run_id: Unique run identifier (UUID), one per test session.
        test_name: Name of the test currently executing, if any.
        component: Component name for the current operation.
    """

    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    test_name: str | None = None
    component: str = "unknown"

    def to_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging (excludes None values)."""
        result: dict[str, Any] = {"run_id": self.run_id, "component": self.component}
        if self.test_name is not None:
            result["test_name"] = self.test_name
        return result


# Task-safe context variable for RunContext
_current_context: ContextVar[RunContext | None] = ContextVar(
    "failtriage_context", default=None
)


def get_current_context() -> RunContext | None:
    """Get the current RunContext if set."""
    return _current_context.get()


def set_context(ctx: RunContext) -> None:
    """Set the current RunContext.

    Generally prefer using `with_context()` for automatic cleanup.
    """
    _current_context.set(ctx)


def clear_context() -> None:
    """Clear the current RunContext."""
    _current_context.set(None)


@contextmanager
def with_context(ctx: RunContext) -> Iterator[RunContext]:
    """Context manager that sets RunContext for the duration of a block.

    Args:
        ctx: The RunContext to use for the block.

    Yields:
        The RunContext that was set.
    """
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def is_sensitive_key(key: str) -> bool:
    """Check whether a field name looks like it holds a secret."""
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in SENSITIVE_PATTERNS)


def _sanitize_value(key: str, value: Any) -> Any:
    """Sanitize potentially sensitive values.

    Args:
        key: The key/field name being logged.
        value: The value to potentially sanitize.

    Returns:
        Original value if safe, "[REDACTED]" if sensitive.
    """
    if is_sensitive_key(key):
        return REDACTED
    if isinstance(value, dict):
        return {str(k): _sanitize_value(str(k), v) for k, v in value.items()}
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that redacts sensitive fields, including nested dicts."""
    return {key: _sanitize_value(key, value) for key, value in event_dict.items()}


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds ISO8601 UTC timestamp."""
    event_dict.setdefault("timestamp", datetime.now(UTC).isoformat())
    return event_dict


def _add_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds RunContext fields to log entries.

    Fields from the context are only added if they are not already present
    in the event dict (explicit bindings take precedence).
    """
    ctx = get_current_context()
    if ctx is not None:
        for key, value in ctx.to_dict().items():
            if key not in event_dict:
                event_dict[key] = value
    return event_dict


class TriageLogger:
    """Logger wrapper around structlog bound to a component name.

    Uses lazy logger initialization so that loggers created at module import
    time still respect configuration set later via configure_logging().
    """

    def __init__(self, component: str, **initial_context: Any) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    def bind(self, **context: Any) -> TriageLogger:
        """Create a new logger with additional bound context."""
        new_logger = TriageLogger.__new__(TriageLogger)
        new_logger._component = self._component
        new_logger._context = {**self._context, **context}
        return new_logger

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)


def _build_processors(
    renderer: Processor,
    include_timestamps: bool,
    include_context: bool,
) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,  # Filter before processing
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]
    if include_context:
        processors.append(_add_context)
    if include_timestamps:
        processors.append(_add_timestamp)
    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ])
    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    format: Literal["json", "console", "both"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 50,
    backup_count: int = 5,
    include_timestamps: bool = True,
    include_context: bool = True,
) -> None:
    """Configure failtriage structured logging.

    Call once at startup (or from a pytest plugin/conftest) before logging.

    Args:
        level: Minimum log level to capture.
        format: "json" for structured, "console" for human-readable,
            "both" for console to stderr and a log file (requires file_path).
        file_path: Optional file path for log output. Required if format="both".
        max_file_size_mb: Maximum log file size before rotation (MB).
        backup_count: Number of rotated log files to keep.
        include_timestamps: Whether to include ISO8601 timestamps.
        include_context: Whether to include RunContext fields when set.

    Raises:
        ValueError: If format="both" but file_path is not provided.
    """
    if format == "both" and file_path is None:
        raise ValueError("file_path is required when format='both'")

    log_level = getattr(logging, level)
    handlers: list[logging.Handler] = []

    if format in ("console", "both"):
        handlers.append(logging.StreamHandler(sys.stderr))

    if format in ("json", "both"):
        if file_path is not None:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                RotatingFileHandler(
                    file_path,
                    maxBytes=max_file_size_mb * 1024 * 1024,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
            )
        else:
            # JSON to stdout if no file specified
            handlers.append(logging.StreamHandler(sys.stdout))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(log_level)
        root_logger.addHandler(handler)

    renderer: Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    # cache_logger_on_first_use=False so loggers created at import time
    # pick up configuration applied later
    structlog.configure(
        processors=_build_processors(renderer, include_timestamps, include_context),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> TriageLogger:
    """Get a logger for a component.

    Args:
        component: The component name (e.g., "capture", "classifier", "api").
        **initial_context: Additional context to bind.
    """
    return TriageLogger(component, **initial_context)


__all__ = [
    "REDACTED",
    "SENSITIVE_PATTERNS",
    "RunContext",
    "TriageLogger",
    "clear_context",
    "configure_logging",
    "get_current_context",
    "get_logger",
    "is_sensitive_key",
    "set_context",
    "with_context",
]
