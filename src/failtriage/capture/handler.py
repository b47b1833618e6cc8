"""Capture/dedup coordinator: the entry point every catch block calls.

ErrorHandler builds an ErrorDetails record for a failure, suppresses repeats
of the same failure within a run, and logs the record. capture_error() never
raises; log_and_throw() is the one call whose contract is to raise.

Example:
    from failtriage import capture_error

    try:
        page.locator("#submit").click()
    except Exception as e:
        capture_error(e, "LoginPage.submit")
        raise
"""

from __future__ import annotations

import contextlib
import time
from datetime import UTC, datetime
from typing import Any, NoReturn

from failtriage.core.config import TriageConfig
from failtriage.core.constants import DEDUP_MESSAGE_PREFIX_CHARS, HANDLER_FAILURE_CONTEXT
from failtriage.core.errors.cache import MatchResultCache, PatternCache
from failtriage.core.errors.classifier import ErrorClassifier
from failtriage.core.errors.codes import WARN_CATEGORIES, ErrorCategory
from failtriage.core.errors.exceptions import AbortError, CategorizedError
from failtriage.core.errors.messages import (
    extract_additional_details,
    get_error_message,
    sanitize_error_object,
)
from failtriage.core.errors.models import Classification, ErrorDetails
from failtriage.core.errors.normalize import normalize_error
from failtriage.core.logging import TriageLogger, configure_logging, get_logger


def generate_error_cache_key(details: ErrorDetails) -> str:
    """Build the dedup key identifying "the same failure" within a run."""
    return (
        f"{details.source}_{details.category.value}_{details.status_code or 0}_"
        f"{details.message[:DEDUP_MESSAGE_PREFIX_CHARS]}"
    )


class ErrorHandler:
    """Owns the classifier, its caches and the set of already-logged failures.

    One instance per process or test run. reset() returns it to a clean
    state between runs.
    """

    def __init__(
        self,
        config: TriageConfig | None = None,
        logger: TriageLogger | None = None,
        classifier: ErrorClassifier | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            config: Settings; defaults to TriageConfig.from_env().
            logger: Log sink; defaults to the "capture" component logger.
            classifier: Classifier; defaults to one with caches sized by config.
        """
        self.config = config if config is not None else TriageConfig.from_env()
        self._logger = logger if logger is not None else get_logger("capture")
        if classifier is None:
            classifier = ErrorClassifier(
                PatternCache(self.config.cache.pattern_cache_size),
                MatchResultCache(self.config.cache.match_cache_size),
            )
        self.classifier = classifier
        self._logged_errors: set[str] = set()

    def categorize(self, error: object) -> Classification:
        return self.classifier.categorize(error)

    def create_error_details(
        self,
        error: object,
        source: str,
        context: str | None = None,
    ) -> ErrorDetails:
        """Build the structured record for an error.

        A caller-supplied context replaces the derived one; the category
        always comes from the classifier.
        """
        normalized = normalize_error(error)
        classification = self.classifier.classify(normalized)

        details: dict[str, Any] | None = None
        if isinstance(error, CategorizedError) and error.details:
            details = sanitize_error_object(error.details)

        return ErrorDetails(
            source=source,
            context=context or classification.context,
            message=normalized.message,
            category=classification.category,
            status_code=normalized.status_code,
            timestamp=datetime.now(UTC).isoformat(),
            environment=self.config.environment,
            version=self.config.version,
            details=details,
        )

    def capture_error(self, error: object, source: str, context: str | None = None) -> None:
        """Classify, deduplicate and log a failure. Never raises.

        Args:
            error: Whatever was caught.
            source: Call site identifier, e.g. "CheckoutPage.pay".
            context: Optional description overriding the derived context.
        """
        start = time.perf_counter()
        try:
            details = self.create_error_details(error, source, context)
            cache_key = generate_error_cache_key(details)
            if cache_key in self._logged_errors:
                return
            self._logged_errors.add(cache_key)

            if details.category in WARN_CATEGORIES:
                self._logger.warning("error_captured", **details.to_dict())
            else:
                self._logger.error("error_captured", **details.to_dict())

            extra = extract_additional_details(error)
            if extra:
                self._logger.debug("error_additional_details", source=source, details=extra)

            self._logger.debug(
                "error_capture_duration",
                source=source,
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
            )
        except Exception as e:
            self._log_handler_failure(e, source)

    def _log_handler_failure(self, failure: Exception, source: str) -> None:
        # Last resort: capture_error must never become a new test failure
        with contextlib.suppress(Exception):
            self._logger.error(
                "error_handler_failure",
                source=source,
                context=HANDLER_FAILURE_CONTEXT,
                message=get_error_message(failure),
                category=ErrorCategory.UNKNOWN.value,
                timestamp=datetime.now(UTC).isoformat(),
            )

    def log_and_throw(self, message: str, source: str) -> NoReturn:
        """Log a fatal setup failure, then abort.

        Raises:
            AbortError: Always, carrying the message and source.
        """
        self._logger.error(
            "fatal_error",
            source=source,
            message=message,
            environment=self.config.environment,
        )
        raise AbortError(message, source=source)

    def get_error_message(self, error: object) -> str:
        return get_error_message(error)

    def generate_error_cache_key(self, details: ErrorDetails) -> str:
        return generate_error_cache_key(details)

    def has_logged(self, details: ErrorDetails) -> bool:
        """Check whether an equivalent failure was already logged this run."""
        return generate_error_cache_key(details) in self._logged_errors

    def stats(self) -> dict[str, Any]:
        """Get dedup and cache counters for diagnostics."""
        return {
            "logged_errors": len(self._logged_errors),
            "pattern_cache": self.classifier.pattern_cache.stats(),
            "match_cache": self.classifier.match_cache.stats(),
        }

    def reset(self) -> None:
        """Forget logged failures and clear both caches."""
        self._logger.debug("error_handler_reset", **self.stats())
        self._logged_errors.clear()
        self.classifier.pattern_cache.clear()
        self.classifier.match_cache.clear()


# Lazily built process-wide handler used by the module-level facades
_default_handler: ErrorHandler | None = None


def get_default_handler() -> ErrorHandler:
    """Get the process-wide handler, creating it from the environment on first use."""
    global _default_handler
    if _default_handler is None:
        _default_handler = ErrorHandler()
    return _default_handler


def set_default_handler(handler: ErrorHandler) -> None:
    """Replace the process-wide handler (e.g. with one built from a config file)."""
    global _default_handler
    _default_handler = handler


def reset_default_handler() -> None:
    """Drop the process-wide handler; the next facade call builds a fresh one."""
    global _default_handler
    _default_handler = None


def configure(config: TriageConfig) -> ErrorHandler:
    """Apply a loaded configuration process-wide.

    Configures logging from ``config.logging`` and installs a fresh default
    handler built from ``config``.

    Example:
        configure(TriageConfig.from_yaml(Path("failtriage.yaml")))

    Raises:
        ValueError: If the logging section cannot be applied.
    """
    configure_logging(**config.logging.model_dump())
    handler = ErrorHandler(config=config)
    set_default_handler(handler)
    return handler


def capture_error(error: object, source: str, context: str | None = None) -> None:
    """Capture a failure through the process-wide handler. Never raises."""
    get_default_handler().capture_error(error, source, context)


def log_and_throw(message: str, source: str) -> NoReturn:
    """Log a fatal failure through the process-wide handler, then raise AbortError."""
    get_default_handler().log_and_throw(message, source)
