"""Tests for the ErrorHandler capture/dedup coordinator and its facades."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from failtriage.capture import handler as handler_module
from failtriage.capture.handler import (
    ErrorHandler,
    capture_error,
    configure,
    generate_error_cache_key,
    get_default_handler,
    log_and_throw,
    reset_default_handler,
    set_default_handler,
)
from failtriage.core.config import CacheConfig, LogConfig, TriageConfig
from failtriage.core.errors.codes import ErrorCategory
from failtriage.core.errors.exceptions import AbortError, CategorizedError
from failtriage.core.errors.models import ErrorDetails

from tests.helpers import logged_events


class TestCreateErrorDetails:
    """Tests for ErrorHandler.create_error_details()."""

    def test_record_fields(self, handler: ErrorHandler) -> None:
        details = handler.create_error_details(TypeError("x is undefined"), "LoginPage.submit")

        assert details.source == "LoginPage.submit"
        assert details.category is ErrorCategory.TYPE
        assert details.context == "Type Error"
        assert details.message == "x is undefined"
        assert details.environment == "test"
        assert details.version == "1.2.3"
        assert details.status_code is None
        assert details.timestamp.endswith("+00:00")

    def test_caller_context_overrides_derived(self, handler: ErrorHandler) -> None:
        details = handler.create_error_details(
            TypeError("x is undefined"), "LoginPage.submit", "Submitting login form"
        )
        assert details.context == "Submitting login form"
        assert details.category is ErrorCategory.TYPE

    def test_status_code_carried(self, handler: ErrorHandler) -> None:
        details = handler.create_error_details({"response": {"status": 404}}, "UsersApi.get")
        assert details.status_code == 404
        assert details.context == "Not Found Error (404)"

    def test_typed_error_details_sanitized(self, handler: ErrorHandler) -> None:
        error = CategorizedError(
            "Order total mismatch",
            category=ErrorCategory.BUSINESS_RULE,
            details={"order_id": 42, "password": "hunter2"},
        )
        details = handler.create_error_details(error, "Checkout.total")
        assert details.details == {"order_id": 42, "password": "[REDACTED]"}

    def test_to_dict_omits_unset_fields(self) -> None:
        details = ErrorDetails(
            source="s",
            context="c",
            message="m",
            category=ErrorCategory.UNKNOWN,
            timestamp="2026-01-01T00:00:00+00:00",
            environment="dev",
        )
        assert details.to_dict() == {
            "source": "s",
            "context": "c",
            "message": "m",
            "category": "UNKNOWN_ERROR",
            "timestamp": "2026-01-01T00:00:00+00:00",
            "environment": "dev",
        }


class TestCaptureError:
    """Tests for ErrorHandler.capture_error()."""

    def test_logs_error_level(self, handler: ErrorHandler, mock_logger: MagicMock) -> None:
        handler.capture_error(TypeError("x is undefined"), "LoginPage.submit")

        mock_logger.error.assert_called_once()
        args, kwargs = mock_logger.error.call_args
        assert args == ("error_captured",)
        assert kwargs["category"] == "TYPE_ERROR"
        assert kwargs["source"] == "LoginPage.submit"
        assert kwargs["environment"] == "test"

    @pytest.mark.parametrize(
        "error",
        [
            "User record does not exist",
            {"status": 400, "message": "bad field"},
            {"status": 418},
            {"status": 429},
        ],
    )
    def test_benign_categories_log_warning(
        self, handler: ErrorHandler, mock_logger: MagicMock, error: object
    ) -> None:
        handler.capture_error(error, "Api.call")

        assert logged_events(mock_logger, "warning") == ["error_captured"]
        mock_logger.error.assert_not_called()

    def test_duplicates_logged_once(self, handler: ErrorHandler, mock_logger: MagicMock) -> None:
        handler.capture_error(TypeError("x is undefined"), "LoginPage.submit")
        handler.capture_error(TypeError("x is undefined"), "LoginPage.submit")

        assert logged_events(mock_logger, "error") == ["error_captured"]

    def test_different_source_is_not_duplicate(
        self, handler: ErrorHandler, mock_logger: MagicMock
    ) -> None:
        handler.capture_error(TypeError("x is undefined"), "LoginPage.submit")
        handler.capture_error(TypeError("x is undefined"), "SignupPage.submit")

        assert logged_events(mock_logger, "error") == ["error_captured", "error_captured"]

    def test_debug_details_and_duration(
        self, handler: ErrorHandler, mock_logger: MagicMock
    ) -> None:
        handler.capture_error({"message": "boom", "extra": "context"}, "Job.run")

        events = logged_events(mock_logger, "debug")
        assert "error_additional_details" in events
        assert "error_capture_duration" in events

    def test_never_raises(self, config: TriageConfig, mock_logger: MagicMock) -> None:
        classifier = MagicMock()
        classifier.classify.side_effect = RuntimeError("classifier exploded")
        handler = ErrorHandler(config=config, logger=mock_logger, classifier=classifier)

        handler.capture_error(ValueError("original"), "Job.run")

        args, kwargs = mock_logger.error.call_args
        assert args == ("error_handler_failure",)
        assert kwargs["context"] == "Error Handler Failure"
        assert kwargs["category"] == "UNKNOWN_ERROR"
        assert kwargs["message"] == "classifier exploded"

    def test_failing_logger_is_suppressed(self, config: TriageConfig) -> None:
        logger = MagicMock()
        logger.error.side_effect = RuntimeError("sink down")

        ErrorHandler(config=config, logger=logger).capture_error(ValueError("x"), "Job.run")

    def test_reset_forgets_logged_errors(
        self, handler: ErrorHandler, mock_logger: MagicMock
    ) -> None:
        handler.capture_error(TypeError("x is undefined"), "LoginPage.submit")
        handler.reset()
        handler.capture_error(TypeError("x is undefined"), "LoginPage.submit")

        assert logged_events(mock_logger, "error") == ["error_captured", "error_captured"]
        assert "error_handler_reset" in logged_events(mock_logger, "debug")


class TestCacheKey:
    """Tests for generate_error_cache_key()."""

    def test_key_format(self, handler: ErrorHandler) -> None:
        details = handler.create_error_details({"status": 404, "message": "m" * 40}, "Api.get")
        assert generate_error_cache_key(details) == f"Api.get_NOT_FOUND_ERROR_404_{'m' * 30}"

    def test_missing_status_is_zero(self, handler: ErrorHandler) -> None:
        details = handler.create_error_details("boom", "Job.run")
        assert handler.generate_error_cache_key(details) == "Job.run_UNKNOWN_ERROR_0_boom"

    def test_has_logged(self, handler: ErrorHandler) -> None:
        details = handler.create_error_details("boom", "Job.run")
        assert not handler.has_logged(details)
        handler.capture_error("boom", "Job.run")
        assert handler.has_logged(details)


class TestLogAndThrow:
    """Tests for log_and_throw()."""

    def test_logs_then_raises(self, handler: ErrorHandler, mock_logger: MagicMock) -> None:
        with pytest.raises(AbortError, match="Database unreachable") as exc_info:
            handler.log_and_throw("Database unreachable", "Setup.connect")

        assert exc_info.value.source == "Setup.connect"
        args, kwargs = mock_logger.error.call_args
        assert args == ("fatal_error",)
        assert kwargs["source"] == "Setup.connect"


class TestStats:
    """Tests for ErrorHandler.stats()."""

    def test_counts(self, handler: ErrorHandler) -> None:
        handler.capture_error("Browser has been closed", "Page.open")
        stats = handler.stats()

        assert stats["logged_errors"] == 1
        assert stats["match_cache"]["size"] == 1
        assert stats["pattern_cache"]["compiled"] > 0

    def test_cache_sizes_from_config(self, mock_logger: MagicMock) -> None:
        config = TriageConfig(cache=CacheConfig(pattern_cache_size=7, match_cache_size=9))
        handler = ErrorHandler(config=config, logger=mock_logger)

        assert handler.classifier.pattern_cache.max_size == 7
        assert handler.classifier.match_cache.max_size == 9


class TestDefaultHandler:
    """Tests for the module-level facades."""

    def test_lazily_created_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENV", "staging")
        monkeypatch.setenv("APP_VERSION", "9.9.9")
        reset_default_handler()

        default = get_default_handler()
        assert default is get_default_handler()
        assert default.config.environment == "staging"
        assert default.config.version == "9.9.9"

    def test_environment_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("APP_VERSION", raising=False)
        reset_default_handler()

        assert get_default_handler().config.environment == "dev"
        assert get_default_handler().config.version is None

    def test_facades_use_default(self, handler: ErrorHandler, mock_logger: MagicMock) -> None:
        set_default_handler(handler)

        capture_error(TypeError("x is undefined"), "LoginPage.submit")
        with pytest.raises(AbortError):
            log_and_throw("fatal", "Setup")

        assert logged_events(mock_logger, "error") == ["error_captured", "fatal_error"]

    def test_reset_drops_default(self, handler: ErrorHandler) -> None:
        set_default_handler(handler)
        reset_default_handler()
        assert handler_module._default_handler is None

    def test_configure_applies_logging_and_installs_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "failtriage.log"
        config = TriageConfig(
            environment="qa",
            logging=LogConfig(level="DEBUG", format="json", file_path=log_file),
        )

        installed = configure(config)

        assert get_default_handler() is installed
        assert installed.config is config
        assert logging.getLogger().level == logging.DEBUG

        capture_error(TypeError("x is undefined"), "LoginPage.submit")
        for log_handler in logging.getLogger().handlers:
            log_handler.flush()
        assert "error_captured" in log_file.read_text()

    def test_configure_rejects_unusable_logging(self) -> None:
        config = TriageConfig.model_construct(logging=LogConfig.model_construct(format="both"))
        with pytest.raises(ValueError, match="file_path is required"):
            configure(config)
