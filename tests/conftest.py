"""Pytest fixtures for failtriage tests."""

import logging
from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
import structlog

from failtriage.capture.handler import ErrorHandler, reset_default_handler
from failtriage.core.config import TriageConfig
from failtriage.core.errors.cache import MatchResultCache, PatternCache
from failtriage.core.errors.classifier import ErrorClassifier
from failtriage.core.logging import clear_context


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset logging state before and after each test.

    This ensures test isolation for logging configuration.
    """
    import failtriage.cli.helpers as cli_helpers

    cli_helpers.reset_logging_state()

    # Reset structlog to default state
    structlog.reset_defaults()

    # Clear all handlers from root logger
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    cli_helpers.reset_logging_state()
    structlog.reset_defaults()
    clear_context()
    reset_default_handler()

    # Restore original handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def classifier() -> ErrorClassifier:
    """Classifier whose pattern cache holds the whole registry.

    The default bound is smaller than the registry, so warm-cache
    assertions need the larger cache.
    """
    return ErrorClassifier(PatternCache(max_size=1000), MatchResultCache())


@pytest.fixture
def config() -> TriageConfig:
    """Config with a fixed environment and version."""
    return TriageConfig(environment="test", version="1.2.3")


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double recording every call."""
    return MagicMock()


@pytest.fixture
def handler(config: TriageConfig, mock_logger: MagicMock) -> ErrorHandler:
    """ErrorHandler wired to a mock logger."""
    return ErrorHandler(config=config, logger=mock_logger)
