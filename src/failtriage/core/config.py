"""Configuration models for failtriage.

All settings have defaults, so a bare ``TriageConfig()`` or
``TriageConfig.from_env()`` is a working configuration. Files are YAML and
validated with pydantic.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from failtriage.core.constants import (
    DEFAULT_ENVIRONMENT,
    ENV_VAR_ENVIRONMENT,
    ENV_VAR_VERSION,
    MAX_MATCH_CACHE_SIZE,
    MAX_PATTERN_CACHE_SIZE,
)
from failtriage.core.errors.exceptions import ConfigError

if TYPE_CHECKING:
    from failtriage.capture.expectations import NegativeTestExpectations


class LogConfig(BaseModel):
    """Configuration for structured logging.

    Controls log level, output format, and file rotation settings.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level to capture",
    )
    format: Literal["json", "console", "both"] = Field(
        default="console",
        description="Output format: json for structured, console for human-readable, "
        "both for console to stderr and JSON to file",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path for log file output (required if format='both')",
    )
    max_file_size_mb: int = Field(
        default=50,
        gt=0,
        le=1000,
        description="Maximum log file size before rotation (MB)",
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Number of rotated log files to keep",
    )
    include_timestamps: bool = Field(
        default=True,
        description="Include ISO8601 UTC timestamps in log entries",
    )
    include_context: bool = Field(
        default=True,
        description="Include run context (run_id, test_name) in log entries",
    )

    @model_validator(mode="after")
    def _check_file_path_required(self) -> LogConfig:
        """Validate that file_path is set when format requires file output."""
        if self.format == "both" and self.file_path is None:
            raise ValueError(
                f"file_path is required when format='{self.format}'"
            )
        return self


class CacheConfig(BaseModel):
    """Bounds for the classifier's pattern and match-result caches."""

    pattern_cache_size: int = Field(
        default=MAX_PATTERN_CACHE_SIZE,
        gt=0,
        description="Maximum compiled regexes kept before FIFO eviction",
    )
    match_cache_size: int = Field(
        default=MAX_MATCH_CACHE_SIZE,
        gt=0,
        description="Maximum classification results kept before FIFO eviction",
    )


class NegativeTestExpectation(BaseModel):
    """One entry of the negative-test expectation table.

    A test whose name matches ``test`` (fnmatch syntax) is expected to fail
    with one of ``statuses``.
    """

    test: str = Field(min_length=1, description="Test name or fnmatch pattern")
    statuses: list[int] = Field(min_length=1, description="Expected HTTP statuses")

    @field_validator("statuses")
    @classmethod
    def _check_statuses(cls, value: list[int]) -> list[int]:
        for status in value:
            if not 100 <= status <= 599:
                raise ValueError(f"HTTP status out of range: {status}")
        return value


def _env_values(environ: Mapping[str, str] | None) -> dict[str, Any]:
    env = os.environ if environ is None else environ
    return {
        "environment": env.get(ENV_VAR_ENVIRONMENT) or DEFAULT_ENVIRONMENT,
        "version": env.get(ENV_VAR_VERSION) or None,
    }


class TriageConfig(BaseModel):
    """Top-level failtriage configuration."""

    environment: str = Field(
        default=DEFAULT_ENVIRONMENT,
        description="Environment name recorded on every error record",
    )
    version: str | None = Field(
        default=None,
        description="Application version recorded on every error record",
    )
    logging: LogConfig = Field(default_factory=LogConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    negative_tests: list[NegativeTestExpectation] = Field(default_factory=list)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> TriageConfig:
        """Build a config whose environment/version come from ENV and APP_VERSION.

        Missing or empty variables fall back to defaults; they never fail.
        """
        return cls.model_validate({**_env_values(environ), **overrides})

    @classmethod
    def from_yaml(cls, path: Path, environ: Mapping[str, str] | None = None) -> TriageConfig:
        """Load a config from a YAML file.

        Environment variables fill ``environment`` and ``version`` only when
        the file leaves them out.

        Raises:
            ConfigError: If the file is unreadable, not a mapping, or invalid.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        bad_keys = [key for key in data if not isinstance(key, str)]
        if bad_keys:
            raise ConfigError(f"Config file {path} has non-string keys: {bad_keys}")

        try:
            return cls.model_validate({**_env_values(environ), **data})
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e

    def expectations(self) -> NegativeTestExpectations:
        """Build the negative-test expectation table from this config."""
        from failtriage.capture.expectations import NegativeTestExpectations

        return NegativeTestExpectations(self.negative_tests)
