"""Core taxonomy, classification, configuration and logging."""

from failtriage.core.config import CacheConfig, LogConfig, NegativeTestExpectation, TriageConfig
from failtriage.core.errors import Classification, ErrorCategory, ErrorClassifier, ErrorDetails

__all__ = [
    "CacheConfig",
    "Classification",
    "ErrorCategory",
    "ErrorClassifier",
    "ErrorDetails",
    "LogConfig",
    "NegativeTestExpectation",
    "TriageConfig",
]
