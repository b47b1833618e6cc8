"""Error taxonomy, classification and message handling.

Re-exports all public symbols.
"""

from failtriage.core.errors.codes import (
    CATEGORY_STATUS_CODES,
    WARN_CATEGORIES,
    ErrorCategory,
    map_category_to_status_code,
)
from failtriage.core.errors.models import ApiErrorResponse, Classification, ErrorDetails
from failtriage.core.errors.exceptions import (
    AbortError,
    CategorizedError,
    ConfigError,
    TriageError,
    UnexpectedNegativeTestError,
)
from failtriage.core.errors.patterns import (
    NOT_FOUND_GROUP,
    PRIORITIZED_PATTERN_GROUPS,
    TIMEOUT_GROUP,
    PatternGroup,
    find_pattern_group,
    iter_pattern_groups,
)
from failtriage.core.errors.cache import MatchResultCache, PatternCache, match_cache_key
from failtriage.core.errors.messages import (
    extract_additional_details,
    get_error_message,
    sanitize_error_message,
    sanitize_error_object,
)
from failtriage.core.errors.normalize import ErrorKind, NormalizedError, normalize_error
from failtriage.core.errors.classifier import ErrorClassifier

__all__ = [
    "CATEGORY_STATUS_CODES",
    "WARN_CATEGORIES",
    "ErrorCategory",
    "map_category_to_status_code",
    "ApiErrorResponse",
    "Classification",
    "ErrorDetails",
    "AbortError",
    "CategorizedError",
    "ConfigError",
    "TriageError",
    "UnexpectedNegativeTestError",
    "NOT_FOUND_GROUP",
    "PRIORITIZED_PATTERN_GROUPS",
    "TIMEOUT_GROUP",
    "PatternGroup",
    "find_pattern_group",
    "iter_pattern_groups",
    "MatchResultCache",
    "PatternCache",
    "match_cache_key",
    "extract_additional_details",
    "get_error_message",
    "sanitize_error_message",
    "sanitize_error_object",
    "ErrorKind",
    "NormalizedError",
    "normalize_error",
    "ErrorClassifier",
]
