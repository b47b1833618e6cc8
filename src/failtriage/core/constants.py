"""Global constants for failtriage.

Centralizes magic numbers and fixed strings used throughout the codebase,
making them discoverable, consistent, and easy to modify.
"""

# =============================================================================
# Cache Bounds
# =============================================================================

MAX_PATTERN_CACHE_SIZE = 100
"""Maximum compiled regexes held by the pattern cache before FIFO eviction."""

MAX_MATCH_CACHE_SIZE = 500
"""Maximum classification results held by the match-result cache."""

MATCH_CACHE_KEY_PREFIX_CHARS = 50
"""Characters of the lowercased message used in the match-result digest."""

# =============================================================================
# Capture / Dedup
# =============================================================================

DEDUP_MESSAGE_PREFIX_CHARS = 30
"""Characters of the message included in the per-run dedup key."""

# =============================================================================
# Sanitization Limits
# =============================================================================

SANITIZE_MAX_STRING_CHARS = 1000
"""Strings longer than this are truncated when sanitizing error objects."""

SANITIZE_MAX_DEPTH = 5
"""Nesting depth beyond which sanitized error objects are elided."""

SANITIZE_SKIPPED_KEYS = frozenset({"stack", "traceback", "__traceback__"})
"""Keys dropped from sanitized error objects (stack traces are logged separately)."""

# =============================================================================
# Message Extraction
# =============================================================================

MESSAGE_KEYS: tuple[str, ...] = ("message", "error", "description", "detail")
"""Properties read, in order, for a message on non-exception error values."""

RESPONSE_MESSAGE_KEYS: tuple[str, ...] = ("message", "error", "detail", "description")
"""Keys read, in order, for a message in an HTTP response body."""

# =============================================================================
# Framework Detection
# =============================================================================

FRAMEWORK_MESSAGE_KEYWORDS: tuple[str, ...] = ("playwright", "locator", "page.", "expect(")
"""Lowercased message fragments that mark an error as raised by the automation layer."""

FRAMEWORK_MODULE_MARKER = "playwright"
"""Module/traceback fragment that marks an error as raised by the automation layer."""

# =============================================================================
# Environment
# =============================================================================

ENV_VAR_ENVIRONMENT = "ENV"
"""Environment variable naming the deployment environment."""

ENV_VAR_VERSION = "APP_VERSION"
"""Environment variable carrying the application version."""

DEFAULT_ENVIRONMENT = "dev"
"""Environment recorded when ENV is not set."""

# =============================================================================
# Fallback Contexts
# =============================================================================

GENERAL_ERROR_CONTEXT = "General Error"
"""Context for unclassifiable values with no usable name."""

NOT_FOUND_CONTEXT = "Not Found Error"
"""Context of the terminal not-found catch-all group."""

HANDLER_FAILURE_CONTEXT = "Error Handler Failure"
"""Context recorded when capturing an error itself fails."""

UNKNOWN_MATCHER_NAME = "Unknown"
"""Matcher name used when a framework error carries none."""
