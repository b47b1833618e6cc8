"""ErrorClassifier: maps any error value to a (category, context) pair.

Classification runs a fixed sequence of stages over a NormalizedError. The
first decisive stage wins; later stages exist to catch what earlier, cheaper
ones miss, so their order is part of the observable behavior:

1. Native runtime error type (TypeError, ReferenceError, ...)
2. OS-style system error code (ENOENT, ECONNREFUSED, ...)
3. Automation-framework heuristic -> prioritized pattern scan
4. HTTP status, then HTTP-layer message hints
5. Timeout patterns
6. Typed application error carrying an explicit category
7. Free-text prioritized scan, then the not-found catch-all
8. UNKNOWN
"""

from __future__ import annotations

from failtriage.core.constants import GENERAL_ERROR_CONTEXT, UNKNOWN_MATCHER_NAME
from failtriage.core.logging import get_logger

from .cache import MatchResultCache, PatternCache, match_cache_key
from .codes import ErrorCategory
from .models import Classification
from .normalize import ErrorKind, NormalizedError, normalize_error
from .patterns import (
    HTTP_MESSAGE_HINTS,
    HTTP_STATUS_CATEGORIES,
    MATCHER_NAME_HINTS,
    NATIVE_ERROR_TYPES,
    NOT_FOUND_GROUP,
    PRIORITIZED_PATTERN_GROUPS,
    SYSTEM_ERROR_CODES,
    TIMEOUT_GROUP,
    PatternGroup,
)

# Module-level logger for error classification
_logger = get_logger("classifier")


class ErrorClassifier:
    """Classifies error values using lookup tables and the pattern registry.

    The classifier owns (or is handed) its pattern and match-result caches,
    so independent instances never share state.
    """

    def __init__(
        self,
        pattern_cache: PatternCache | None = None,
        match_cache: MatchResultCache | None = None,
    ) -> None:
        self.pattern_cache = pattern_cache if pattern_cache is not None else PatternCache()
        self.match_cache = match_cache if match_cache is not None else MatchResultCache()

    def categorize(self, error: object) -> Classification:
        """Classify any value. Never raises.

        Args:
            error: Exception, string, mapping, HTTP client error, None, ...

        Returns:
            Exactly one (category, context) pair.
        """
        try:
            return self.classify(normalize_error(error))
        except Exception as e:
            _logger.debug("classification_failed", error=str(e), error_type=type(e).__name__)
            return Classification(ErrorCategory.UNKNOWN, GENERAL_ERROR_CONTEXT)

    def classify(self, normalized: NormalizedError) -> Classification:
        """Classify an already-normalized error. Never raises."""
        try:
            result, stage = self._run_stages(normalized)
        except Exception as e:
            _logger.debug("classification_failed", error=str(e), error_type=type(e).__name__)
            return Classification(ErrorCategory.UNKNOWN, GENERAL_ERROR_CONTEXT)
        _logger.debug(
            "error_classified",
            category=result.category.value,
            context=result.context,
            stage=stage,
            kind=normalized.kind.value,
        )
        return result

    def _run_stages(self, n: NormalizedError) -> tuple[Classification, str]:
        if n.kind is ErrorKind.NATIVE and n.name is not None:
            return Classification(*NATIVE_ERROR_TYPES[n.name]), "native_type"

        if n.kind is ErrorKind.SYSTEM and n.code is not None:
            return Classification(*SYSTEM_ERROR_CODES[n.code]), "system_code"

        if n.is_framework:
            return self._classify_framework_error(n), "framework"

        http_result = self._classify_http(n)
        if http_result is not None:
            return http_result, "http"

        if self.matches_group(n.message.lower(), TIMEOUT_GROUP):
            return Classification(TIMEOUT_GROUP.category, TIMEOUT_GROUP.context), "timeout"

        if n.category is not None:
            return Classification(n.category, f"App Error: {n.category.value}"), "app_error"

        scanned = self.scan(n.message)
        if scanned is not None:
            return scanned, "message_scan"
        if self.matches_group(n.message.lower(), NOT_FOUND_GROUP):
            return Classification(NOT_FOUND_GROUP.category, NOT_FOUND_GROUP.context), "not_found"

        context = f"{n.name} Error" if n.name else GENERAL_ERROR_CONTEXT
        return Classification(ErrorCategory.UNKNOWN, context), "fallback"

    def matches_group(self, text: str, group: PatternGroup) -> bool:
        """Check whether any of a group's patterns matches text."""
        for source in group.patterns:
            if self.pattern_cache.get_pattern(source).search(text):
                return True
        return False

    def scan(self, message: str) -> Classification | None:
        """Run the prioritized pattern groups over a message.

        Positive results are memoized by match_cache_key(); a message whose
        digest is cached returns the cached result without touching any
        pattern.
        """
        key = match_cache_key(message)
        cached = self.match_cache.lookup(key)
        if cached is not None:
            return cached

        lowered = message.lower()
        for group in PRIORITIZED_PATTERN_GROUPS:
            if self.matches_group(lowered, group):
                result = Classification(group.category, group.context)
                self.match_cache.store(key, result)
                return result
        return None

    def _classify_framework_error(self, n: NormalizedError) -> Classification:
        scanned = self.scan(n.message)
        if scanned is not None:
            return scanned

        matcher_name = n.matcher_name
        if matcher_name:
            lowered = matcher_name.lower()
            for group in PRIORITIZED_PATTERN_GROUPS:
                if self.matches_group(lowered, group):
                    return Classification(group.category, group.context)
            for fragment, group in MATCHER_NAME_HINTS:
                if fragment in lowered:
                    return Classification(group.category, group.context)

        return Classification(
            ErrorCategory.TEST,
            f"Playwright Test Error: {matcher_name or UNKNOWN_MATCHER_NAME}",
        )

    @staticmethod
    def _classify_http(n: NormalizedError) -> Classification | None:
        status = n.status_code
        if status is not None:
            known = HTTP_STATUS_CATEGORIES.get(status)
            if known is not None:
                category, label = known
                return Classification(category, f"{label} ({status})")
            if 400 <= status < 500:
                return Classification(ErrorCategory.HTTP_CLIENT, f"Client Error ({status})")
            if 500 <= status < 600:
                return Classification(ErrorCategory.HTTP_SERVER, f"Server Error ({status})")

        lowered = n.message.lower()
        for fragments, category, context in HTTP_MESSAGE_HINTS:
            if any(fragment in lowered for fragment in fragments):
                return Classification(category, context)
        return None
