"""Error taxonomy for failtriage.

ErrorCategory is the closed set of semantic tags a classification can produce.
Member values are the stable strings written to logs and API responses, so
renaming a member is safe but changing a value is a breaking change.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Semantic categories a captured failure can be classified into."""

    # Data layer
    DATABASE = "DATABASE_ERROR"
    CONNECTION = "CONNECTION_ERROR"
    QUERY = "QUERY_ERROR"
    CONSTRAINT = "CONSTRAINT_ERROR"
    TRANSACTION = "TRANSACTION_ERROR"

    # Network and API
    NETWORK = "NETWORK_ERROR"
    HTTP_CLIENT = "HTTP_CLIENT_ERROR"
    """4xx responses without a more specific mapping."""

    HTTP_SERVER = "HTTP_SERVER_ERROR"
    """5xx responses."""

    TIMEOUT = "TIMEOUT_ERROR"
    RATE_LIMIT = "RATE_LIMIT_ERROR"
    CORS = "CORS_ERROR"

    # Authentication and authorization
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"
    TOKEN_EXPIRED = "TOKEN_EXPIRED_ERROR"

    # Resources
    NOT_FOUND = "NOT_FOUND_ERROR"
    PERMISSION = "PERMISSION_ERROR"
    CONFLICT = "CONFLICT_ERROR"

    # Browser automation
    BROWSER = "BROWSER_ERROR"
    PAGE = "PAGE_ERROR"
    FRAME = "FRAME_ERROR"
    ELEMENT = "ELEMENT_ERROR"
    LOCATOR = "LOCATOR_NOT_FOUND_ERROR"
    NAVIGATION = "NAVIGATION_ERROR"
    SELECTOR = "SELECTOR_ERROR"
    ASSERTION = "ASSERTION_ERROR"
    SCREENSHOT = "SCREENSHOT_ERROR"
    DOWNLOAD = "DOWNLOAD_ERROR"
    UPLOAD = "UPLOAD_ERROR"
    DIALOG = "DIALOG_ERROR"
    """Alert, confirm and prompt handling."""

    INTERCEPT = "INTERCEPT_ERROR"
    """Network interception and route mocking."""

    IFRAME = "IFRAME_ERROR"
    FRAME_TIMEOUT = "FRAME_TIMEOUT_ERROR"

    # Cookies, sessions and web storage
    COOKIE = "COOKIE_ERROR"
    SESSION = "SESSION_ERROR"
    STORAGE = "STORAGE_ERROR"

    # Interaction
    KEYBOARD = "KEYBOARD_ERROR"
    MOUSE = "MOUSE_ERROR"
    GESTURE = "GESTURE_ERROR"
    DRAG_DROP = "DRAG_DROP_ERROR"
    HOVER = "HOVER_ERROR"
    COMPOUND_ACTION = "COMPOUND_ACTION_ERROR"
    """Multi-step actions such as hover-then-click."""

    # Waits and element state
    WAIT_CONDITION = "WAIT_CONDITION_ERROR"
    ELEMENT_STATE = "ELEMENT_STATE_ERROR"

    # Tabs, windows and browser contexts
    TAB = "TAB_ERROR"
    WINDOW = "WINDOW_ERROR"
    CONTEXT = "CONTEXT_ERROR"

    # Scroll and viewport
    SCROLL = "SCROLL_ERROR"
    VIEWPORT = "VIEWPORT_ERROR"

    # Content and styling
    CSS = "CSS_ERROR"
    STYLE = "STYLE_ERROR"
    TEXT_VERIFICATION = "TEXT_VERIFICATION_ERROR"
    CONTENT_MISMATCH = "CONTENT_MISMATCH_ERROR"
    SANITIZATION = "SANITIZATION_ERROR"
    DATA_GENERATION = "DATA_GENERATION_ERROR"

    # I/O and data handling
    IO = "IO_ERROR"
    PARSING = "PARSING_ERROR"
    VALIDATION = "VALIDATION_ERROR"
    SERIALIZATION = "SERIALIZATION_ERROR"
    FORMAT = "FORMAT_ERROR"
    ENCODING = "ENCODING_ERROR"

    # Test framework
    TEST = "TEST_ERROR"
    SETUP = "SETUP_ERROR"
    TEARDOWN = "TEARDOWN_ERROR"
    FIXTURE = "FIXTURE_ERROR"
    EXPECTED_FAILURE = "EXPECTED_FAILURE"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED_ERROR"

    # Performance
    PERFORMANCE = "PERFORMANCE_ERROR"
    MEMORY = "MEMORY_ERROR"
    RESOURCE_LIMIT = "RESOURCE_LIMIT_ERROR"

    # Environment and configuration
    ENVIRONMENT = "ENVIRONMENT_ERROR"
    DEPENDENCY = "DEPENDENCY_ERROR"
    CONFIGURATION = "CONFIGURATION_ERROR"

    # Runtime errors raised inside the page or the test process
    TYPE = "TYPE_ERROR"
    REFERENCE = "REFERENCE_ERROR"
    SYNTAX = "SYNTAX_ERROR"
    RANGE = "RANGE_ERROR"

    # File system
    FILE_NOT_FOUND = "FILE_NOT_FOUND_ERROR"
    FILE_EXISTS = "FILE_EXISTS_ERROR"
    ACCESS_DENIED = "ACCESS_DENIED_ERROR"
    FILE_TOO_LARGE = "FILE_TOO_LARGE_ERROR"

    SECURITY = "SECURITY_ERROR"
    """HTTPS, CSP and certificate failures."""

    BUSINESS_RULE = "BUSINESS_RULE_ERROR"

    # External services
    THIRD_PARTY_SERVICE = "THIRD_PARTY_SERVICE_ERROR"
    API_VERSION = "API_VERSION_ERROR"
    WEBHOOK = "WEBHOOK_ERROR"

    # Mobile emulation
    MOBILE_DEVICE = "MOBILE_DEVICE_ERROR"
    MOBILE_CONTEXT = "MOBILE_CONTEXT_ERROR"

    UNKNOWN = "UNKNOWN_ERROR"
    """The only "no match" value. Never itself treated as an error."""

    @classmethod
    def from_value(cls, value: object) -> ErrorCategory:
        """Resolve a category from a member, member name or member value.

        Args:
            value: An ErrorCategory, or a string such as "TIMEOUT" or
                "TIMEOUT_ERROR" (case-insensitive).

        Returns:
            The matching ErrorCategory, or UNKNOWN when nothing matches.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        key = value.strip().upper()
        if key in cls.__members__:
            return cls.__members__[key]
        for member in cls:
            if member.value == key:
                return member
        return cls.UNKNOWN


WARN_CATEGORIES: frozenset[ErrorCategory] = frozenset({
    ErrorCategory.VALIDATION,
    ErrorCategory.NOT_FOUND,
    ErrorCategory.HTTP_CLIENT,
    ErrorCategory.RATE_LIMIT,
})
"""Expected or benign categories that are logged at warning instead of error."""


CATEGORY_STATUS_CODES: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.CONSTRAINT: 400,
    ErrorCategory.HTTP_CLIENT: 400,
    ErrorCategory.PARSING: 400,
    ErrorCategory.SERIALIZATION: 400,
    ErrorCategory.AUTHENTICATION: 401,
    ErrorCategory.AUTHORIZATION: 403,
    ErrorCategory.PERMISSION: 403,
    ErrorCategory.ACCESS_DENIED: 403,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.FILE_NOT_FOUND: 404,
    ErrorCategory.TIMEOUT: 408,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.FILE_EXISTS: 409,
    ErrorCategory.RATE_LIMIT: 429,
    ErrorCategory.NETWORK: 502,
    ErrorCategory.CONNECTION: 502,
    ErrorCategory.HTTP_SERVER: 503,
    ErrorCategory.RESOURCE_LIMIT: 503,
}
"""HTTP status reported by the API facade per category. Unlisted categories map to 500."""


DEFAULT_STATUS_CODE = 500
"""Status for categories with no entry in CATEGORY_STATUS_CODES."""


def map_category_to_status_code(category: ErrorCategory) -> int:
    """Get the HTTP status code the API facade reports for a category."""
    return CATEGORY_STATUS_CODES.get(category, DEFAULT_STATUS_CODE)
