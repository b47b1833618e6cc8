"""Boundary normalization of arbitrary error values.

Anything a catch block can hand over (exceptions, strings, HTTP client
errors, plain mappings, None, numbers, arbitrary objects) is read exactly
once and converted into a NormalizedError. Classification stages then read
its fields instead of re-probing the original value.
"""

from __future__ import annotations

import errno
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any

from failtriage.core.constants import (
    FRAMEWORK_MESSAGE_KEYWORDS,
    FRAMEWORK_MODULE_MARKER,
    MESSAGE_KEYS,
)

from .codes import ErrorCategory
from .messages import error_name, get_error_message, get_matcher_result, safe_get
from .patterns import NATIVE_ERROR_TYPES, SYSTEM_ERROR_CODES


class ErrorKind(str, Enum):
    """Closed set of shapes an error value is normalized into."""

    NATIVE = "native"
    """Carries a recognized runtime error type name."""

    SYSTEM = "system"
    """Carries a recognized OS-style error code."""

    HTTP = "http"
    """Carries a numeric HTTP status."""

    MESSAGE = "message"
    """Only message text is usable."""

    OPAQUE = "opaque"
    """Nothing usable beyond the runtime type."""


# Built-in OSError subclasses raised without an errno
_OS_ERROR_CODES: tuple[tuple[type[OSError], str], ...] = (
    (FileNotFoundError, "ENOENT"),
    (FileExistsError, "EEXIST"),
    (PermissionError, "EACCES"),
    (ConnectionRefusedError, "ECONNREFUSED"),
    (ConnectionResetError, "ECONNRESET"),
    (TimeoutError, "ETIMEDOUT"),
)


@dataclass(frozen=True)
class NormalizedError:
    """Single-read view of an error value.

    Attributes:
        kind: Which variant the value was normalized into.
        message: Sanitized, non-empty display message.
        name: Error name (exception class or explicit name), if any.
        code: OS-style error code (e.g. "ENOENT"), if any.
        status_code: HTTP status, if any.
        category: Explicit category from a typed application error, if any.
        matcher_result: Assertion matcher payload, if any.
        is_exception: Whether the original value is an exception instance.
        is_framework: Whether the error looks raised by the automation layer.
    """

    kind: ErrorKind
    message: str
    name: str | None = None
    code: str | None = None
    status_code: int | None = None
    category: ErrorCategory | None = None
    matcher_result: Any = None
    is_exception: bool = False
    is_framework: bool = False

    @property
    def matcher_name(self) -> str | None:
        name = safe_get(self.matcher_result, "name")
        return name if isinstance(name, str) and name else None


def _as_status(value: object) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def extract_status_code(error: object) -> int | None:
    """Find an HTTP status on an error value.

    Checks response.status / response.status_code first, then flat status,
    status_code and statusCode fields.
    """
    response = safe_get(error, "response")
    if response is not None:
        for key in ("status", "status_code"):
            status = _as_status(safe_get(response, key))
            if status is not None:
                return status
    for key in ("status", "status_code", "statusCode"):
        status = _as_status(safe_get(error, key))
        if status is not None:
            return status
    return None


def extract_error_code(error: object) -> str | None:
    """Find an OS-style error code on an error value.

    Uses a string ``code`` field when present, then the symbolic name of an
    integer errno, then the built-in OSError subclass.
    """
    code = safe_get(error, "code")
    if isinstance(code, str) and code:
        return code.upper()
    if isinstance(error, OSError):
        if isinstance(error.errno, int) and error.errno in errno.errorcode:
            return errno.errorcode[error.errno]
        for error_type, symbolic in _OS_ERROR_CODES:
            if isinstance(error, error_type):
                return symbolic
    return None


def _extract_category(error: object) -> ErrorCategory | None:
    category = safe_get(error, "category")
    if isinstance(category, ErrorCategory):
        return category
    return None


def _mentions_framework(error: BaseException) -> bool:
    if FRAMEWORK_MODULE_MARKER in type(error).__module__.lower():
        return True
    stack = safe_get(error, "stack")
    if isinstance(stack, str) and FRAMEWORK_MODULE_MARKER in stack.lower():
        return True
    if error.__traceback__ is not None:
        for frame in traceback.extract_tb(error.__traceback__):
            if FRAMEWORK_MODULE_MARKER in frame.filename.lower():
                return True
    return False


def normalize_error(error: object) -> NormalizedError:
    """Read an error value once and return its normalized form."""
    is_exception = isinstance(error, BaseException)
    message = get_error_message(error)
    name = error_name(error)
    code = extract_error_code(error)
    status_code = extract_status_code(error)
    matcher_result = get_matcher_result(error) if is_exception else None

    is_framework = False
    if isinstance(error, BaseException):
        lowered = message.lower()
        is_framework = (
            matcher_result is not None
            or any(keyword in lowered for keyword in FRAMEWORK_MESSAGE_KEYWORDS)
            or _mentions_framework(error)
        )

    if name is not None and name in NATIVE_ERROR_TYPES:
        kind = ErrorKind.NATIVE
    elif code is not None and code in SYSTEM_ERROR_CODES:
        kind = ErrorKind.SYSTEM
    elif status_code is not None:
        kind = ErrorKind.HTTP
    elif (
        is_exception
        or isinstance(error, str)
        or any(isinstance(safe_get(error, key), str) for key in MESSAGE_KEYS)
    ):
        kind = ErrorKind.MESSAGE
    else:
        kind = ErrorKind.OPAQUE

    return NormalizedError(
        kind=kind,
        message=message,
        name=name,
        code=code,
        status_code=status_code,
        category=_extract_category(error),
        matcher_result=matcher_result,
        is_exception=is_exception,
        is_framework=is_framework,
    )
