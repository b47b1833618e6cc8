"""Message extraction and sanitization for arbitrary error values.

Everything here is total: any value (exception, string, mapping, None,
number, object whose properties raise) yields a usable result without raising.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from failtriage.core.constants import (
    MESSAGE_KEYS,
    SANITIZE_MAX_DEPTH,
    SANITIZE_MAX_STRING_CHARS,
    SANITIZE_SKIPPED_KEYS,
)
from failtriage.core.logging import REDACTED, is_sensitive_key

from .patterns import NATIVE_ERROR_TYPES

# CSI escape sequences (colors, cursor movement) emitted by test reporters
_ANSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")

# Leading runs of whitespace/quotes/"Error:" prefixes, or trailing whitespace/quotes
_EDGE_NOISE_RE = re.compile(r"^(?:\s|['\"`]|Error:)+|(?:\s|['\"`])+$")


def safe_get(value: object, key: str) -> Any:
    """Read a key from a mapping or an attribute from an object.

    Returns None when the value has no such key/attribute, or when reading
    it raises (foreign objects may expose properties that fail).
    """
    if value is None:
        return None
    try:
        if isinstance(value, Mapping):
            return value.get(key)
        return getattr(value, key, None)
    except Exception:
        return None


def _safe_str(value: object) -> str:
    try:
        return str(value)
    except Exception:
        return ""


def sanitize_error_message(message: str) -> str:
    """Reduce a raw message to one clean line.

    Strips ANSI escape sequences, keeps only the first line, then removes
    leading whitespace/quotes/"Error:" prefixes and trailing whitespace/quotes.
    Applying it twice gives the same result as applying it once.

    Example:
        >>> sanitize_error_message("Error: 'Something failed\\n  at foo.js:1'")
        'Something failed'
    """
    # Removing one sequence can splice together another, so repeat to a fixpoint
    without_ansi, removed = _ANSI_RE.subn("", message)
    while removed:
        without_ansi, removed = _ANSI_RE.subn("", without_ansi)
    first_line = without_ansi.split("\n", 1)[0]
    return _EDGE_NOISE_RE.sub("", first_line)


def error_name(error: object) -> str | None:
    """Get the name an error value identifies itself by, if any.

    Exceptions use their class name. A ``name`` attribute only wins when it is
    a known runtime type name (errors relayed from a browser carry the
    page-side name, e.g. "TypeError"); Python's own exceptions use ``name``
    for other things, such as the missing attribute or module. Other values
    only have a name when they carry a string ``name`` key or attribute.
    """
    name = safe_get(error, "name")
    if isinstance(error, BaseException):
        if isinstance(name, str) and name in NATIVE_ERROR_TYPES:
            return name
        return type(error).__name__
    if isinstance(name, str) and name:
        return name
    return None


def _describe(error: object) -> str | None:
    name = error_name(error)
    code = safe_get(error, "code")
    if name is None and code is None:
        return None
    description: dict[str, Any] = {"type": type(error).__name__}
    if name is not None:
        description["name"] = name
    if code is not None:
        description["code"] = code
    return json.dumps(description, default=str)


def get_error_message(error: object) -> str:
    """Extract a clean, non-empty display message from any error value.

    Extraction order:
    1. Exception text
    2. A string error as-is
    3. First non-empty string among message/error/description/detail
    4. A JSON description of the type, name and code when either is present
    5. "Unknown error occurred (<type>)"

    Every candidate is sanitized; empty results fall through to the next step.
    """
    if isinstance(error, BaseException | str):
        message = sanitize_error_message(_safe_str(error))
        if message:
            return message
    else:
        for key in MESSAGE_KEYS:
            value = safe_get(error, key)
            if isinstance(value, str):
                message = sanitize_error_message(value)
                if message:
                    return message

    description = _describe(error)
    if description:
        return description
    return f"Unknown error occurred ({type(error).__name__})"


def _truncate(text: str) -> str:
    if len(text) <= SANITIZE_MAX_STRING_CHARS:
        return text
    return text[:SANITIZE_MAX_STRING_CHARS] + "...[truncated]"


def _sanitize_mapping(items: Mapping[Any, Any], depth: int) -> dict[str, Any]:
    sanitized: dict[str, Any] = {}
    for key, value in items.items():
        key_str = str(key)
        if key_str in SANITIZE_SKIPPED_KEYS:
            continue
        if is_sensitive_key(key_str):
            sanitized[key_str] = REDACTED
        else:
            sanitized[key_str] = sanitize_error_object(value, depth + 1)
    return sanitized


def _public_attributes(value: object) -> dict[str, Any]:
    try:
        attributes = vars(value)
    except TypeError:
        return {}
    return {k: v for k, v in attributes.items() if not k.startswith("_")}


def sanitize_error_object(value: object, depth: int = 0) -> Any:
    """Produce a log-safe, JSON-friendly view of an error value.

    - stack/traceback keys are dropped
    - strings are truncated to 1000 characters
    - keys matching sensitive patterns are redacted
    - nesting beyond 5 levels is elided
    """
    if depth > SANITIZE_MAX_DEPTH:
        return "[max depth]"
    if value is None or isinstance(value, bool | int | float):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, str):
        return _truncate(value)
    if isinstance(value, Mapping):
        return _sanitize_mapping(value, depth)
    if isinstance(value, list | tuple | set | frozenset):
        return [sanitize_error_object(item, depth + 1) for item in value]
    if isinstance(value, BaseException):
        view: dict[str, Any] = {
            "name": error_name(value),
            "message": get_error_message(value),
        }
        view.update(_sanitize_mapping(_public_attributes(value), depth))
        return view
    attributes = _public_attributes(value)
    if attributes:
        return _sanitize_mapping(attributes, depth)
    return _truncate(_safe_str(value))


def get_matcher_result(error: object) -> Any:
    """Get the assertion matcher payload attached to an error, if any."""
    matcher = safe_get(error, "matcher_result")
    if matcher is None:
        matcher = safe_get(error, "matcherResult")
    return matcher


def extract_additional_details(error: object) -> dict[str, Any] | None:
    """Collect extra diagnostics worth logging at debug level.

    For assertion failures carrying a matcher result, returns the matcher's
    name, pass flag, expected/actual values, sanitized message and call log
    (entries mentioning http are dropped). For other structured values,
    returns the sanitized object view. Scalars yield None.
    """
    matcher = get_matcher_result(error)
    if matcher is not None:
        raw_log = safe_get(matcher, "log")
        log_entries: list[str] = []
        if isinstance(raw_log, list | tuple):
            log_entries = [
                sanitize_error_message(_safe_str(entry))
                for entry in raw_log
                if "http" not in _safe_str(entry).lower()
            ]
        matcher_message = safe_get(matcher, "message")
        return {
            "name": safe_get(matcher, "name"),
            "pass": safe_get(matcher, "pass"),
            "expected": sanitize_error_object(safe_get(matcher, "expected")),
            "actual": sanitize_error_object(safe_get(matcher, "actual")),
            "message": (
                sanitize_error_message(matcher_message)
                if isinstance(matcher_message, str)
                else None
            ),
            "log": log_entries,
        }

    if error is None or isinstance(error, str | bool | int | float):
        return None
    sanitized = sanitize_error_object(error)
    if isinstance(sanitized, dict) and sanitized:
        return sanitized
    return None
