"""Tests for message extraction and error-object sanitization."""

import json

import pytest

from failtriage.core.errors.codes import ErrorCategory
from failtriage.core.errors.messages import (
    error_name,
    extract_additional_details,
    get_error_message,
    get_matcher_result,
    safe_get,
    sanitize_error_message,
    sanitize_error_object,
)


class Exploding:
    """Object whose every interesting property raises."""

    @property
    def message(self) -> str:
        raise RuntimeError("message unavailable")

    @property
    def name(self) -> str:
        raise RuntimeError("name unavailable")

    @property
    def code(self) -> str:
        raise RuntimeError("code unavailable")


class TestSanitizeErrorMessage:
    """Tests for sanitize_error_message()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Error: 'Something failed\n  at foo.js:1'", "Something failed"),
            ("\x1b[31mError: red text\x1b[0m", "red text"),
            ("  plain message  ", "plain message"),
            ('"quoted"', "quoted"),
            ("Error: Error: doubled", "doubled"),
            ("first line\nsecond line", "first line"),
            ("\x1b[\x1b[31m31mboom", "boom"),
            ("", ""),
        ],
    )
    def test_sanitize(self, raw: str, expected: str) -> None:
        assert sanitize_error_message(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "Error: 'Something failed\n  at foo.js:1'",
            "\x1b[1m  'Error: nested'  \x1b[0m",
            "\x1b[\x1b[31m31mboom",
            "`backticks` inside",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = sanitize_error_message(raw)
        assert sanitize_error_message(once) == once


class TestGetErrorMessage:
    """Tests for get_error_message()."""

    def test_exception_text(self) -> None:
        assert get_error_message(ValueError("  Error: boom\n  at line 3")) == "boom"

    def test_string_error(self) -> None:
        assert get_error_message("connection dropped") == "connection dropped"

    def test_mapping_message_keys_in_order(self) -> None:
        assert get_error_message({"error": "bad input"}) == "bad input"
        assert get_error_message({"message": "", "detail": "from detail"}) == "from detail"
        assert get_error_message({"message": "m", "error": "e"}) == "m"

    def test_object_attribute(self) -> None:
        class Failure:
            description = "described failure"

        assert get_error_message(Failure()) == "described failure"

    def test_empty_exception_described_as_json(self) -> None:
        message = get_error_message(ValueError())
        assert json.loads(message) == {"type": "ValueError", "name": "ValueError"}

    def test_name_and_code_described_as_json(self) -> None:
        message = get_error_message({"name": "CustomErr", "code": "E1"})
        assert json.loads(message) == {"type": "dict", "name": "CustomErr", "code": "E1"}

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "Unknown error occurred (NoneType)"),
            (42, "Unknown error occurred (int)"),
            ("", "Unknown error occurred (str)"),
            ({}, "Unknown error occurred (dict)"),
        ],
    )
    def test_fallback(self, value: object, expected: str) -> None:
        assert get_error_message(value) == expected

    def test_raising_properties_do_not_propagate(self) -> None:
        assert get_error_message(Exploding()) == "Unknown error occurred (Exploding)"


class TestProbing:
    """Tests for safe_get(), error_name() and get_matcher_result()."""

    def test_safe_get_mapping_and_attribute(self) -> None:
        class Holder:
            status = 404

        assert safe_get({"status": 500}, "status") == 500
        assert safe_get(Holder(), "status") == 404
        assert safe_get(None, "status") is None

    def test_safe_get_swallows_property_errors(self) -> None:
        assert safe_get(Exploding(), "message") is None

    def test_error_name_prefers_explicit_name(self) -> None:
        error = RuntimeError("relayed")
        error.name = "TypeError"  # type: ignore[attr-defined]
        assert error_name(error) == "TypeError"

    def test_error_name_falls_back_to_class(self) -> None:
        assert error_name(KeyError("k")) == "KeyError"
        assert error_name("plain string") is None

    def test_error_name_ignores_python_name_attributes(self) -> None:
        """AttributeError and ImportError use name for the attribute or module."""
        try:
            None.foo  # type: ignore[attr-defined]  # noqa: B018
        except AttributeError as e:
            attribute_error = e
        try:
            import not_a_real_module_xyz  # type: ignore[import-not-found]  # noqa: F401
        except ImportError as e:
            import_error = e

        assert attribute_error.name == "foo"
        assert error_name(attribute_error) == "AttributeError"
        assert error_name(import_error) == "ModuleNotFoundError"

    def test_error_name_from_mapping(self) -> None:
        assert error_name({"name": "CustomErr"}) == "CustomErr"

    def test_matcher_result_either_spelling(self) -> None:
        error = AssertionError("expect failed")
        error.matcherResult = {"name": "toBeVisible"}  # type: ignore[attr-defined]
        assert get_matcher_result(error) == {"name": "toBeVisible"}


class TestSanitizeErrorObject:
    """Tests for sanitize_error_object()."""

    def test_redacts_sensitive_keys(self) -> None:
        result = sanitize_error_object({"user": "alice", "password": "hunter2", "api_token": "t"})
        assert result == {"user": "alice", "password": "[REDACTED]", "api_token": "[REDACTED]"}

    def test_drops_stack_keys(self) -> None:
        result = sanitize_error_object({"message": "m", "stack": "at foo.js:1"})
        assert result == {"message": "m"}

    def test_truncates_long_strings(self) -> None:
        result = sanitize_error_object("x" * 1500)
        assert result == "x" * 1000 + "...[truncated]"

    def test_limits_depth(self) -> None:
        nested: dict = {"leaf": True}
        for _ in range(8):
            nested = {"a": nested}

        result = sanitize_error_object(nested)
        for _ in range(5):
            result = result["a"]
        assert result["a"] == "[max depth]"

    def test_enum_values(self) -> None:
        assert sanitize_error_object({"category": ErrorCategory.TIMEOUT}) == {
            "category": "TIMEOUT_ERROR"
        }

    def test_exception_view(self) -> None:
        error = ValueError("bad value")
        error.field = "email"  # type: ignore[attr-defined]
        error.secret_key = "s3cr3t"  # type: ignore[attr-defined]

        result = sanitize_error_object(error)
        assert result == {
            "name": "ValueError",
            "message": "bad value",
            "field": "email",
            "secret_key": "[REDACTED]",
        }

    def test_sequences_become_lists(self) -> None:
        assert sanitize_error_object(("a", 1)) == ["a", 1]


class TestExtractAdditionalDetails:
    """Tests for extract_additional_details()."""

    def test_scalars_have_no_details(self) -> None:
        assert extract_additional_details("message") is None
        assert extract_additional_details(None) is None
        assert extract_additional_details(3) is None

    def test_matcher_details(self) -> None:
        error = AssertionError("expect(locator).toHaveText() failed")
        error.matcher_result = {  # type: ignore[attr-defined]
            "name": "toHaveText",
            "pass": False,
            "expected": "Welcome",
            "actual": "Sign in",
            "message": "Error: text mismatch\nmore",
            "log": ["waiting for locator('h1')", "GET https://app.test/api 200"],
        }

        details = extract_additional_details(error)
        assert details == {
            "name": "toHaveText",
            "pass": False,
            "expected": "Welcome",
            "actual": "Sign in",
            "message": "text mismatch",
            "log": ["waiting for locator('h1')"],
        }

    def test_structured_values_are_sanitized(self) -> None:
        details = extract_additional_details({"status": 500, "authorization": "Bearer x"})
        assert details == {"status": 500, "authorization": "[REDACTED]"}
