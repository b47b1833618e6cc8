"""API error facade for HTTP-driven test suites.

Turns httpx errors (and anything else a request helper can raise) into a
response-shaped ApiErrorResponse, and lets negative tests accept the failure
statuses they are written to provoke.

Example:
    api = ApiErrorHandler(expectations=config.expectations())

    try:
        client.get("/users/999").raise_for_status()
    except httpx.HTTPStatusError as e:
        api.handle_negative_test_error(e, "test_get_missing_user")
"""

from __future__ import annotations

from typing import Any

import httpx

from failtriage.capture.expectations import NegativeTestExpectations
from failtriage.capture.handler import ErrorHandler, get_default_handler
from failtriage.core.constants import RESPONSE_MESSAGE_KEYS
from failtriage.core.errors.codes import ErrorCategory, map_category_to_status_code
from failtriage.core.errors.exceptions import CategorizedError, UnexpectedNegativeTestError
from failtriage.core.errors.messages import get_error_message, safe_get, sanitize_error_object
from failtriage.core.errors.models import ApiErrorResponse
from failtriage.core.errors.normalize import extract_error_code, extract_status_code
from failtriage.core.logging import TriageLogger, get_current_context, get_logger

API_STATUS_CATEGORIES: dict[int, ErrorCategory] = {
    400: ErrorCategory.VALIDATION,
    401: ErrorCategory.AUTHENTICATION,
    403: ErrorCategory.AUTHORIZATION,
    404: ErrorCategory.NOT_FOUND,
    408: ErrorCategory.TIMEOUT,
    409: ErrorCategory.CONFLICT,
    422: ErrorCategory.VALIDATION,
    429: ErrorCategory.RATE_LIMIT,
    500: ErrorCategory.HTTP_SERVER,
    502: ErrorCategory.NETWORK,
    503: ErrorCategory.HTTP_SERVER,
    504: ErrorCategory.TIMEOUT,
}

# Categories for which a real response status is reported as-is
HTTP_CATEGORIES: frozenset[ErrorCategory] = frozenset({
    ErrorCategory.HTTP_CLIENT,
    ErrorCategory.HTTP_SERVER,
    ErrorCategory.AUTHENTICATION,
    ErrorCategory.AUTHORIZATION,
    ErrorCategory.NOT_FOUND,
    ErrorCategory.CONFLICT,
    ErrorCategory.RATE_LIMIT,
    ErrorCategory.VALIDATION,
    ErrorCategory.TIMEOUT,
})


def categorize_status(status: int) -> ErrorCategory:
    """Map a response status to the category the API facade reports."""
    known = API_STATUS_CATEGORIES.get(status)
    if known is not None:
        return known
    return ErrorCategory.HTTP_SERVER if status >= 500 else ErrorCategory.HTTP_CLIENT


def response_status(error: object) -> int | None:
    """Get the response status of an HTTP-shaped error, if it has one."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return extract_status_code(error)


def _is_request_failure(error: object) -> bool:
    return isinstance(error, httpx.RequestError) or extract_error_code(error) == "ECONNABORTED"


def _categorize_request_failure(error: object) -> ErrorCategory:
    if isinstance(error, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT
    if extract_error_code(error) == "ECONNABORTED":
        return ErrorCategory.TIMEOUT
    if "timeout" in get_error_message(error).lower():
        return ErrorCategory.TIMEOUT
    return ErrorCategory.NETWORK


def _response_body(error: object) -> Any:
    if isinstance(error, httpx.HTTPStatusError):
        try:
            return error.response.json()
        except ValueError:
            return None
    response = safe_get(error, "response")
    if response is None:
        return None
    for key in ("data", "body", "json"):
        body = safe_get(response, key)
        if body is not None:
            return body
    return None


def extract_response_message(error: object) -> str | None:
    """Get the first non-blank message string from an error's response body."""
    body = _response_body(error)
    if body is None:
        return None
    for key in RESPONSE_MESSAGE_KEYS:
        value = safe_get(body, key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def extract_request_info(error: object) -> dict[str, Any]:
    """Collect endpoint, method and status of the failed request, where known."""
    info: dict[str, Any] = {}
    request: httpx.Request | None = None
    if isinstance(error, (httpx.HTTPStatusError, httpx.RequestError)):
        try:
            request = error.request
        except RuntimeError:
            # httpx raises when the error was built without a request
            request = None
    if request is not None:
        info["endpoint"] = str(request.url)
        info["method"] = request.method.upper()

    if isinstance(error, httpx.HTTPStatusError):
        info["status_code"] = error.response.status_code
        info["status_text"] = error.response.reason_phrase
    else:
        status = extract_status_code(error)
        if status is not None:
            info["status_code"] = status
    return info


class ApiErrorHandler:
    """Response-shaped error capture for API test helpers.

    Deduplicated logging goes through the wrapped ErrorHandler; this class
    adds the api_error log line, the response record and negative-test
    handling on top.
    """

    def __init__(
        self,
        handler: ErrorHandler | None = None,
        expectations: NegativeTestExpectations | None = None,
        logger: TriageLogger | None = None,
    ) -> None:
        self.handler = handler if handler is not None else get_default_handler()
        if expectations is None:
            expectations = self.handler.config.expectations()
        self.expectations = expectations
        self._logger = logger if logger is not None else get_logger("api")

    def categorize(self, error: object) -> ErrorCategory:
        """Get the API-facing category of an error."""
        if isinstance(error, CategorizedError):
            return error.category
        status = response_status(error)
        if status is not None:
            return categorize_status(status)
        if _is_request_failure(error):
            return _categorize_request_failure(error)
        return self.handler.categorize(error).category

    def is_expected_failure(self, error: object, test_name: str | None) -> bool:
        """Check whether an error is the outcome a negative test expects."""
        if not test_name:
            return False
        status = response_status(error)
        if status is None:
            return False
        return self.expectations.is_expected_status(test_name, status)

    def capture_error(
        self,
        error: object,
        context: str,
        include_details: bool = False,
    ) -> ApiErrorResponse:
        """Capture an API failure and build its response record. Never raises.

        Args:
            error: Whatever the request helper raised.
            context: Call site or test name the failure belongs to.
            include_details: Attach sanitized request/response info.

        Returns:
            The failure record.
        """
        return self._capture(error, context, None, include_details)

    def _capture(
        self,
        error: object,
        source: str,
        description: str | None,
        include_details: bool,
    ) -> ApiErrorResponse:
        try:
            response = self.build_response(error, include_details)
        except Exception as e:
            self._logger.debug("api_response_build_failed", error=str(e))
            response = ApiErrorResponse(
                error=get_error_message(error),
                code=ErrorCategory.UNKNOWN.value,
                status_code=map_category_to_status_code(ErrorCategory.UNKNOWN),
            )

        if self.is_expected_failure(error, source):
            self._log_expected(error, source)
            return response

        self.handler.capture_error(error, source, description)
        try:
            self._log_api_error(error, source, response)
        except Exception as e:
            self._logger.debug("api_error_log_failed", error=str(e))
        return response

    def build_response(self, error: object, include_details: bool = False) -> ApiErrorResponse:
        """Build the response record for an error without logging anything."""
        category = self.categorize(error)
        status = response_status(error)

        if status is not None and 100 <= status < 600 and category in HTTP_CATEGORIES:
            status_code = status
        else:
            status_code = map_category_to_status_code(category)

        message = extract_response_message(error)
        if message is None:
            message = get_error_message(error)

        details: dict[str, Any] | None = None
        if include_details:
            collected: dict[str, Any] = {}
            request_info = extract_request_info(error)
            if request_info:
                collected["request_info"] = request_info
            if isinstance(error, CategorizedError) and error.details:
                collected.update(error.details)
            details = sanitize_error_object(collected) if collected else None

        return ApiErrorResponse(
            error=message,
            code=category.value,
            status_code=status_code,
            details=details,
        )

    def _log_api_error(self, error: object, source: str, response: ApiErrorResponse) -> None:
        request_info = extract_request_info(error)
        fields: dict[str, Any] = {
            "source": source,
            "code": response.code,
            "status_code": response.status_code,
            "message": response.error,
        }
        for key in ("endpoint", "method"):
            if key in request_info:
                fields[key] = request_info[key]

        if 400 <= response.status_code < 500:
            self._logger.warning("api_error", **fields)
        else:
            self._logger.error("api_error", **fields)

    def _log_expected(self, error: object, test_name: str) -> None:
        self._logger.info(
            "expected_negative_test_failure",
            test_name=test_name,
            status_code=response_status(error),
        )

    def handle_negative_test_error(self, error: object, test_name: str | None = None) -> None:
        """Accept an expected negative-test failure, re-raise anything else.

        Args:
            error: The caught failure.
            test_name: Test to look up; defaults to the current RunContext's.

        Raises:
            The original exception, or UnexpectedNegativeTestError when the
            failure is not an exception, unless the failure is expected.
        """
        if test_name is None:
            ctx = get_current_context()
            test_name = ctx.test_name if ctx is not None else None

        if self.is_expected_failure(error, test_name):
            self._log_expected(error, test_name or "")
            return

        label = test_name or "unknown test"
        self._capture(
            error,
            label,
            f"Unexpected error occurred in negative test for {label}",
            include_details=False,
        )
        if isinstance(error, BaseException):
            raise error
        raise UnexpectedNegativeTestError(get_error_message(error))
