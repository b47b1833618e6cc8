"""Tests for the API error facade."""

from unittest.mock import MagicMock

import httpx
import pytest

from failtriage.capture.api import ApiErrorHandler, categorize_status, extract_request_info
from failtriage.capture.expectations import NegativeTestExpectations
from failtriage.capture.handler import ErrorHandler
from failtriage.core.config import NegativeTestExpectation, TriageConfig
from failtriage.core.errors.codes import ErrorCategory
from failtriage.core.errors.exceptions import CategorizedError, UnexpectedNegativeTestError
from failtriage.core.logging import RunContext, with_context
from tests.helpers import logged_events

USERS_URL = "https://api.example.test/users/999"


def status_error(
    status: int, body: dict | None = None, text: str | None = None
) -> httpx.HTTPStatusError:
    request = httpx.Request("get", USERS_URL)
    if body is not None:
        response = httpx.Response(status, json=body, request=request)
    else:
        response = httpx.Response(status, text=text or "", request=request)
    return httpx.HTTPStatusError(
        f"Server responded {status} for {USERS_URL}", request=request, response=response
    )


@pytest.fixture
def capture_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def api_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def api(config: TriageConfig, capture_logger: MagicMock, api_logger: MagicMock) -> ApiErrorHandler:
    expectations = NegativeTestExpectations.from_mapping(
        {"test_get_missing_*": [404], "test_login_rejected": [401]}
    )
    return ApiErrorHandler(
        handler=ErrorHandler(config=config, logger=capture_logger),
        expectations=expectations,
        logger=api_logger,
    )


class TestCategorizeStatus:
    """Tests for the API status table."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (400, ErrorCategory.VALIDATION),
            (401, ErrorCategory.AUTHENTICATION),
            (403, ErrorCategory.AUTHORIZATION),
            (404, ErrorCategory.NOT_FOUND),
            (408, ErrorCategory.TIMEOUT),
            (409, ErrorCategory.CONFLICT),
            (422, ErrorCategory.VALIDATION),
            (429, ErrorCategory.RATE_LIMIT),
            (500, ErrorCategory.HTTP_SERVER),
            (502, ErrorCategory.NETWORK),
            (503, ErrorCategory.HTTP_SERVER),
            (504, ErrorCategory.TIMEOUT),
            (507, ErrorCategory.HTTP_SERVER),
            (418, ErrorCategory.HTTP_CLIENT),
        ],
    )
    def test_table(self, status: int, expected: ErrorCategory) -> None:
        assert categorize_status(status) is expected


class TestBuildResponse:
    """Tests for ApiErrorHandler.build_response()."""

    def test_status_error_with_json_body(self, api: ApiErrorHandler) -> None:
        response = api.build_response(status_error(404, {"message": "  User not found  "}))

        assert response.success is False
        assert response.code == "NOT_FOUND_ERROR"
        assert response.status_code == 404
        assert response.error == "User not found"
        assert response.details is None

    def test_body_message_keys_in_order(self, api: ApiErrorHandler) -> None:
        response = api.build_response(status_error(422, {"detail": "email invalid", "error": ""}))
        assert response.error == "email invalid"
        assert response.code == "VALIDATION_ERROR"
        assert response.status_code == 422

    def test_non_json_body_falls_back(self, api: ApiErrorHandler) -> None:
        response = api.build_response(status_error(500, text="<html>oops</html>"))
        assert response.error == f"Server responded 500 for {USERS_URL}"
        assert response.code == "HTTP_SERVER_ERROR"
        assert response.status_code == 500

    def test_non_http_category_uses_mapped_status(self, api: ApiErrorHandler) -> None:
        response = api.build_response(status_error(502))
        assert response.code == "NETWORK_ERROR"
        assert response.status_code == 502

    def test_timeout_without_response(self, api: ApiErrorHandler) -> None:
        error = httpx.ConnectTimeout("timed out", request=httpx.Request("GET", USERS_URL))
        response = api.build_response(error)
        assert response.code == "TIMEOUT_ERROR"
        assert response.status_code == 408

    def test_network_failure_without_response(self, api: ApiErrorHandler) -> None:
        error = httpx.ConnectError("connection refused", request=httpx.Request("GET", USERS_URL))
        response = api.build_response(error)
        assert response.code == "NETWORK_ERROR"
        assert response.status_code == 502

    def test_aborted_code_is_timeout(self, api: ApiErrorHandler) -> None:
        response = api.build_response({"code": "ECONNABORTED", "message": "aborted"})
        assert response.code == "TIMEOUT_ERROR"

    def test_typed_error_keeps_category(self, api: ApiErrorHandler) -> None:
        error = CategorizedError("Duplicate order", category=ErrorCategory.CONFLICT)
        response = api.build_response(error)
        assert response.code == "CONFLICT_ERROR"
        assert response.status_code == 409
        assert response.error == "Duplicate order"

    def test_other_errors_use_classifier(self, api: ApiErrorHandler) -> None:
        response = api.build_response(ValueError("something odd"))
        assert response.code == "UNKNOWN_ERROR"
        assert response.status_code == 500

    def test_include_details(self, api: ApiErrorHandler) -> None:
        response = api.build_response(status_error(404, {"message": "nope"}), include_details=True)
        assert response.details == {
            "request_info": {
                "endpoint": USERS_URL,
                "method": "GET",
                "status_code": 404,
                "status_text": "Not Found",
            }
        }

    def test_to_dict(self, api: ApiErrorHandler) -> None:
        assert api.build_response(status_error(404, {"message": "nope"})).to_dict() == {
            "success": False,
            "error": "nope",
            "code": "NOT_FOUND_ERROR",
            "status_code": 404,
        }


class TestRequestInfo:
    """Tests for extract_request_info()."""

    def test_error_without_request(self) -> None:
        assert extract_request_info(httpx.ConnectError("refused")) == {}

    def test_mapping_status(self) -> None:
        assert extract_request_info({"response": {"status": 503}}) == {"status_code": 503}


class TestCaptureError:
    """Tests for ApiErrorHandler.capture_error()."""

    def test_client_error_logs_warning(
        self, api: ApiErrorHandler, api_logger: MagicMock, capture_logger: MagicMock
    ) -> None:
        api.capture_error(status_error(404, {"message": "nope"}), "UsersApi.get")

        args, kwargs = api_logger.warning.call_args
        assert args == ("api_error",)
        assert kwargs["endpoint"] == USERS_URL
        assert kwargs["method"] == "GET"
        assert kwargs["status_code"] == 404
        assert logged_events(capture_logger, "warning") == ["error_captured"]

    def test_server_error_logs_error(self, api: ApiErrorHandler, api_logger: MagicMock) -> None:
        api.capture_error(status_error(500, {"error": "db down"}), "UsersApi.get")
        assert logged_events(api_logger, "error") == ["api_error"]

    def test_capture_is_deduplicated(
        self, api: ApiErrorHandler, capture_logger: MagicMock
    ) -> None:
        error = status_error(500, {"error": "db down"})
        api.capture_error(error, "UsersApi.get")
        api.capture_error(error, "UsersApi.get")
        assert logged_events(capture_logger, "error") == ["error_captured"]

    def test_expected_failure_logged_at_info(
        self, api: ApiErrorHandler, api_logger: MagicMock, capture_logger: MagicMock
    ) -> None:
        response = api.capture_error(status_error(404), "test_get_missing_order")

        assert response.status_code == 404
        assert logged_events(api_logger, "info") == ["expected_negative_test_failure"]
        capture_logger.warning.assert_not_called()

    def test_never_raises(self, api: ApiErrorHandler, api_logger: MagicMock) -> None:
        api_logger.error.side_effect = RuntimeError("sink down")
        response = api.capture_error(ValueError("boom"), "Job.run")
        assert response.code == "UNKNOWN_ERROR"


class TestHandleNegativeTestError:
    """Tests for ApiErrorHandler.handle_negative_test_error()."""

    def test_expected_status_is_accepted(
        self, api: ApiErrorHandler, api_logger: MagicMock
    ) -> None:
        api.handle_negative_test_error(status_error(404), "test_get_missing_user")

        args, kwargs = api_logger.info.call_args
        assert args == ("expected_negative_test_failure",)
        assert kwargs["status_code"] == 404

    def test_unexpected_status_is_reraised(
        self, api: ApiErrorHandler, capture_logger: MagicMock
    ) -> None:
        error = status_error(500, {"error": "db down"})
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            api.handle_negative_test_error(error, "test_get_missing_user")

        assert exc_info.value is error
        _, kwargs = capture_logger.error.call_args
        assert kwargs["context"] == "Unexpected error occurred in negative test for test_get_missing_user"

    def test_non_negative_test_is_reraised(self, api: ApiErrorHandler) -> None:
        with pytest.raises(httpx.HTTPStatusError):
            api.handle_negative_test_error(status_error(404), "test_list_users")

    def test_non_exception_value_wrapped(self, api: ApiErrorHandler) -> None:
        with pytest.raises(UnexpectedNegativeTestError, match="db down"):
            api.handle_negative_test_error({"status": 500, "message": "db down"}, "test_login_rejected")

    def test_mapping_with_expected_status(self, api: ApiErrorHandler) -> None:
        api.handle_negative_test_error({"response": {"status": 401}}, "test_login_rejected")

    def test_test_name_from_run_context(self, api: ApiErrorHandler, api_logger: MagicMock) -> None:
        with with_context(RunContext(test_name="test_get_missing_user")):
            api.handle_negative_test_error(status_error(404))

        assert logged_events(api_logger, "info") == ["expected_negative_test_failure"]

    def test_no_test_name_is_reraised(self, api: ApiErrorHandler) -> None:
        with pytest.raises(httpx.HTTPStatusError):
            api.handle_negative_test_error(status_error(404))


class TestDefaults:
    """Tests for defaults taken from the wrapped handler's config."""

    def test_expectations_from_config(self) -> None:
        config = TriageConfig(
            negative_tests=[NegativeTestExpectation(test="test_x", statuses=[404])]
        )
        api = ApiErrorHandler(handler=ErrorHandler(config=config, logger=MagicMock()))
        assert api.expectations.is_expected_status("test_x", 404)
