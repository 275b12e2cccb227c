"""Tests for response classification."""

import httpx
import pytest

from billogrampy.client_base import parse_api_response
from billogrampy.exceptions import (
    BillogramAPIError,
    InvalidAuthenticationError,
    InvalidFieldCombinationError,
    InvalidFieldValueError,
    InvalidObjectStateError,
    NotAuthorizedError,
    ObjectNotFoundError,
    PermissionDeniedError,
    ReadOnlyFieldError,
    RequestDataError,
    RequestFormError,
    ServiceMalfunctioningError,
    UnknownFieldError,
)
from billogrampy.models import ApiResponse

URL = "https://billogram.com/api/v2/billogram/abc123"


def make_response(status_code: int, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("GET", URL), **kwargs)


def error_envelope(status: str, message: str = "Something went wrong") -> dict:
    return {"status": status, "data": {"message": message}}


class TestSuccess:
    """Test successful responses."""

    def test_ok_returns_data_unchanged(self):
        data = {"id": "abc123", "items": [{"price": 300}], "nested": {"a": None}}
        result = parse_api_response(make_response(200, json={"status": "OK", "data": data}))
        assert isinstance(result, ApiResponse)
        assert result.status == "OK"
        assert result.data == data
        assert result.meta is None

    def test_ok_with_meta(self):
        result = parse_api_response(
            make_response(
                200,
                json={"status": "OK", "data": [], "meta": {"total_count": 42}},
            )
        )
        assert result.meta.total_count == 42
        assert result.data == []

    def test_content_type_parameters_are_ignored(self):
        result = parse_api_response(
            make_response(
                200,
                content=b'{"status": "OK", "data": {"id": 1}}',
                headers={"Content-Type": "application/json; charset=utf-8"},
            )
        )
        assert result.data == {"id": 1}

    def test_expected_non_json_returns_raw_body(self):
        result = parse_api_response(
            make_response(
                200,
                content=b"%PDF-1.4",
                headers={"Content-Type": "application/pdf"},
            ),
            "application/pdf",
        )
        assert result == b"%PDF-1.4"

    def test_expected_content_type_only_applies_to_200(self):
        """A 404 is parsed as JSON even if another type was expected."""
        try:
            parse_api_response(
                make_response(404, json=error_envelope("OBJECT_NOT_FOUND")),
                "application/pdf",
            )
            assert False, "Should have raised ObjectNotFoundError"
        except ObjectNotFoundError as e:
            assert e.message == "Object not found"


class TestMalfunction:
    """Test protocol anomalies and server errors."""

    def test_missing_content_type(self):
        try:
            parse_api_response(make_response(200, content=b"{}"))
            assert False, "Should have raised ServiceMalfunctioningError"
        except ServiceMalfunctioningError as e:
            assert "content type" in e.message

    def test_server_error_with_json(self):
        try:
            parse_api_response(
                make_response(500, json=error_envelope("INTERNAL_ERROR", "Boom"))
            )
            assert False, "Should have raised ServiceMalfunctioningError"
        except ServiceMalfunctioningError as e:
            assert e.message == "Billogram API reported a server error: INTERNAL_ERROR - Boom"
            assert e.status_code == 500
            assert e.response_data["status"] == "INTERNAL_ERROR"

    def test_server_error_without_json(self):
        try:
            parse_api_response(make_response(502, text="Bad gateway"))
            assert False, "Should have raised ServiceMalfunctioningError"
        except ServiceMalfunctioningError as e:
            assert e.message == "Billogram API reported a server error"

    def test_server_error_with_broken_json(self):
        response = make_response(
            503, content=b"<html>", headers={"Content-Type": "application/json"}
        )
        with pytest.raises(ServiceMalfunctioningError):
            parse_api_response(response)

    def test_unexpected_content_type(self):
        try:
            parse_api_response(
                make_response(200, json={"status": "OK", "data": {}}),
                "application/pdf",
            )
            assert False, "Should have raised ServiceMalfunctioningError"
        except ServiceMalfunctioningError as e:
            assert e.message == "Billogram API returned unexpected content type"

    def test_unexpected_json_not_available_yet(self):
        try:
            parse_api_response(
                make_response(200, json={"status": "NOT_AVAILABLE_YET", "data": {}}),
                "application/pdf",
            )
            assert False, "Should have raised ObjectNotFoundError"
        except ObjectNotFoundError as e:
            assert e.message == "Object not available yet"

    def test_non_json_body_when_json_expected(self):
        with pytest.raises(ServiceMalfunctioningError):
            parse_api_response(make_response(200, text="hello"))

    def test_missing_status_field(self):
        try:
            parse_api_response(make_response(200, json={"data": {}}))
            assert False, "Should have raised ServiceMalfunctioningError"
        except ServiceMalfunctioningError as e:
            assert e.message == "Response data missing status field"

    def test_missing_data_field(self):
        try:
            parse_api_response(make_response(200, json={"status": "OK"}))
            assert False, "Should have raised ServiceMalfunctioningError"
        except ServiceMalfunctioningError as e:
            assert e.message == "Response data missing data field"


class TestAuthErrors:
    """Test 401 and 403 responses."""

    def test_401(self):
        with pytest.raises(InvalidAuthenticationError):
            parse_api_response(make_response(401, text="Unauthorized"))

    @pytest.mark.parametrize(
        ("status", "exc_class"),
        [
            ("PERMISSION_DENIED", NotAuthorizedError),
            ("INVALID_AUTH", InvalidAuthenticationError),
            ("MISSING_AUTH", RequestFormError),
            ("SOMETHING_ELSE", PermissionDeniedError),
        ],
    )
    def test_403_statuses(self, status, exc_class):
        with pytest.raises(BillogramAPIError) as exc_info:
            parse_api_response(make_response(403, json=error_envelope(status)))
        assert type(exc_info.value) is exc_class

    def test_missing_auth_is_request_form_error(self):
        try:
            parse_api_response(make_response(403, json=error_envelope("MISSING_AUTH")))
            assert False, "Should have raised RequestFormError"
        except RequestFormError as e:
            assert e.message == "No authentication data was given"
            assert not isinstance(e, NotAuthorizedError)

    def test_other_403_mentions_status(self):
        try:
            parse_api_response(make_response(403, json=error_envelope("WEIRD")))
            assert False, "Should have raised PermissionDeniedError"
        except PermissionDeniedError as e:
            assert e.message == "Permission denied, status=WEIRD"


class TestRequestErrors:
    """Test 404, 405 and payload status mapping."""

    def test_404_not_available_yet(self):
        try:
            parse_api_response(
                make_response(404, json={"status": "NOT_AVAILABLE_YET", "data": {}})
            )
            assert False, "Should have raised ObjectNotFoundError"
        except ObjectNotFoundError as e:
            assert e.message == "Object not available yet"
            assert e.status_code == 404

    def test_404_not_found(self):
        try:
            parse_api_response(make_response(404, json=error_envelope("NOT_FOUND")))
            assert False, "Should have raised ObjectNotFoundError"
        except ObjectNotFoundError as e:
            assert e.message == "Object not found"

    def test_405(self):
        try:
            parse_api_response(make_response(405, json=error_envelope("METHOD")))
            assert False, "Should have raised RequestFormError"
        except RequestFormError as e:
            assert e.message == "Invalid HTTP method"

    @pytest.mark.parametrize(
        ("status", "exc_class"),
        [
            ("MISSING_QUERY_PARAMETER", RequestFormError),
            ("INVALID_QUERY_PARAMETER", RequestFormError),
            ("INVALID_PARAMETER", InvalidFieldValueError),
            ("INVALID_PARAMETER_COMBINATION", InvalidFieldCombinationError),
            ("READ_ONLY_PARAMETER", ReadOnlyFieldError),
            ("UNKNOWN_PARAMETER", UnknownFieldError),
            ("INVALID_OBJECT_STATE", InvalidObjectStateError),
            ("SOME_NEW_STATUS", RequestDataError),
        ],
    )
    def test_payload_status_mapping(self, status, exc_class):
        with pytest.raises(BillogramAPIError) as exc_info:
            parse_api_response(
                make_response(400, json=error_envelope(status, "The message"))
            )
        assert type(exc_info.value) is exc_class
        assert exc_info.value.message == "The message"
        assert exc_info.value.status_code == 400

    def test_error_status_with_200(self):
        """Payload status is authoritative even on HTTP 200."""
        with pytest.raises(InvalidFieldValueError):
            parse_api_response(make_response(200, json=error_envelope("INVALID_PARAMETER")))

    def test_errors_are_httpx_status_errors(self):
        try:
            parse_api_response(make_response(400, json=error_envelope("INVALID_PARAMETER")))
            assert False, "Should have raised InvalidFieldValueError"
        except httpx.HTTPStatusError as e:
            assert e.response.status_code == 400
            assert str(e) == "[400] Something went wrong"
