"""Base client functionality for Billogram API."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, BinaryIO

import httpx

from billogrampy._version import __version__
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

JSON_CONTENT_TYPE = "application/json"

INVALID_AUTH_MESSAGE = (
    "The user/key combination is wrong, check the credentials used "
    "and possibly generate a new set"
)

# Payload status -> error raised when it is not one of the 403/404 cases
STATUS_ERRORS: dict[str, type[BillogramAPIError]] = {
    "MISSING_QUERY_PARAMETER": RequestFormError,
    "INVALID_QUERY_PARAMETER": RequestFormError,
    "INVALID_PARAMETER": InvalidFieldValueError,
    "INVALID_PARAMETER_COMBINATION": InvalidFieldCombinationError,
    "READ_ONLY_PARAMETER": ReadOnlyFieldError,
    "UNKNOWN_PARAMETER": UnknownFieldError,
    "INVALID_OBJECT_STATE": InvalidObjectStateError,
}


class ClientConfig:
    """Configuration for Billogram API client."""

    BASE_URL = "https://billogram.com/api/v2"
    USER_AGENT = f"BillogramPy/{__version__}"
    DEFAULT_TIMEOUT = 10.0


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _decode_json(response: httpx.Response) -> dict[str, Any] | None:
    """Decode a JSON body, returning None if it is not a JSON object."""
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _payload_message(payload: dict[str, Any]) -> str:
    data = payload.get("data")
    if isinstance(data, dict):
        return str(data.get("message", ""))
    return ""


def parse_api_response(
    response: httpx.Response,
    expect_content_type: str | None = None,
) -> ApiResponse | bytes:
    """Classify an API response into decoded data or a typed error.

    The checks run in a fixed order; later checks rely on earlier ones
    having passed.

    Args:
        response: HTTP response from the API
        expect_content_type: Content type the caller asked for. Only honoured
            on 200 responses, anything else is expected to be JSON.

    Returns:
        The decoded envelope for JSON responses, or the raw body for other
        expected content types

    Raises:
        BillogramAPIError: The subclass matching the failure
    """
    status_code = response.status_code
    request = response.request

    def error(
        exc_class: type[BillogramAPIError],
        message: str,
        payload: dict[str, Any] | None = None,
    ) -> BillogramAPIError:
        return exc_class(message, status_code, payload, request, response)

    if status_code != 200 or expect_content_type is None:
        expect_content_type = JSON_CONTENT_TYPE
    expected = _media_type(expect_content_type)

    if "Content-Type" not in response.headers:
        raise error(
            ServiceMalfunctioningError,
            "Billogram API did not return a content type",
        )
    actual = _media_type(response.headers["Content-Type"])

    if 500 <= status_code <= 600:
        if actual == expected == JSON_CONTENT_TYPE:
            payload = _decode_json(response)
            if payload is not None:
                raise error(
                    ServiceMalfunctioningError,
                    "Billogram API reported a server error: "
                    f"{payload.get('status')} - {_payload_message(payload)}",
                    payload,
                )
        raise error(ServiceMalfunctioningError, "Billogram API reported a server error")

    if status_code == 401:
        raise error(InvalidAuthenticationError, INVALID_AUTH_MESSAGE)

    if actual != expected and actual == JSON_CONTENT_TYPE:
        payload = _decode_json(response)
        if payload is not None and payload.get("status") == "NOT_AVAILABLE_YET":
            raise error(ObjectNotFoundError, "Object not available yet", payload)
        raise error(
            ServiceMalfunctioningError,
            "Billogram API returned unexpected content type",
            payload,
        )

    if expected != JSON_CONTENT_TYPE:
        return response.content

    payload = _decode_json(response)
    if payload is None:
        raise error(ServiceMalfunctioningError, "Billogram API returned invalid JSON")
    status = payload.get("status")
    if not status:
        raise error(
            ServiceMalfunctioningError, "Response data missing status field", payload
        )
    if payload.get("data") is None:
        raise error(
            ServiceMalfunctioningError, "Response data missing data field", payload
        )

    if status_code == 403:
        if status == "PERMISSION_DENIED":
            raise error(
                NotAuthorizedError,
                "Not allowed to perform the requested operation",
                payload,
            )
        elif status == "INVALID_AUTH":
            raise error(InvalidAuthenticationError, INVALID_AUTH_MESSAGE, payload)
        elif status == "MISSING_AUTH":
            raise error(RequestFormError, "No authentication data was given", payload)
        raise error(PermissionDeniedError, f"Permission denied, status={status}", payload)

    if status_code == 404:
        if status == "NOT_AVAILABLE_YET":
            raise error(ObjectNotFoundError, "Object not available yet", payload)
        raise error(ObjectNotFoundError, "Object not found", payload)

    if status_code == 405:
        raise error(RequestFormError, "Invalid HTTP method", payload)

    if status == "OK":
        return ApiResponse.model_validate(payload)

    exc_class = STATUS_ERRORS.get(status, RequestDataError)
    raise error(exc_class, _payload_message(payload), payload)


def prepare_attachment(
    file: Path | str | BinaryIO,
    filename: str | None = None,
) -> tuple[str, str]:
    """Prepare a PDF attachment for upload.

    Args:
        file: File path, file path string, or file-like object
        filename: Optional filename override

    Returns:
        Tuple of (filename, base64 encoded content)
    """
    if isinstance(file, (Path, str)):
        file_path = Path(file)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        actual_filename = filename or file_path.name
        file_bytes = file_path.read_bytes()
    else:
        actual_filename = filename or getattr(file, "name", None) or "attachment.pdf"
        actual_filename = Path(actual_filename).name
        file_bytes = file.read()

    return actual_filename, base64.b64encode(file_bytes).decode("ascii")
