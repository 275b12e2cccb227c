"""Exceptions for the BillogramPy library."""

from typing import Any

import httpx


class BillogramAPIError(httpx.HTTPStatusError):
    """Base exception for all Billogram API errors.

    Extends httpx.HTTPStatusError so users can catch both BillogramAPIError
    and httpx.HTTPStatusError to handle API errors.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
        request: httpx.Request | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize BillogramAPIError.

        Args:
            message: Error message
            status_code: HTTP status code from the API response
            response_data: Decoded JSON envelope from the API, if any
            request: The request that caused the error
            response: The response from the API
        """
        if request and response:
            super().__init__(message, request=request, response=response)
        else:
            # Raised client-side, before or without a round trip
            Exception.__init__(self, message)

        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ServiceMalfunctioningError(BillogramAPIError):
    """Raised when the API misbehaves: 5xx, missing content type, bad envelope."""

    pass


class InvalidAuthenticationError(BillogramAPIError):
    """Raised when the user/key combination is rejected (401 or INVALID_AUTH)."""

    pass


class NotAuthorizedError(BillogramAPIError):
    """Raised when the credentials may not perform the operation (PERMISSION_DENIED)."""

    pass


class PermissionDeniedError(BillogramAPIError):
    """Raised for any other 403 response."""

    pass


class RequestFormError(BillogramAPIError):
    """Raised when the request itself is malformed.

    Covers missing or invalid query parameters, a wrong HTTP method and
    requests sent without authentication data.
    """

    pass


class InvalidFieldValueError(BillogramAPIError):
    """Raised when a field has an invalid value (INVALID_PARAMETER)."""

    pass


class InvalidFieldCombinationError(BillogramAPIError):
    """Raised when fields are valid alone but not together."""

    pass


class ReadOnlyFieldError(BillogramAPIError):
    """Raised when attempting to write a read-only field."""

    pass


class UnknownFieldError(BillogramAPIError):
    """Raised for fields or resources that do not exist."""

    pass


class InvalidObjectStateError(BillogramAPIError):
    """Raised when the object is in the wrong state for the operation."""

    pass


class RequestDataError(BillogramAPIError):
    """Raised for any other error in the request data."""

    pass


class ObjectNotFoundError(BillogramAPIError):
    """Raised when an object does not exist or is not available yet (404).

    Generated documents such as PDFs report "Object not available yet"
    until the service has produced them; callers may poll on that message.
    """

    pass
