"""Remote objects: local proxies for entities living on the Billogram service."""

from __future__ import annotations

import base64
import binascii
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO, cast

from billogrampy.client_base import JSON_CONTENT_TYPE, prepare_attachment
from billogrampy.exceptions import (
    InvalidFieldValueError,
    ServiceMalfunctioningError,
    UnknownFieldError,
)
from billogrampy.models import ApiResponse

if TYPE_CHECKING:
    from billogrampy.client import BillogramClient
    from billogrampy.resources import SimpleClass

SEND_METHODS = ("Email", "Letter", "Email+Letter")
REMINDER_METHODS = ("Email", "Letter")


class RemoteObject(ABC):
    """Base proxy for a remote object.

    An object is either lazy (no cached data) or loaded. Every field read
    goes through :meth:`ensure_loaded`, so a lazy object is fetched on first
    access and served from the cache afterwards. The cached data should be
    treated as read-only; change the remote object through :meth:`update`.
    """

    def __init__(self, client: BillogramClient, data: dict[str, Any] | None = None):
        self._client = client
        self._data: dict[str, Any] | None = None
        if data is not None:
            self.replace_data(data)

    @abstractmethod
    def url(self) -> str:
        """Return the API url of this object, relative to the base url."""

    @property
    def is_loaded(self) -> bool:
        """Whether the object data has been fetched."""
        return self._data is not None

    def ensure_loaded(self) -> dict[str, Any]:
        """Fetch the object if it is still lazy and return its data."""
        if self._data is None:
            self.refresh()
        return cast(dict[str, Any], self._data)

    @property
    def data(self) -> dict[str, Any]:
        """The backing mapping of the object, loading it if needed."""
        return self.ensure_loaded()

    def get_field(self, key: str) -> Any:
        """Read a single field of the object.

        Raises:
            UnknownFieldError: If the object has no such field
        """
        data = self.ensure_loaded()
        if key not in data:
            raise UnknownFieldError(f"Invalid parameter: {key}")
        return data[key]

    def __getitem__(self, key: str) -> Any:
        return self.get_field(key)

    def __contains__(self, key: object) -> bool:
        return key in self.ensure_loaded()

    def refresh(self) -> RemoteObject:
        """Re-fetch the object and replace the local data."""
        response = cast(ApiResponse, self._client.get(self.url()))
        self.replace_data(response.data)
        return self

    def update(self, data: dict[str, Any]) -> RemoteObject:
        """Update the remote object with ``data`` and store the result."""
        response = self._client.put(self.url(), data)
        self.replace_data(response.data)
        return self

    def replace_data(self, data: Any) -> None:
        """Replace the local data with object data returned by the API."""
        if not isinstance(data, dict):
            raise ServiceMalfunctioningError(
                "Billogram API returned object data that is not a mapping"
            )
        self._data = dict(data)

    def __repr__(self) -> str:
        lazy = " (lazy)" if self._data is None else ""
        return f"<Billogram object '{self.url()}'{lazy}>"


class SingletonObject(RemoteObject):
    """A remote object with a fixed url, such as ``settings``.

    Starts out lazy.
    """

    def __init__(self, client: BillogramClient, url_name: str):
        super().__init__(client)
        self._url_name = url_name

    def url(self) -> str:
        return self._url_name


class SimpleObject(RemoteObject):
    """A remote object that is a member of a resource collection."""

    def __init__(
        self,
        client: BillogramClient,
        object_class: SimpleClass,
        data: dict[str, Any],
    ):
        super().__init__(client, data)
        self.object_class = object_class

    def url(self) -> str:
        return self.object_class.url(self)

    def delete(self) -> None:
        """Delete the remote object.

        The local proxy must not be used afterwards.
        """
        self._client.delete(self.url())


class EventDispatcher:
    """Performs state transition events on a remote object.

    Each event is a POST to ``<object url>/command/<event>``; the response
    carries the new state of the object, which replaces its local data.
    """

    def __init__(self, client: BillogramClient, target: RemoteObject):
        self._client = client
        self._target = target

    def dispatch(self, event_name: str, event_data: dict[str, Any] | None = None) -> None:
        url = f"{self._target.url()}/command/{event_name}"
        response = self._client.post(url, event_data)
        self._target.replace_data(response.data)


class BillogramObject(SimpleObject):
    """An invoice ("billogram") on the Billogram service.

    Adds the event methods that move an invoice through its life cycle.
    """

    def __init__(
        self,
        client: BillogramClient,
        object_class: SimpleClass,
        data: dict[str, Any],
    ):
        super().__init__(client, object_class, data)
        self._events = EventDispatcher(client, self)

    def perform_event(
        self, event_name: str, event_data: dict[str, Any] | None = None
    ) -> BillogramObject:
        """Perform an event on the invoice.

        Args:
            event_name: Event name, e.g. ``send`` or ``credit``
            event_data: Optional event parameters

        Returns:
            The invoice, updated with the state returned by the API
        """
        self._events.dispatch(event_name, event_data)
        return self

    def create_payment(self, amount: int | float) -> BillogramObject:
        """Store a manual payment for the invoice."""
        return self.perform_event("payment", {"amount": amount})

    def credit_amount(self, amount: int | float) -> BillogramObject:
        """Create a credit invoice for a specific amount.

        Raises:
            InvalidFieldValueError: If amount is not a positive number
        """
        if (
            isinstance(amount, bool)
            or not isinstance(amount, (int, float))
            or amount <= 0
        ):
            raise InvalidFieldValueError("'amount' must be a positive numeric value")
        return self.perform_event("credit", {"mode": "amount", "amount": amount})

    def credit_full(self) -> BillogramObject:
        """Create a credit invoice for the full total amount of the invoice."""
        return self.perform_event("credit", {"mode": "full"})

    def credit_remaining(self) -> BillogramObject:
        """Create a credit invoice for the remaining amount of the invoice."""
        return self.perform_event("credit", {"mode": "remaining"})

    def send_message(self, message: str) -> BillogramObject:
        """Write a comment/message on the invoice."""
        return self.perform_event("message", {"message": message})

    def send_to_collector(self) -> BillogramObject:
        """Send the invoice for collection. Requires a collectors agreement."""
        return self.perform_event("collect")

    def send_to_factoring(self) -> BillogramObject:
        """Sell the invoice to factoring. Requires a factoring agreement."""
        return self.perform_event("sell")

    def send_reminder(self, method: str | None = None) -> BillogramObject:
        """Manually send a reminder for an overdue invoice.

        Args:
            method: ``Email`` or ``Letter``; the account default when omitted
        """
        if method:
            if method not in REMINDER_METHODS:
                raise InvalidFieldValueError("'method' must be either 'Email' or 'Letter'")
            return self.perform_event("remind", {"method": method})
        return self.perform_event("remind")

    def send(self, method: str) -> BillogramObject:
        """Send an unsent invoice using ``Email``, ``Letter`` or ``Email+Letter``."""
        if method not in SEND_METHODS:
            raise InvalidFieldValueError(
                "'method' must be either 'Email', 'Letter' or 'Email+Letter'"
            )
        return self.perform_event("send", {"method": method})

    def resend(self, method: str | None = None) -> BillogramObject:
        """Resend the invoice via ``Email`` or ``Letter``."""
        if method:
            if method not in REMINDER_METHODS:
                raise InvalidFieldValueError("'method' must be either 'Email' or 'Letter'")
            return self.perform_event("resend", {"method": method})
        return self.perform_event("resend")

    def get_invoice_pdf(
        self, letter_id: str | None = None, invoice_no: int | None = None
    ) -> bytes:
        """Return the PDF content of the invoice, or of one of its letters.

        Raises:
            ObjectNotFoundError: With message "Object not available yet" if
                the PDF has not been generated yet. Poll and retry on it.
        """
        params: dict[str, Any] = {}
        if letter_id:
            params["letter_id"] = letter_id
        if invoice_no:
            params["invoice_no"] = invoice_no
        return self._fetch_pdf(f"{self.url()}.pdf", params)

    def get_attachment_pdf(self) -> bytes:
        """Return the PDF content of the invoice attachment."""
        return self._fetch_pdf(f"{self.url()}/attachment.pdf")

    def attach_pdf(
        self, file: Path | str | BinaryIO, filename: str | None = None
    ) -> BillogramObject:
        """Attach a PDF to the invoice.

        Args:
            file: File path, file path string, or file-like object
            filename: Optional filename override
        """
        actual_filename, content = prepare_attachment(file, filename)
        return self.perform_event(
            "attach", {"filename": actual_filename, "content": content}
        )

    def _fetch_pdf(self, url: str, params: dict[str, Any] | None = None) -> bytes:
        response = cast(
            ApiResponse, self._client.get(url, params or None, JSON_CONTENT_TYPE)
        )
        data = response.data
        if not isinstance(data, dict) or "content" not in data:
            raise ServiceMalfunctioningError("Response data missing content field")
        try:
            return base64.b64decode(data["content"], validate=True)
        except (binascii.Error, TypeError) as e:
            raise ServiceMalfunctioningError("Response data has invalid content field") from e
