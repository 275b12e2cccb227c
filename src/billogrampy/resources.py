"""Resource collections: the server-side lists of each object type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from billogrampy.exceptions import InvalidFieldValueError
from billogrampy.models import ApiResponse
from billogrampy.objects import SEND_METHODS, BillogramObject, SimpleObject
from billogrampy.query import Query

if TYPE_CHECKING:
    from billogrampy.client import BillogramClient


class SimpleClass:
    """A collection of remote objects on the Billogram service.

    Provides methods to fetch, create and query instances of the object type.
    """

    object_class: type[SimpleObject] = SimpleObject

    def __init__(self, client: BillogramClient, url_name: str, object_id_field: str):
        """Initialize the collection.

        Args:
            client: Client the requests are made through
            url_name: Url segment of the collection, e.g. ``customer``
            object_id_field: Field holding the id of each object
        """
        self._client = client
        self.url_name = url_name
        self.object_id_field = object_id_field

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.url_name}'>"

    def url(self, obj: SimpleObject | str | int | None = None) -> str:
        """Return the url of the collection, an object, or an object id."""
        if isinstance(obj, SimpleObject):
            return f"{self.url_name}/{obj[self.object_id_field]}"
        elif obj is not None and obj != "":
            return f"{self.url_name}/{obj}"
        return self.url_name

    def wrap(self, data: dict[str, Any]) -> SimpleObject:
        """Wrap object data returned by the API in this collection's object type."""
        return self.object_class(self._client, self, data)

    def query(self) -> Query:
        """Create a query for objects of this type."""
        return Query(self._client, self)

    def get(self, object_id: str | int) -> SimpleObject:
        """Fetch an object by its id.

        Raises:
            ObjectNotFoundError: If there is no such object
        """
        response = cast(ApiResponse, self._client.get(self.url(object_id)))
        return self.wrap(response.data)

    def create(self, data: dict[str, Any]) -> SimpleObject:
        """Create a new object from ``data`` and return it."""
        response = self._client.post(self.url(), data)
        return self.wrap(response.data)


class BillogramClass(SimpleClass):
    """The collection of invoices ("billogram" objects).

    Adds creation methods that state transition a new invoice immediately.
    """

    object_class: type[SimpleObject] = BillogramObject

    def __init__(self, client: BillogramClient):
        super().__init__(client, "billogram", "id")

    def get(self, object_id: str | int) -> BillogramObject:
        return cast(BillogramObject, super().get(object_id))

    def create(self, data: dict[str, Any]) -> BillogramObject:
        return cast(BillogramObject, super().create(data))

    def create_and_send(self, data: dict[str, Any], method: str) -> BillogramObject:
        """Create an invoice and send it with ``method``.

        If the API rejects the send with an invalid field value, the newly
        created invoice is deleted before the error is re-raised.

        Raises:
            InvalidFieldValueError: If method is not Email, Letter or
                Email+Letter, or the API rejects the send
        """
        if method not in SEND_METHODS:
            raise InvalidFieldValueError(
                "Invalid method, should be 'Email', 'Letter' or 'Email+Letter'"
            )
        billogram = self.create(data)
        try:
            billogram.send(method)
        except InvalidFieldValueError:
            billogram.delete()
            raise
        return billogram

    def create_and_sell(self, data: dict[str, Any]) -> BillogramObject:
        """Create an invoice and sell it to factoring in the same request."""
        return self.create({**data, "_event": "sell"})
