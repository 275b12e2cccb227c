"""Paginated queries over resource collections."""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, cast

from billogrampy.models import ApiResponse, QueryFilter, QueryOrder

if TYPE_CHECKING:
    from billogrampy.client import BillogramClient
    from billogrampy.objects import SimpleObject
    from billogrampy.resources import SimpleClass

DEFAULT_PAGE_SIZE = 100


class Query:
    """Builds queries and fetches pages of remote objects.

    The service can only filter on a single field or special query at a
    time, so setting a filter replaces the previous one. The fields and
    special queries available depend on the object type.

    Pages are fetched independently: changing the filter between pages
    shifts the offsets of the pages that follow.

    Iterating a query walks all pages in order.
    """

    def __init__(self, client: BillogramClient, type_class: SimpleClass) -> None:
        """Initialize query.

        Args:
            client: Client the requests are made through
            type_class: Collection whose objects are queried
        """
        self._client = client
        self.type_class = type_class
        self._filter: QueryFilter | None = None
        self._order: QueryOrder | None = None
        self._page_size = DEFAULT_PAGE_SIZE
        self._count_cached: int | None = None

    def __iter__(self) -> Iterator[SimpleObject]:
        """Iterate over the objects of every page."""
        page = 1
        while True:
            objects = self.get_page(page)
            yield from objects
            if not objects or page >= self.total_pages():
                return
            page += 1

    @property
    def params(self) -> dict[str, Any]:
        """Filter and order parameters sent with every list request."""
        params: dict[str, Any] = {}
        if self._filter is not None:
            params.update(self._filter.to_params())
        if self._order is not None:
            params.update(self._order.to_params())
        return params

    def _make_query(self, page_number: int = 1) -> ApiResponse:
        params: dict[str, Any] = {
            "page_size": self._page_size,
            "page": page_number,
        }
        params.update(self.params)
        response = cast(ApiResponse, self._client.get(self.type_class.url(), params))
        if response.meta is not None:
            self._count_cached = response.meta.total_count
        return response

    def order(self, order_field: str, order_direction: str = "asc") -> Query:
        """Set the field to order on; direction is ``asc`` or ``desc``."""
        self._order = QueryOrder(order_field=order_field, order_direction=order_direction)
        self._count_cached = None
        return self

    def page_size(self, page_size: int) -> Query:
        """Set the number of objects per page.

        Raises:
            ValueError: If page_size is not a positive integer
        """
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
            raise ValueError("page_size must be a positive integer")
        self._page_size = page_size
        self._count_cached = None
        return self

    def count(self) -> int:
        """Total number of objects matched by the query.

        May cause a remote request, fetching a single object to read the count.
        """
        if self._count_cached is None:
            page_size = self._page_size
            self._page_size = 1
            try:
                self._make_query(1)
            finally:
                self._page_size = page_size
        return self._count_cached or 0

    def total_pages(self) -> int:
        """Number of pages needed for all objects at the current page size."""
        return math.ceil(self.count() / self._page_size)

    def make_filter(
        self,
        filter_type: str | None = None,
        filter_field: str | None = None,
        filter_value: Any = None,
    ) -> Query:
        """Set the filter of the query, replacing any previous one.

        Called without arguments it removes the filter.
        """
        if filter_type is None and filter_field is None and filter_value is None:
            self._filter = None
        else:
            self._filter = QueryFilter(
                filter_type=filter_type,
                filter_field=filter_field,
                filter_value=filter_value,
            )
        self._count_cached = None
        return self

    def remove_filter(self) -> Query:
        """Remove any filter from the query."""
        return self.make_filter()

    def filter_field(self, filter_field: str, filter_value: Any) -> Query:
        """Filter on an exact field value."""
        return self.make_filter("field", filter_field, filter_value)

    def filter_prefix(self, filter_field: str, filter_value: Any) -> Query:
        """Filter on field values starting with ``filter_value``."""
        return self.make_filter("field-prefix", filter_field, filter_value)

    def filter_search(self, filter_field: str, filter_value: Any) -> Query:
        """Filter on field values containing ``filter_value``."""
        return self.make_filter("field-search", filter_field, filter_value)

    def filter_special(self, filter_field: str, filter_value: Any) -> Query:
        """Filter on a special query."""
        return self.make_filter("special", filter_field, filter_value)

    def search(self, search_terms: str) -> Query:
        """Full data search; the meaning depends on the object type."""
        return self.make_filter("special", "search", search_terms)

    def get_page(self, page_number: int) -> list[SimpleObject]:
        """Fetch the objects on a one-based page number."""
        response = self._make_query(page_number)
        if not response.data:
            return []
        return [self.type_class.wrap(item) for item in response.data]
