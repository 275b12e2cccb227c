"""Pytest fixtures for BillogramPy tests."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from billogrampy import BillogramClient


@pytest.fixture
def auth_user() -> str:
    """Return a test API user id."""
    return "1234-sampleId"


@pytest.fixture
def auth_key() -> str:
    """Return a test API key."""
    return "0123456789abcdef0123456789abcdef"


@pytest.fixture
def base_url() -> str:
    """Return the base API URL."""
    return "https://billogram.com/api/v2"


@pytest.fixture
def client(auth_user: str, auth_key: str) -> Iterator[BillogramClient]:
    """Create a BillogramClient for testing."""
    client = BillogramClient(auth_user, auth_key)
    yield client
    client.close()


@pytest.fixture
def ok() -> Callable[..., dict[str, Any]]:
    """Return a builder for successful response envelopes."""

    def build(data: Any, total_count: int | None = None) -> dict[str, Any]:
        envelope: dict[str, Any] = {"status": "OK", "data": data}
        if total_count is not None:
            envelope["meta"] = {"total_count": total_count}
        return envelope

    return build


@pytest.fixture
def mock_customer() -> dict[str, Any]:
    """Return mock customer data."""
    return {
        "customer_no": 1,
        "name": "Company 1 AB",
        "address": {
            "street_address": "Street 22",
            "zipcode": "12345",
            "city": "Stockholm",
            "country": "SE",
        },
        "contact": {"email": "invoicing@example.org"},
    }


@pytest.fixture
def mock_billogram() -> dict[str, Any]:
    """Return mock invoice data."""
    return {
        "id": "abc123",
        "state": "Unattested",
        "invoice_date": "2013-09-11",
        "due_date": "2013-10-11",
        "currency": "SEK",
        "customer": {"customer_no": 1},
        "items": [{"count": 1, "price": 300, "vat": 25, "title": "Test item"}],
    }

