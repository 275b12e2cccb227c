"""Billogram API client."""

from __future__ import annotations

import logging
import os
from typing import Any, cast

import httpx
from dotenv import load_dotenv

from billogrampy.auth import BasicAuth
from billogrampy.client_base import ClientConfig, parse_api_response
from billogrampy.exceptions import UnknownFieldError
from billogrampy.models import ApiResponse
from billogrampy.objects import SingletonObject
from billogrampy.resources import BillogramClass, SimpleClass

logger = logging.getLogger(__name__)


class BillogramClient:
    """Synchronous client for the Billogram v2 API.

    Resource collections and singleton objects are reached through the
    ``items``, ``customers``, ``billogram``, ``settings``, ``logotype``,
    ``reports`` and ``creditors`` properties. Each is created on first
    access and reused afterwards.

    The client is not thread-safe; use one client per thread.
    """

    def __init__(
        self,
        auth_user: str,
        auth_key: str,
        *,
        user_agent: str | None = None,
        base_url: str = ClientConfig.BASE_URL,
        extra_headers: dict[str, str] | None = None,
        timeout: float = ClientConfig.DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize Billogram client.

        Args:
            auth_user: API user id
            auth_key: API password/key
            user_agent: User-Agent header, identifies the application
            base_url: Base URL for API (default: https://billogram.com/api/v2)
            extra_headers: Headers added to every request
            timeout: Request timeout in seconds, handed to httpx
            http_client: Preconfigured httpx client to send requests with

        Raises:
            ValueError: If auth_user or auth_key is empty
        """
        if not auth_user or not auth_key:
            raise ValueError("Both auth_user and auth_key must be provided")

        self.auth = BasicAuth(auth_user, auth_key)
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent or ClientConfig.USER_AGENT
        self.extra_headers = dict(extra_headers or {})
        self.timeout = timeout

        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(timeout=self.timeout)
        self._resources: dict[str, SimpleClass | SingletonObject] = {}

    @classmethod
    def from_env(
        cls, dotenv_path: str | None = None, **kwargs: Any
    ) -> BillogramClient:
        """Create a client from environment variables.

        Reads ``BILLOGRAM_API_USER``, ``BILLOGRAM_API_KEY`` and optionally
        ``BILLOGRAM_API_BASE``, after loading a ``.env`` file if one is found.
        Existing environment variables take precedence over the file.

        Args:
            dotenv_path: Path to a .env file (default: search parent directories)
            **kwargs: Other constructor arguments

        Raises:
            ValueError: If the credentials are not set
        """
        load_dotenv(dotenv_path)
        auth_user = os.environ.get("BILLOGRAM_API_USER")
        auth_key = os.environ.get("BILLOGRAM_API_KEY")
        if not auth_user or not auth_key:
            raise ValueError(
                "BILLOGRAM_API_USER and BILLOGRAM_API_KEY must be set in the environment"
            )
        if "BILLOGRAM_API_BASE" in os.environ and "base_url" not in kwargs:
            kwargs["base_url"] = os.environ["BILLOGRAM_API_BASE"]
        return cls(auth_user, auth_key, **kwargs)

    def __enter__(self) -> BillogramClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client, unless it was passed in by the caller."""
        if self._owns_client:
            self.client.close()

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        headers.update(self.extra_headers)
        headers.update(self.auth.get_headers())
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        expect_content_type: str | None = None,
        **kwargs: Any,
    ) -> ApiResponse | bytes:
        """Make an authenticated HTTP request and classify the response.

        Args:
            method: HTTP method
            endpoint: API endpoint path, relative to the base url
            expect_content_type: Content type expected on success
            **kwargs: Additional arguments for httpx request

        Returns:
            Decoded response envelope, or raw body for non-JSON content

        Raises:
            BillogramAPIError: On API errors
        """
        headers = self._headers()
        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))

        url = f"{self.base_url}/{endpoint}"
        logger.debug("%s %s", method, url)
        response = self.client.request(
            method=method,
            url=url,
            headers=headers,
            timeout=self.timeout,
            **kwargs,
        )
        logger.debug("%s %s -> %s", method, url, response.status_code)

        return parse_api_response(response, expect_content_type)

    def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        expect_content_type: str | None = None,
    ) -> ApiResponse | bytes:
        """GET an object or a list of objects.

        Args:
            url: Object url, relative to the base url
            params: Query string parameters
            expect_content_type: Content type expected on success, JSON if None

        Returns:
            Decoded response envelope, or raw body for non-JSON content
        """
        return self._request("GET", url, expect_content_type, params=params or None)

    def post(self, url: str, data: dict[str, Any] | None) -> ApiResponse:
        """POST ``data`` to create an object or perform an event."""
        return cast(
            ApiResponse,
            self._request("POST", url, json=data if data is not None else {}),
        )

    def put(self, url: str, data: dict[str, Any]) -> ApiResponse:
        """PUT ``data`` to update a single existing object."""
        return cast(
            ApiResponse,
            self._request("PUT", url, json=data if data is not None else {}),
        )

    def delete(self, url: str) -> ApiResponse:
        """DELETE a single existing object."""
        return cast(ApiResponse, self._request("DELETE", url))

    # Resources

    def resource(self, name: str) -> SimpleClass | SingletonObject:
        """Return the collection or singleton object called ``name``.

        Raises:
            UnknownFieldError: If there is no resource with that name
        """
        if name not in self._resources:
            self._resources[name] = self._build_resource(name)
        return self._resources[name]

    def _build_resource(self, name: str) -> SimpleClass | SingletonObject:
        if name == "items":
            return SimpleClass(self, "item", "item_no")
        elif name == "customers":
            return SimpleClass(self, "customer", "customer_no")
        elif name == "billogram":
            return BillogramClass(self)
        elif name == "settings":
            return SingletonObject(self, "settings")
        elif name == "logotype":
            return SingletonObject(self, "logotype")
        elif name == "reports":
            return SimpleClass(self, "report", "filename")
        elif name == "creditors":
            return SimpleClass(self, "creditor", "id")
        raise UnknownFieldError(f"Invalid parameter: {name}")

    @property
    def items(self) -> SimpleClass:
        """Items (products and services) that can be put on invoices."""
        return cast(SimpleClass, self.resource("items"))

    @property
    def customers(self) -> SimpleClass:
        """Customers of the account."""
        return cast(SimpleClass, self.resource("customers"))

    @property
    def billogram(self) -> BillogramClass:
        """Invoices."""
        return cast(BillogramClass, self.resource("billogram"))

    @property
    def settings(self) -> SingletonObject:
        """Account settings."""
        return cast(SingletonObject, self.resource("settings"))

    @property
    def logotype(self) -> SingletonObject:
        """Logotype printed on invoices."""
        return cast(SingletonObject, self.resource("logotype"))

    @property
    def reports(self) -> SimpleClass:
        return cast(SimpleClass, self.resource("reports"))

    @property
    def creditors(self) -> SimpleClass:
        return cast(SimpleClass, self.resource("creditors"))
