"""Pydantic models for the Billogram API wire format."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ResponseMeta(BaseModel):
    """Metadata attached to list responses."""

    model_config = ConfigDict(extra="allow")

    total_count: int | None = None


class ApiResponse(BaseModel):
    """Decoded JSON envelope of a successful API response.

    ``data`` is the payload exactly as the server sent it.
    """

    model_config = ConfigDict(extra="allow")

    status: str
    data: Any
    meta: ResponseMeta | None = None


class QueryFilter(BaseModel):
    """The single active filter of a query."""

    model_config = ConfigDict(frozen=True)

    filter_type: str | None = None
    filter_field: str | None = None
    filter_value: Any = None

    def to_params(self) -> dict[str, Any]:
        """Return the filter as list request parameters, leaving out unset members."""
        return self.model_dump(exclude_none=True)


class QueryOrder(BaseModel):
    """Sort order of a query."""

    model_config = ConfigDict(frozen=True)

    order_field: str
    order_direction: Literal["asc", "desc"] = Field(default="asc")

    def to_params(self) -> dict[str, Any]:
        """Return the order as list request parameters."""
        return self.model_dump()
