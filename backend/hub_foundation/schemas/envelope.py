"""
Hub Foundation: Response Envelope Schemas
==========================================

What:  Pydantic models for the outer shape of every API response.
Who:   Produced by Transformer.item() / Transformer.collection() and by the
       global exception handlers; used as `response_model` by routes.

Shapes:
    Single item:          {"data": {...}}
    Paginated listing:    {"pagination": {...}, "data": [{...}, ...]}
    Id list (?ids=):      {"data": [{...}, ...]}
    Error:                {"status": 404, "error": "item_not_found", ...}
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_serializer


class Pagination(BaseModel):
    """
    Pagination block rendered next to a paginated collection.

    offset and total_pages are derived from current_page/limit/total;
    prev_url/next_url are absolute URLs or null at either end.
    """
    total: int = Field(description="Records matching the query across all pages")
    limit: int = Field(description="Page size actually applied")
    offset: int = Field(description="Index of the first record on this page")
    total_pages: int = Field(description="Number of pages at this limit")
    current_page: int = Field(description="1-based page number")
    prev_url: Optional[str] = Field(default=None, description="URL of the previous page")
    next_url: Optional[str] = Field(default=None, description="URL of the next page")


class ItemResponse(BaseModel):
    """A single rendered resource."""
    data: Dict[str, Any] = Field(description="The rendered resource")


class CollectionResponse(BaseModel):
    """
    A rendered collection of resources.

    `pagination` is omitted from the body for ?ids= lookups, which are not
    paginated. Null fields inside `data` are left alone.
    """
    pagination: Optional[Pagination] = Field(default=None, description="Present for paginated listings")
    data: List[Dict[str, Any]] = Field(description="The rendered resources")

    @model_serializer(mode="wrap")
    def _omit_missing_pagination(self, handler):
        payload = handler(self)
        if payload.get("pagination") is None:
            payload.pop("pagination", None)
        return payload


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "status": 403,
            "error": "big_limit",
            "message": "You have requested too many resources per page. ...",
            "details": {"limit": 5000, "limit_max": 1000},
            "request_id": "3f2a9c1b"
        }
    """
    status: int = Field(description="HTTP status code")
    error: str = Field(description="Machine-readable error code (ErrorKind value)")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
