"""
Hub Foundation: Request Context
================================

What:  An explicit, per-request value carrying everything a resource
       controller reads from the inbound request.
Why:   The controller never touches global request state. Tests build a
       RequestContext by hand; routes get one from the FastAPI dependency.
How:   `get_request_context` snapshots the Starlette request (method, URL,
       path segments, route params, query params) and attaches the
       request-scoped database session.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import URL

from hub_foundation.database import get_db_session


@dataclass(frozen=True)
class RequestContext:
    """
    Read-only view of one inbound request.

    Attributes:
        method:        HTTP method, upper-case
        path:          URL path, e.g. /api/v1/artworks/on-view
        route_params:  Path parameters by name (e.g. {"id": "12"})
        query:         Query-string parameters; a repeated key keeps its last value
        db:            Request-scoped database session
        base_url:      Scheme + host used to build absolute pagination links
    """
    method: str = "GET"
    path: str = "/"
    route_params: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    db: Optional[AsyncSession] = None
    base_url: str = "http://localhost"

    @classmethod
    def from_request(cls, request: Request, db: Optional[AsyncSession] = None) -> "RequestContext":
        return cls(
            method=request.method.upper(),
            path=request.url.path,
            route_params=dict(request.path_params),
            query=dict(request.query_params),
            db=db,
            base_url=f"{request.url.scheme}://{request.url.netloc}",
        )

    @property
    def segments(self) -> List[str]:
        """Non-empty path segments, e.g. ["api", "v1", "artworks", "on-view"]."""
        return [segment for segment in self.path.split("/") if segment]

    @property
    def url(self) -> str:
        """Absolute URL of the request, query string included."""
        url = URL(f"{self.base_url.rstrip('/')}{self.path}")
        return str(url.include_query_params(**self.query))

    def route(self, name: str, default: Any = None) -> Any:
        return self.route_params.get(name, default)

    def input(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.query.get(name, default)

    def segment(self, offset: int) -> Optional[str]:
        """Path segment at `offset`; negative offsets count from the end."""
        segments = self.segments
        try:
            return segments[offset]
        except IndexError:
            return None


async def get_request_context(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> RequestContext:
    """FastAPI dependency building the RequestContext for a route handler."""
    return RequestContext.from_request(request, db)
