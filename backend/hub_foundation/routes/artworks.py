"""
Hub Foundation: Artwork Route Handlers
=======================================

What:  GET endpoints for artworks, including the scoped listings.
How:   Each handler receives a RequestContext and delegates to the artwork
       controller; the controller does all validation and rendering.

Query parameters (read by the controller, not declared per route):
    ids     Comma-separated ids; returns exactly those records, unpaginated
    limit   Page size (default 12, max 1000)
    page    1-based page number
    fields  Comma-separated field names for sparse fieldsets

Route order matters: the scope routes are declared before /{id}, otherwise
"on-view" would be captured as an id and rejected as invalid syntax.
"""

from fastapi import APIRouter, Depends

from hub_foundation.config import settings
from hub_foundation.request_context import RequestContext, get_request_context
from hub_foundation.resources.artworks import artwork_controller
from hub_foundation.schemas.envelope import CollectionResponse, ErrorResponse, ItemResponse

router = APIRouter(prefix=f"{settings.api_prefix}/artworks", tags=["Artworks"])

LIST_RESPONSES = {
    400: {"description": "Malformed id in ?ids= or malformed ?limit=", "model": ErrorResponse},
    403: {"description": "?limit= or ?ids= above the maximum", "model": ErrorResponse},
}

ITEM_RESPONSES = {
    400: {"description": "Malformed id", "model": ErrorResponse},
    404: {"description": "Artwork not found", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=CollectionResponse,
    responses=LIST_RESPONSES,
    summary="List artworks",
)
async def list_artworks(
    ctx: RequestContext = Depends(get_request_context),
) -> CollectionResponse:
    return await artwork_controller.index(ctx)


@router.get(
    "/on-view",
    response_model=CollectionResponse,
    responses=LIST_RESPONSES,
    summary="List artworks currently on view",
)
async def list_artworks_on_view(
    ctx: RequestContext = Depends(get_request_context),
) -> CollectionResponse:
    return await artwork_controller.index_scope(ctx)


@router.get(
    "/public-domain",
    response_model=CollectionResponse,
    responses=LIST_RESPONSES,
    summary="List public-domain artworks",
)
async def list_artworks_public_domain(
    ctx: RequestContext = Depends(get_request_context),
) -> CollectionResponse:
    return await artwork_controller.index_scope(ctx)


@router.get(
    "/on-view/{id}",
    response_model=ItemResponse,
    responses=ITEM_RESPONSES,
    summary="Get an artwork that is currently on view",
)
async def get_artwork_on_view(
    id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> ItemResponse:
    return await artwork_controller.show_scope(ctx, id)


@router.get(
    "/public-domain/{id}",
    response_model=ItemResponse,
    responses=ITEM_RESPONSES,
    summary="Get a public-domain artwork",
)
async def get_artwork_public_domain(
    id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> ItemResponse:
    return await artwork_controller.show_scope(ctx, id)


@router.get(
    "/{id}",
    response_model=ItemResponse,
    responses=ITEM_RESPONSES,
    summary="Get a single artwork by id",
)
async def get_artwork(
    id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> ItemResponse:
    return await artwork_controller.show(ctx, id)
