"""
Hub Foundation: Artist Route Handlers
======================================

What:  GET /artists, GET /artists/{id} and the nested GET /artists/{id}/artworks.
How:   Thin handlers delegating to the artist and artist-artworks controllers.
"""

from fastapi import APIRouter, Depends

from hub_foundation.config import settings
from hub_foundation.request_context import RequestContext, get_request_context
from hub_foundation.resources.artists import artist_controller
from hub_foundation.resources.artworks import artist_artworks_controller
from hub_foundation.schemas.envelope import CollectionResponse, ErrorResponse, ItemResponse

router = APIRouter(prefix=f"{settings.api_prefix}/artists", tags=["Artists"])


@router.get(
    "",
    response_model=CollectionResponse,
    responses={
        400: {"description": "Malformed id in ?ids= or malformed ?limit=", "model": ErrorResponse},
        403: {"description": "?limit= or ?ids= above the maximum", "model": ErrorResponse},
    },
    summary="List artists",
)
async def list_artists(
    ctx: RequestContext = Depends(get_request_context),
) -> CollectionResponse:
    return await artist_controller.index(ctx)


@router.get(
    "/{id}",
    response_model=ItemResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Artist not found", "model": ErrorResponse},
    },
    summary="Get a single artist by id",
)
async def get_artist(
    id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> ItemResponse:
    return await artist_controller.show(ctx, id)


@router.get(
    "/{id}/artworks",
    response_model=CollectionResponse,
    responses={
        400: {"description": "Malformed artist id", "model": ErrorResponse},
        403: {"description": "?limit= or ?ids= above the maximum", "model": ErrorResponse},
    },
    summary="List artworks credited to an artist",
    description=(
        "Returns a page of the artist's artworks. An unknown artist yields an "
        "empty page rather than a 404."
    ),
)
async def list_artist_artworks(
    id: str,
    ctx: RequestContext = Depends(get_request_context),
) -> CollectionResponse:
    # `id` is declared for the OpenAPI docs; the controller reads it from ctx
    return await artist_artworks_controller.index(ctx)
