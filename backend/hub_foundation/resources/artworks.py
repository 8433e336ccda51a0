"""
Hub Foundation: Artwork Resource
=================================

What:  Accessor, transformer and controllers serving artworks.

Scopes:
    onView        /artworks/on-view        artworks installed in a gallery
    publicDomain  /artworks/public-domain  artworks with unrestricted images
"""

from typing import Any, Dict, Type

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from hub_foundation.exceptions import InvalidSyntaxError
from hub_foundation.models.artwork import Artwork
from hub_foundation.request_context import RequestContext
from hub_foundation.schemas.artwork import ArtworkSchema
from hub_foundation.schemas.envelope import CollectionResponse
from hub_foundation.services.model_accessor import Page, SqlAlchemyModelAccessor
from hub_foundation.services.resource_controller import ResourceController
from hub_foundation.services.transformer import Transformer


class ArtworkAccessor(SqlAlchemyModelAccessor):
    """Artworks always load their artist; the transformer renders its title."""

    def base_query(self) -> Select:
        return select(Artwork).options(selectinload(Artwork.artist))


class ArtworkTransformer(Transformer):
    schema = ArtworkSchema

    def transform(self, artwork: Artwork) -> Dict[str, Any]:
        data = super().transform(artwork)
        data["artist_title"] = artwork.artist.title if artwork.artist else None
        return data


def _on_view(query: Select) -> Select:
    return query.where(Artwork.is_on_view.is_(True))


def _public_domain(query: Select) -> Select:
    return query.where(Artwork.is_public_domain.is_(True))


artwork_accessor = ArtworkAccessor(
    Artwork,
    scopes={
        "onView": _on_view,
        "publicDomain": _public_domain,
    },
)


class ArtistArtworksController(ResourceController):
    """
    Artworks credited to one artist: GET /artists/{id}/artworks.

    Uses the route `id` that collect() hands to the list callback. An artist
    with no artworks (or no such artist) yields an empty page, not a 404.
    ?ids= still short-circuits to a plain id lookup.

    Filtering by artist builds SQL, so the accessor must be a
    SqlAlchemyModelAccessor rather than any ModelAccessor.
    """

    def __init__(self, model: SqlAlchemyModelAccessor, transformer: Type[Transformer]):
        if not isinstance(model, SqlAlchemyModelAccessor):
            raise TypeError(
                f"{type(self).__name__} needs a SqlAlchemyModelAccessor, got {type(model).__name__}"
            )
        super().__init__(model, transformer)

    @property
    def model(self) -> SqlAlchemyModelAccessor:
        return self._model

    async def index(self, request: RequestContext) -> CollectionResponse:
        return await self.collect(
            request, lambda limit, id: self.paginate_for_artist(request, limit, id)
        )

    async def paginate_for_artist(self, request: RequestContext, limit: int, artist_id: Any) -> Page:
        if not self.validate_id(artist_id):
            raise InvalidSyntaxError(value=artist_id)

        page = self.current_page(request)

        # artist_id shares the integer key type of artworks.id
        artist_key = self.model.coerce_id(artist_id)
        if artist_key is None:
            return Page(items=[], total=0, limit=limit, current_page=page)

        accessor = self.model.filtered(lambda query: query.where(Artwork.artist_id == artist_key))

        return await accessor.paginate(request.db, limit, page)


artwork_controller = ResourceController(model=artwork_accessor, transformer=ArtworkTransformer)
artist_artworks_controller = ArtistArtworksController(
    model=artwork_accessor, transformer=ArtworkTransformer
)
