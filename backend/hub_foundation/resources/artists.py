"""
Hub Foundation: Artist Resource
================================

What:  Transformer and controller serving artists.
"""

from hub_foundation.models.artist import Artist
from hub_foundation.schemas.artwork import ArtistSchema
from hub_foundation.services.model_accessor import SqlAlchemyModelAccessor
from hub_foundation.services.resource_controller import ResourceController
from hub_foundation.services.transformer import Transformer


class ArtistTransformer(Transformer):
    schema = ArtistSchema


artist_accessor = SqlAlchemyModelAccessor(Artist)

artist_controller = ResourceController(model=artist_accessor, transformer=ArtistTransformer)
