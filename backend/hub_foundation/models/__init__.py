# Models package init
"""
Hub Foundation: ORM Models
===========================

Import every model here so Alembic's --autogenerate and the test suite's
`Base.metadata.create_all` see the full schema.
"""

from hub_foundation.models.artist import Artist
from hub_foundation.models.artwork import Artwork

__all__ = ["Artist", "Artwork"]
