"""
Hub Foundation: Resource Schemas
=================================

What:  Pydantic models describing the rendered fields of each resource type.
How:   Transformers validate ORM records through these (`from_attributes`)
       and dump them in JSON mode; sparse fieldsets are applied afterwards.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ArtistSchema(BaseModel):
    """Rendered fields of an artist."""
    id: int = Field(description="Artist identifier")
    title: str = Field(description="Display name")
    birth_date: Optional[int] = Field(default=None, description="Year of birth")
    death_date: Optional[int] = Field(default=None, description="Year of death")
    is_artist: bool = Field(description="False for dealers, collectors and other agents")

    model_config = {"from_attributes": True}


class ArtworkSchema(BaseModel):
    """
    Rendered fields of an artwork.

    artist_title is flattened from the eagerly-loaded relationship so clients
    get the credit line without a second request.
    """
    id: int = Field(description="Artwork identifier")
    title: str = Field(description="Title of the artwork")
    date_display: Optional[str] = Field(default=None, description="Human-readable date")
    medium_display: Optional[str] = Field(default=None, description="Materials and technique")
    is_on_view: bool = Field(description="Currently installed in a gallery")
    is_public_domain: bool = Field(description="Image rights allow unrestricted reuse")
    artist_id: Optional[int] = Field(default=None, description="Primary credited artist")
    artist_title: Optional[str] = Field(default=None, description="Name of the primary artist")
    created_at: datetime = Field(description="When the record was imported (UTC)")

    model_config = {"from_attributes": True}
