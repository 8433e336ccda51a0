"""
Hub Foundation: Artwork SQLAlchemy Model
=========================================

What:  ORM model representing the `artworks` table.
Who:   Queried through the artworks accessor and its scopes.

Query Patterns:
    - Single artwork:      WHERE id = :id            (primary key)
    - Multiple artworks:   WHERE id IN (:ids)        (primary key)
    - Scoped listings:     WHERE is_on_view = true   (idx_artworks_is_on_view)
    - Artworks by artist:  WHERE artist_id = :id     (idx_artworks_artist_id)
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hub_foundation.database import Base
from hub_foundation.models.artist import Artist


class Artwork(Base):
    """
    A catalogued artwork.

    `artist` is loaded eagerly by the artworks accessor (selectinload);
    lazy loading is disabled because async sessions cannot lazy-load.
    """

    __tablename__ = "artworks"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Public identifier used in /artworks/{id}",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Title of the artwork",
    )

    date_display: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Human-readable date, e.g. 'c. 1884'",
    )

    medium_display: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Materials and technique as displayed on the label",
    )

    is_on_view: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Currently installed in a gallery",
    )

    is_public_domain: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Image rights allow unrestricted reuse",
    )

    artist_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("artists.id", ondelete="SET NULL"),
        nullable=True,
        comment="Primary credited artist",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this record was first imported (UTC)",
    )

    artist: Mapped[Optional[Artist]] = relationship(Artist, lazy="raise")

    __table_args__ = (
        Index("idx_artworks_artist_id", "artist_id"),
        Index("idx_artworks_is_on_view", "is_on_view"),
    )

    def __repr__(self) -> str:
        return f"<Artwork(id={self.id}, title='{self.title}')>"
