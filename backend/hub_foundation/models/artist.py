"""
Hub Foundation: Artist SQLAlchemy Model
========================================

What:  ORM model representing the `artists` table.
Who:   Queried through the artists accessor; referenced by Artwork.artist_id.

Table Design:
    - Integer primary key: ids arrive in URLs and ?ids= lists and must pass
      the default validate_id policy (positive integers)
    - birth_date / death_date: years only, nullable for unknown dates
    - is_artist: agents also include dealers and collectors
"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column

from hub_foundation.database import Base


class Artist(Base):
    """An agent credited on one or more artworks."""

    __tablename__ = "artists"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Public identifier used in /artists/{id}",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the agent",
    )

    birth_date: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of birth, NULL when unknown",
    )

    death_date: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of death, NULL when living or unknown",
    )

    is_artist: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
        comment="False for agents who are not artists (dealers, collectors)",
    )

    def __repr__(self) -> str:
        return f"<Artist(id={self.id}, title='{self.title}')>"
