"""Create artists and artworks tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the two tables served by the resource API.
How:   Integer primary keys (ids must pass the default validate_id policy),
       artworks.artist_id → artists.id with ON DELETE SET NULL, indexes for
       the nested artist listing and the on-view scope.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create artists, then artworks (which references artists)."""
    op.create_table(
        "artists",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False,
                  comment="Public identifier used in /artists/{id}"),
        sa.Column("title", sa.String(255), nullable=False,
                  comment="Display name of the agent"),
        sa.Column("birth_date", sa.Integer(), nullable=True,
                  comment="Year of birth, NULL when unknown"),
        sa.Column("death_date", sa.Integer(), nullable=True,
                  comment="Year of death, NULL when living or unknown"),
        sa.Column("is_artist", sa.Boolean(), nullable=False, server_default=sa.true(),
                  comment="False for agents who are not artists (dealers, collectors)"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "artworks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False,
                  comment="Public identifier used in /artworks/{id}"),
        sa.Column("title", sa.String(255), nullable=False,
                  comment="Title of the artwork"),
        sa.Column("date_display", sa.String(255), nullable=True,
                  comment="Human-readable date, e.g. 'c. 1884'"),
        sa.Column("medium_display", sa.Text(), nullable=True,
                  comment="Materials and technique as displayed on the label"),
        sa.Column("is_on_view", sa.Boolean(), nullable=False, server_default=sa.false(),
                  comment="Currently installed in a gallery"),
        sa.Column("is_public_domain", sa.Boolean(), nullable=False, server_default=sa.false(),
                  comment="Image rights allow unrestricted reuse"),
        sa.Column("artist_id", sa.Integer(), nullable=True,
                  comment="Primary credited artist"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text("CURRENT_TIMESTAMP"),
                  comment="When this record was first imported (UTC)"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["artist_id"], ["artists.id"], ondelete="SET NULL"),
    )

    op.create_index("idx_artworks_artist_id", "artworks", ["artist_id"])
    op.create_index("idx_artworks_is_on_view", "artworks", ["is_on_view"])


def downgrade() -> None:
    """Drop artworks before artists (foreign key order)."""
    op.drop_index("idx_artworks_is_on_view", table_name="artworks")
    op.drop_index("idx_artworks_artist_id", table_name="artworks")
    op.drop_table("artworks")
    op.drop_table("artists")
