"""Initial schema - check-ins and per-user settings.

Revision ID: 001_initial
Revises: None
Create Date: 2025-06-27

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "anchor_checkins",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("author_did", sa.String(255), nullable=False),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("created_at", sa.String(64), nullable=False),
        sa.Column("locations", sa.Text, nullable=True),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("category_group", sa.String(50), nullable=True),
        sa.Column("category_icon", sa.String(10), nullable=True),
        sa.Column("uri", sa.String(1024), nullable=False, unique=True),
        sa.Column("cid", sa.String(255), nullable=True),
    )
    op.create_index("ix_anchor_checkins_author_did", "anchor_checkins", ["author_did"])
    op.create_index("ix_anchor_checkins_created_at", "anchor_checkins", ["created_at"])
    op.create_index("ix_anchor_checkins_category", "anchor_checkins", ["category"])
    op.create_index(
        "ix_anchor_checkins_category_group", "anchor_checkins", ["category_group"],
    )

    op.create_table(
        "anchor_user_settings",
        sa.Column("did", sa.String(255), primary_key=True),
        sa.Column(
            "enable_feed_posts", sa.Boolean, nullable=False,
            server_default=sa.true(),
        ),
    )


def downgrade() -> None:
    op.drop_table("anchor_user_settings")
    op.drop_index("ix_anchor_checkins_category_group", "anchor_checkins")
    op.drop_index("ix_anchor_checkins_category", "anchor_checkins")
    op.drop_index("ix_anchor_checkins_created_at", "anchor_checkins")
    op.drop_index("ix_anchor_checkins_author_did", "anchor_checkins")
    op.drop_table("anchor_checkins")
