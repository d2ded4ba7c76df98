"""User Settings ORM - per-DID preferences, upserted idempotently, never deleted."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from anchor_pds.db.base import Base


class UserSettingsRow(Base):
    """Stored preferences for one DID."""
    __tablename__ = "anchor_user_settings"

    did: Mapped[str] = mapped_column(String(255), primary_key=True)
    enable_feed_posts: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
