"""Check-in ORM - one row per app.dropanchor.checkin record.

Invariants:
    - id is the record key (primary key); duplicates fail at the storage layer
    - created_at is stored verbatim as text (no timezone/format normalization)
    - locations is a JSON array serialized to text; NULL means "no locations"
    - uri is derived from (author_did, collection, id) at write time

Design Decisions:
    - Text column for locations over JSON type: a corrupted blob must stay readable
      as a row so the read path can degrade the field instead of failing
    - Indexes on author_did and created_at back the two feed queries
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from anchor_pds.db.base import Base


class Checkin(Base):
    """Stored check-in record."""
    __tablename__ = "anchor_checkins"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    author_did: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
    )
    locations: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(
        String(50), nullable=True, index=True,
    )
    category_group: Mapped[str | None] = mapped_column(
        String(50), nullable=True, index=True,
    )
    category_icon: Mapped[str | None] = mapped_column(String(10), nullable=True)
    uri: Mapped[str] = mapped_column(
        String(1024), nullable=False, unique=True,
    )
    cid: Mapped[str | None] = mapped_column(String(255), nullable=True)
