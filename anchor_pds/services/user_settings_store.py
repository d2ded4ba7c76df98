"""User Settings Store - per-DID preferences with defaults for unknown users."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from anchor_pds.core.domain_types import Did
from anchor_pds.core.repository_protocols import UserSettings
from anchor_pds.models.user_settings import UserSettingsRow

logger = logging.getLogger(__name__)


class SqlUserSettingsRepository:
    """UserSettingsRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, did: Did) -> UserSettings:
        """Stored settings, or the defaults when the DID has none."""
        result = await self.db.execute(
            select(UserSettingsRow).where(UserSettingsRow.did == did),
        )
        row = result.scalar_one_or_none()
        if row is None:
            return UserSettings(did=did)
        return UserSettings(did=did, enable_feed_posts=bool(row.enable_feed_posts))

    async def update(self, settings: UserSettings) -> None:
        """Idempotent upsert: same input, same stored state."""
        await self.db.merge(UserSettingsRow(
            did=settings.did, enable_feed_posts=settings.enable_feed_posts,
        ))
        await self.db.commit()
        logger.info("User settings updated", extra={"did": settings.did})
