"""Check-in Store - SQL persistence and feed queries for check-in records.

Invariants:
    - create() inserts exactly one row; a duplicate record key raises
      RecordAlreadyExistsError (never overwrites)
    - Both feeds order by created_at DESC; a cursor keeps rows with
      created_at strictly less than the cursor
    - list_by_author() does not cap limit; list_global() clamps it to
      GLOBAL_FEED_MAX_LIMIT whatever the caller asks for
    - Corrupted locations JSON degrades that record's locations to None; the
      record is still returned

Design Decisions:
    - One statement per operation, no in-process locking: the database is the
      transactional resource
    - Stored locations are rebuilt without re-validation: they were validated
      on write, and the read path favours availability over completeness
"""

import json
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import FlushError

from anchor_pds.core.checkin_record import (
    CheckinRecord, LocationItem, StoredCheckin, location_from_dict,
)
from anchor_pds.core.domain_types import (
    GLOBAL_FEED_MAX_LIMIT, AtUri, Cid, Did, RecordKey,
)
from anchor_pds.core.errors import ErrorContext, RecordAlreadyExistsError
from anchor_pds.core.feed import clamp_limit
from anchor_pds.models.checkin import Checkin

logger = logging.getLogger(__name__)


class SqlCheckinRepository:
    """CheckinRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        rkey: RecordKey,
        author_did: Did,
        record: CheckinRecord,
        uri: AtUri,
        cid: Cid,
    ) -> None:
        row = Checkin(
            id=rkey,
            author_did=author_did,
            text=record.text,
            created_at=record.created_at,
            locations=_dump_locations(record.locations),
            category=record.category,
            category_group=record.category_group,
            category_icon=record.category_icon,
            uri=uri,
            cid=cid,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except (IntegrityError, FlushError):
            await self.db.rollback()
            raise RecordAlreadyExistsError(
                rkey, ErrorContext(did=author_did, rkey=rkey),
            )
        logger.info("Check-in stored", extra={"did": author_did, "rkey": rkey})

    async def get_by_uri(self, uri: str) -> StoredCheckin | None:
        result = await self.db.execute(select(Checkin).where(Checkin.uri == uri))
        row = result.scalar_one_or_none()
        return _to_stored(row) if row else None

    async def list_by_author(
        self, author_did: str, limit: int, cursor: str | None = None,
    ) -> list[StoredCheckin]:
        query = select(Checkin).where(Checkin.author_did == author_did)
        if cursor:
            query = query.where(Checkin.created_at < cursor)
        query = query.order_by(Checkin.created_at.desc()).limit(limit)
        result = await self.db.execute(query)
        return [_to_stored(row) for row in result.scalars().all()]

    async def list_global(
        self, limit: int, cursor: str | None = None,
    ) -> list[StoredCheckin]:
        query = select(Checkin)
        if cursor:
            query = query.where(Checkin.created_at < cursor)
        query = query.order_by(Checkin.created_at.desc()).limit(
            clamp_limit(limit, GLOBAL_FEED_MAX_LIMIT),
        )
        result = await self.db.execute(query)
        return [_to_stored(row) for row in result.scalars().all()]


# --- Row mapping --------------------------------------------------------------

def _dump_locations(locations: tuple[LocationItem, ...] | None) -> str | None:
    if locations is None:
        return None
    return json.dumps([loc.to_dict() for loc in locations], ensure_ascii=False)


def _load_locations(blob: str | None, rkey: str) -> tuple[LocationItem, ...] | None:
    """Parse the stored JSON array. Anything malformed degrades to None."""
    if not blob:
        return None
    try:
        items = json.loads(blob)
        if not isinstance(items, list):
            raise ValueError("locations is not an array")
        return tuple(location_from_dict(item) for item in items) or None
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        logger.warning(
            f"Failed to parse stored locations, dropping field: {e}",
            extra={"rkey": rkey},
        )
        return None


def _to_stored(row: Checkin) -> StoredCheckin:
    record = CheckinRecord(
        text=row.text,
        created_at=row.created_at,
        locations=_load_locations(row.locations, row.id),
        category=row.category or None,
        category_group=row.category_group or None,
        category_icon=row.category_icon or None,
    )
    return StoredCheckin(
        id=RecordKey(row.id),
        author_did=Did(row.author_did),
        uri=AtUri(row.uri),
        cid=Cid(row.cid) if row.cid else None,
        record=record,
    )
