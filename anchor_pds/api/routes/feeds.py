"""Feed XRPC Methods - the caller's own check-ins and the global feed.

Invariants:
    - Both feeds require authentication (global feed: anti-scraping)
    - listCheckins never serves another DID's check-ins (403 Forbidden)
    - limit defaults to 50 and is silently clamped to 100 on both feeds
    - Response shape: {"checkins": [...], "cursor"?: <createdAt of last row>}
"""

import logging

from fastapi import APIRouter, Depends, Query

from anchor_pds.api.deps import get_checkin_repository, get_current_identity
from anchor_pds.core.domain_types import (
    DEFAULT_PAGE_LIMIT, GLOBAL_FEED_MAX_LIMIT, OWNER_FEED_MAX_LIMIT,
)
from anchor_pds.core.errors import ErrorContext, ForbiddenError
from anchor_pds.core.feed import clamp_limit, feed_page
from anchor_pds.core.repository_protocols import CheckinRepository, Identity

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/xrpc", tags=["feeds"])


@router.get("/app.dropanchor.listCheckins")
async def list_checkins(
    user: str | None = Query(None),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1),
    cursor: str | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    repo: CheckinRepository = Depends(get_checkin_repository),
):
    """Page through the caller's own check-ins, newest first."""
    user_did = user or identity.did
    if user_did != identity.did:
        raise ForbiddenError(
            "Can only access your own check-ins", ErrorContext(did=identity.did),
        )
    page = await repo.list_by_author(
        user_did, clamp_limit(limit, OWNER_FEED_MAX_LIMIT), cursor,
    )
    return feed_page(page)


@router.get("/app.dropanchor.getGlobalFeed")
async def get_global_feed(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1),
    cursor: str | None = Query(None),
    identity: Identity = Depends(get_current_identity),
    repo: CheckinRepository = Depends(get_checkin_repository),
):
    """Page through every user's check-ins, newest first."""
    page = await repo.list_global(
        clamp_limit(limit, GLOBAL_FEED_MAX_LIMIT), cursor,
    )
    return feed_page(page)
