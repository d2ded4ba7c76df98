"""Settings XRPC Methods - the caller's own feed-posting preferences.

Invariants:
    - Always scoped to the authenticated DID; no DID parameter exists
    - Unknown users read the defaults (enableFeedPosts = true)
"""

from fastapi import APIRouter, Depends

from anchor_pds.api.deps import get_current_identity, get_settings_repository
from anchor_pds.core.repository_protocols import (
    Identity, UserSettings, UserSettingsRepository,
)
from anchor_pds.schemas.records import UserSettingsBody

router = APIRouter(prefix="/xrpc", tags=["settings"])


@router.get("/app.dropanchor.getSettings")
async def get_user_settings(
    identity: Identity = Depends(get_current_identity),
    repo: UserSettingsRepository = Depends(get_settings_repository),
):
    settings = await repo.get(identity.did)
    return UserSettingsBody(
        enable_feed_posts=settings.enable_feed_posts,
    ).model_dump(by_alias=True)


@router.post("/app.dropanchor.updateSettings")
async def update_user_settings(
    body: UserSettingsBody,
    identity: Identity = Depends(get_current_identity),
    repo: UserSettingsRepository = Depends(get_settings_repository),
):
    await repo.update(UserSettings(
        did=identity.did, enable_feed_posts=body.enable_feed_posts,
    ))
    return body.model_dump(by_alias=True)
