"""Request Dependencies - database-backed repositories and caller authentication.

Invariants:
    - get_current_identity raises AuthenticationRequiredError unless the header is
      exactly "Bearer <token>" and the identity cache resolves the token
    - The identity cache is read from app.state (owned by the lifespan), never
      from a module global

Design Decisions:
    - FastAPI dependencies over middleware: only authenticated routes pay for
      resolution, and tests swap pieces via dependency_overrides
"""

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from anchor_pds.core.errors import AuthenticationRequiredError
from anchor_pds.core.repository_protocols import Identity
from anchor_pds.infrastructure.database import get_db
from anchor_pds.services.checkin_store import SqlCheckinRepository
from anchor_pds.services.identity_cache import IdentityCache
from anchor_pds.services.user_settings_store import SqlUserSettingsRepository

_BEARER_PREFIX = "Bearer "


def get_identity_cache(request: Request) -> IdentityCache:
    cache = getattr(request.app.state, "identity_cache", None)
    if cache is None:
        raise RuntimeError("Identity cache not initialized")
    return cache


def get_checkin_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlCheckinRepository:
    return SqlCheckinRepository(db)


def get_settings_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlUserSettingsRepository:
    return SqlUserSettingsRepository(db)


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an Authorization header value."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX):].strip()
    return token or None


async def get_current_identity(
    authorization: str | None = Header(None),
    cache: IdentityCache = Depends(get_identity_cache),
) -> Identity:
    token = bearer_token(authorization)
    if token is None:
        raise AuthenticationRequiredError()
    identity = await cache.resolve(token)
    if identity is None:
        raise AuthenticationRequiredError("Invalid or expired token")
    return identity
