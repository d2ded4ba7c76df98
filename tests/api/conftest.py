"""API test fixtures - FastAPI client over ASGI with DB and identity overridden.

Invariants:
    - get_db dependency overridden to use the per-test SQLite session
    - get_identity_cache overridden with a cache over FakeResolver
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - ASGITransport does not run the lifespan, so nothing here touches the
      network or the configured database
"""

import pytest
from httpx import ASGITransport, AsyncClient

from anchor_pds.api.deps import get_identity_cache
from anchor_pds.infrastructure.database import get_db, DatabaseSessionManager
import anchor_pds.infrastructure.database as db_module
from anchor_pds.main import app
from anchor_pds.services.identity_cache import IdentityCache

from tests.services.fake_identity import (
    ALICE, ALICE_TOKEN, BOB, BOB_TOKEN, FakeResolver,
)


@pytest.fixture
def fake_resolver():
    return FakeResolver({ALICE_TOKEN: ALICE, BOB_TOKEN: BOB})


@pytest.fixture
def identity_cache(fake_resolver):
    return IdentityCache(fake_resolver)


@pytest.fixture
async def client(test_engine, test_session_factory, identity_cache):
    """FastAPI test client with DB and identity dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_cache] = lambda: identity_cache

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice_headers():
    return auth(ALICE_TOKEN)


@pytest.fixture
def bob_headers():
    return auth(BOB_TOKEN)
