"""Anchor PDS API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery); XRPC fallback last
    - Global error handlers map every failure to an XRPC error envelope
    - The identity cache and its HTTP client are owned by the lifespan and
      reachable only through app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - One shared httpx.AsyncClient for identity provider calls, closed on shutdown
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from anchor_pds.api.error_handlers import register_error_handlers
from anchor_pds.api.routes import feeds, health, repo, settings as settings_routes
from anchor_pds.api.routes import xrpc_fallback
from anchor_pds.config import get_settings
from anchor_pds.infrastructure.database import init_db
from anchor_pds.infrastructure.identity_provider import PdsSessionResolver
from anchor_pds.infrastructure.observability import setup_logging
from anchor_pds.services.identity_cache import IdentityCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_tables:
        await manager.create_tables()

    http = httpx.AsyncClient(
        timeout=settings.identity_request_timeout_seconds,
    )
    app.state.identity_cache = IdentityCache(
        PdsSessionResolver(
            http,
            settings.identity_provider_hosts,
            timeout_seconds=settings.identity_request_timeout_seconds,
        ),
        ttl_seconds=settings.identity_cache_ttl_seconds,
    )
    logger.info("Anchor PDS started")
    yield
    logger.info("Anchor PDS shutting down")
    await http.aclose()
    await manager.dispose()


app = FastAPI(title="Anchor PDS", version="1.0.0", lifespan=lifespan)

# CORS - configured from settings, not hardcoded
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes - explicit registration; the XRPC fallback must stay last
app.include_router(health.router)
app.include_router(repo.router)
app.include_router(feeds.router)
app.include_router(settings_routes.router)
app.include_router(xrpc_fallback.router)

register_error_handlers(app)
