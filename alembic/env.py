"""Alembic environment - async migrations for the check-in and settings tables.

The target metadata is anchor_pds.models (anchor_checkins, anchor_user_settings).
The URL comes from the application settings when DATABASE_URL is set, so the
postgresql:// -> asyncpg rewrite lives in one place (config.py); otherwise the
alembic.ini URL (local SQLite file) is used.

Design Decisions:
    - render_as_batch on SQLite: ALTER TABLE support there is partial, and SQLite
      is the default database
    - NullPool: a migration run is one short-lived connection
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from anchor_pds.config import get_settings
from anchor_pds.db.base import Base
import anchor_pds.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return get_settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure(database_url: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=database_url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the check-in schema without a live database."""
    url = _database_url()
    _configure(url, url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def _run_with_connection(connection: Connection, url: str) -> None:
    _configure(url, connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    url = _database_url()
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = url
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_run_with_connection, url)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
