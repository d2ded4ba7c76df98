"""Database Infrastructure - SQLAlchemy declarative Base.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite by default, asyncpg for PostgreSQL (ADR: native async, no thread pool)
"""
