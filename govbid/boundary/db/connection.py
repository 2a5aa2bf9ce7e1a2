"""
Async engine and session plumbing.

One engine per process (per event loop for the scheduled handler, which
disposes it after each run). Sessions never expire loaded rows on commit so
the metadata store can snapshot them afterwards.

Dependencies: sqlalchemy, govbid.configs
System role: Connection lifecycle for the metadata store and health checks
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from govbid.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Build the process-wide engine from POSTGRES_* settings.

    Pool sizing only applies to PostgreSQL; a sqlite URL (local runs) gets
    the dialect's default pool.
    """
    config = get_settings().database
    url = config.async_database_url

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=config.echo_sql)

    return create_async_engine(
        url,
        echo=config.echo_sql,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session for FastAPI routes (used by /health/db)."""
    async with get_async_session_factory()() as session:
        yield session
