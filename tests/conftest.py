"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory collaborators, a controllable clock, and an in-memory
SQLite session factories
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import pytest

from fakes import FakeObjectStore, FrozenClock, InMemoryMetadataStore, ScriptedAnalysisService
from govbid.core.analysis_queue.models import FileRecord


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def store() -> InMemoryMetadataStore:
    return InMemoryMetadataStore()


@pytest.fixture
def file_record(store: InMemoryMetadataStore) -> FileRecord:
    """A stored PDF checklist file whose bytes exist in the object store."""
    return store.add_file(file_name="license.pdf")


@pytest.fixture
def object_store(file_record: FileRecord) -> FakeObjectStore:
    return FakeObjectStore({file_record.file_path: b"%PDF-1.7 license"})


@pytest.fixture
def analysis_service() -> ScriptedAnalysisService:
    return ScriptedAnalysisService()


@pytest.fixture
async def sqlite_session_factory():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        async_sessionmaker: Session factory bound to a fresh schema
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from govbid.boundary.db.base import Base
    import govbid.boundary.db.models  # noqa: F401  registers tables

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()




@pytest.fixture
async def file_session_factory(tmp_path):
    """
    Create a file-backed SQLite database with a pooled engine.

    Concurrent sessions get their own connections, so SQLite's own
    locking and constraints decide races between writers.
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

    from govbid.boundary.db.base import Base
    import govbid.boundary.db.models  # noqa: F401  registers tables

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'queue.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
