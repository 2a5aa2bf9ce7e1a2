"""
Database layer for the analysis queue.

Exports:
  - Base, UUIDMixin, TimestampMixin: Declarative base and mixins
  - FileRecordModel, QueueItemModel: ORM models
  - get_async_engine, get_async_session_factory, get_async_db: Connection helpers
  - SqlMetadataStore: MetadataStore adapter over SQLAlchemy sessions

Dependencies: sqlalchemy, asyncpg
System role: Relational persistence for queue items and checklist files
"""

from govbid.boundary.db.base import Base, TimestampMixin, UUIDMixin
from govbid.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from govbid.boundary.db.metadata_store import SqlMetadataStore
from govbid.boundary.db.models import FileRecordModel, QueueItemModel

__all__ = [
    "Base",
    "FileRecordModel",
    "QueueItemModel",
    "SqlMetadataStore",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
