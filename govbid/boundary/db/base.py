"""
Declarative base and shared column mixins for the queue tables.

Dependencies: sqlalchemy
System role: Common ORM ancestry for ai_analysis_queue and checklist_files
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry holding table metadata for create_all and migrations."""


class UUIDMixin:
    """
    UUID primary key, generated client side.

    The generic Uuid type maps to native UUID on PostgreSQL and CHAR(32)
    on SQLite.
    """

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """
    Row lifecycle timestamps in UTC.

    created_at is indexed because the dequeue order breaks priority ties by
    age; updated_at moves on every ORM update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        index=True,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
