"""
Analysis queue ORM model.

Persisted unit of deferred document analysis work with status and
attempt tracking.

Dependencies: sqlalchemy, govbid.boundary.db.base
System role: Durable job queue storage
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from govbid.boundary.db.base import Base, TimestampMixin, UUIDMixin
from govbid.core.analysis_queue.models.enums import AnalysisType, QueueStatus


ACTIVE_STATUS_CLAUSE = "status IN ('queued', 'processing')"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]


class QueueItemModel(Base, UUIDMixin, TimestampMixin):
    """
    Queue item ORM model.

    Attributes:
        id: UUID primary key
        file_id: Checklist file being analyzed
        analysis_type: Prompt family to use
        status: QUEUED -> PROCESSING -> COMPLETED | FAILED
        priority: Higher values dequeue first
        attempts: Claims so far; never decreases
        max_attempts: Attempts allowed before terminal failure
        result_data: Analysis JSON, only when COMPLETED
        error_message: Last failure reason
        claimed_at: Start of the current processing lease
        available_at: Earliest re-dequeue time after a backed-off retry
        processed_at: Terminal success time

    Workflow:
        1. Upload enqueues an item (QUEUED, attempts=0)
        2. A worker claims it with a conditional update (PROCESSING, attempts+1)
        3. Success -> COMPLETED; failure -> QUEUED again or FAILED when exhausted
    """

    __tablename__ = "ai_analysis_queue"
    __table_args__ = (
        Index("ix_ai_analysis_queue_dequeue", "status", "priority", "created_at"),
        # At most one active item per file.
        Index(
            "uq_ai_analysis_queue_active_file",
            "file_id",
            unique=True,
            postgresql_where=text(ACTIVE_STATUS_CLAUSE),
            sqlite_where=text(ACTIVE_STATUS_CLAUSE),
        ),
    )

    file_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("checklist_files.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    analysis_type: Mapped[AnalysisType] = mapped_column(
        Enum(AnalysisType, native_enum=False, values_callable=enum_values, length=32),
        nullable=False,
        default=AnalysisType.CHECKLIST_DOCUMENT,
    )

    status: Mapped[QueueStatus] = mapped_column(
        Enum(QueueStatus, native_enum=False, values_callable=enum_values, length=16),
        nullable=False,
        default=QueueStatus.QUEUED,
    )

    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=3)

    result_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    claimed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    available_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
