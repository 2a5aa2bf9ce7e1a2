"""
Checklist file ORM model.

Uploaded compliance document and the latest analysis projected onto it.

Dependencies: sqlalchemy, govbid.boundary.db.base
System role: File metadata and analysis projection storage
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, BigInteger, DateTime, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from govbid.boundary.db.base import Base, TimestampMixin, UUIDMixin
from govbid.boundary.db.models.queue_item_model import enum_values
from govbid.core.analysis_queue.models.enums import FileAnalysisStatus


class FileRecordModel(Base, UUIDMixin, TimestampMixin):
    """
    Checklist file ORM model.

    Attributes:
        id: UUID primary key
        company_id: Owning company (tenant)
        checklist_item_id: Bidding checklist item this file satisfies
        file_name: Original filename
        file_path: Object store key ({company}/{checklist_item}/{ts}-{name})
        file_size: Size in bytes
        file_type: MIME type, also sent to the analysis service
        uploaded_by: Uploading user id
        ai_analysis: Latest structured analysis (replaced wholesale)
        ai_analysis_status: Projection of the queue item status
        ai_analysis_updated_at: Last projection change
    """

    __tablename__ = "checklist_files"

    company_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    checklist_item_id: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    file_type: Mapped[str] = mapped_column(String(255), nullable=False)
    uploaded_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    ai_analysis: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    ai_analysis_status: Mapped[FileAnalysisStatus] = mapped_column(
        Enum(FileAnalysisStatus, native_enum=False, values_callable=enum_values, length=16),
        nullable=False,
        default=FileAnalysisStatus.PENDING,
    )
    ai_analysis_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
