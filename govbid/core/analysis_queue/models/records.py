"""
Queue item and file record domain models.

Detached snapshots of persisted rows, decoupled from the ORM session.

Dependencies: pydantic
System role: Data passed between the metadata store and queue components
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from govbid.core.analysis_queue.models.enums import (
    AnalysisType,
    FileAnalysisStatus,
    QueueStatus,
)


class QueueItem(BaseModel):
    """Snapshot of one ai_analysis_queue row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    file_id: UUID
    analysis_type: AnalysisType = AnalysisType.CHECKLIST_DOCUMENT
    status: QueueStatus = QueueStatus.QUEUED
    priority: int = 0
    attempts: int = Field(default=0, ge=0)
    max_attempts: int = Field(default=3, ge=1)
    result_data: dict | None = None
    error_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    claimed_at: datetime | None = None
    available_at: datetime | None = None
    processed_at: datetime | None = None

    @property
    def attempts_exhausted(self) -> bool:
        return self.attempts >= self.max_attempts


class FileRecord(BaseModel):
    """Snapshot of one checklist_files row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company_id: UUID
    checklist_item_id: str
    file_name: str = ""
    file_path: str
    file_size: int = 0
    file_type: str
    uploaded_by: UUID | None = None
    ai_analysis: dict | None = None
    ai_analysis_status: FileAnalysisStatus = FileAnalysisStatus.PENDING
    ai_analysis_updated_at: datetime | None = None
    created_at: datetime | None = None


class DocumentPayload(BaseModel):
    """Document handed to the analysis service."""

    mime_type: str = Field(description="MIME type of the document")
    data: bytes = Field(description="Raw document bytes")
