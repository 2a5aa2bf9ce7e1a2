"""
Checklist file analysis API schemas.

Dependencies: pydantic
System role: File analysis API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from govbid.core.analysis_queue.models import FileAnalysisStatus
from govbid.models.analysis_queue import QueueItemResponse


class FileAnalysisResponse(BaseModel):
    """A checklist file with its latest analysis."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    company_id: uuid.UUID
    checklist_item_id: str
    file_name: str
    file_path: str
    file_size: int
    file_type: str
    ai_analysis: dict | None = None
    ai_analysis_status: FileAnalysisStatus
    ai_analysis_updated_at: datetime | None = None


class FileAnalysisListResponse(BaseModel):
    """Response schema for listing file analyses."""

    analyses: list[FileAnalysisResponse]


class UploadResponse(BaseModel):
    """Response schema for a stored and queued upload."""

    file: FileAnalysisResponse
    queue_item: QueueItemResponse
