"""
Analysis queue API schemas.

Request/response schemas for enqueueing, triggering and inspecting
analysis jobs.

Dependencies: pydantic
System role: Analysis queue API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from govbid.core.analysis_queue.models import AnalysisType, QueueRunSummary, QueueStatus


class EnqueueRequest(BaseModel):
    """Request schema for queueing a file for analysis."""

    file_id: uuid.UUID = Field(description="Checklist file to analyze")
    analysis_type: AnalysisType = Field(
        default=AnalysisType.CHECKLIST_DOCUMENT,
        description="Analysis type; unknown values fall back to 'other'",
    )
    priority: int | None = Field(default=None, description="Higher runs first")
    max_attempts: int | None = Field(default=None, ge=1, description="Attempt budget")

    @field_validator("analysis_type", mode="before")
    @classmethod
    def _coerce_analysis_type(cls, value):
        return AnalysisType.from_tag(value)


class QueueItemResponse(BaseModel):
    """Response schema for a queue item."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    file_id: uuid.UUID
    analysis_type: AnalysisType
    status: QueueStatus
    priority: int
    attempts: int
    max_attempts: int
    result_data: dict | None = None
    error_message: str | None = None
    created_at: datetime | None = None
    processed_at: datetime | None = None


class EnqueueResponse(QueueItemResponse):
    """Queue item plus whether this request created it."""

    created: bool = Field(description="False when an active item already existed")


class ProcessQueueResponse(BaseModel):
    """Response schema for a queue trigger."""

    success: bool
    message: str
    timestamp: datetime
    summary: QueueRunSummary


class TriggerErrorResponse(BaseModel):
    """Body returned when a queue trigger fails."""

    error: str
    details: str
    timestamp: datetime
