"""API request/response schemas."""

from govbid.models.analysis_queue import (
    EnqueueRequest,
    EnqueueResponse,
    ProcessQueueResponse,
    QueueItemResponse,
    TriggerErrorResponse,
)
from govbid.models.file_analysis import (
    FileAnalysisListResponse,
    FileAnalysisResponse,
    UploadResponse,
)

__all__ = [
    "EnqueueRequest",
    "EnqueueResponse",
    "FileAnalysisListResponse",
    "FileAnalysisResponse",
    "ProcessQueueResponse",
    "QueueItemResponse",
    "TriggerErrorResponse",
    "UploadResponse",
]
