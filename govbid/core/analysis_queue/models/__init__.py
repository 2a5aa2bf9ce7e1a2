"""
Models for the analysis queue.

Exports: AnalysisType, QueueStatus, FileAnalysisStatus, ComplianceStatus,
WorkerOutcome, QueueItem, FileRecord, DocumentPayload, ExtractedData,
AnalysisMetadata, AnalysisResult, ParseOutcome, QueueRunSummary
"""

from .analysis_result import AnalysisMetadata, AnalysisResult, ExtractedData, ParseOutcome
from .enums import (
    ACTIVE_QUEUE_STATUSES,
    AnalysisType,
    ComplianceStatus,
    FileAnalysisStatus,
    QueueStatus,
    WorkerOutcome,
)
from .records import DocumentPayload, FileRecord, QueueItem
from .run_summary import QueueRunSummary

__all__ = [
    "ACTIVE_QUEUE_STATUSES",
    "AnalysisMetadata",
    "AnalysisResult",
    "AnalysisType",
    "ComplianceStatus",
    "DocumentPayload",
    "ExtractedData",
    "FileAnalysisStatus",
    "FileRecord",
    "ParseOutcome",
    "QueueItem",
    "QueueRunSummary",
    "QueueStatus",
    "WorkerOutcome",
]
