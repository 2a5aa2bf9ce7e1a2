"""Application services."""

from govbid.application.services.analysis_queue_service import AnalysisQueueService

__all__ = ["AnalysisQueueService"]
