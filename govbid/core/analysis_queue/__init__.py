"""
Asynchronous compliance document analysis queue.

Exports:
  - AnalysisQueueProcessor, build_queue_processor: Batch runner and wiring
  - QueueDequeuer, JobWorker, RetryController, StaleProcessingReaper: Pipeline parts
  - select_prompt, extract_analysis_result, parse_analysis_result,
    build_fallback_result, compute_confidence: Pure helpers
"""

from govbid.core.analysis_queue.dequeuer import QueueDequeuer
from govbid.core.analysis_queue.processor import AnalysisQueueProcessor, build_queue_processor
from govbid.core.analysis_queue.prompts import PromptPair, select_prompt
from govbid.core.analysis_queue.reaper import StaleProcessingReaper
from govbid.core.analysis_queue.result_extractor import (
    build_fallback_result,
    compute_confidence,
    extract_analysis_result,
    parse_analysis_result,
)
from govbid.core.analysis_queue.retry_controller import RetryController
from govbid.core.analysis_queue.worker import JobWorker

__all__ = [
    "AnalysisQueueProcessor",
    "JobWorker",
    "PromptPair",
    "QueueDequeuer",
    "RetryController",
    "StaleProcessingReaper",
    "build_fallback_result",
    "build_queue_processor",
    "compute_confidence",
    "extract_analysis_result",
    "parse_analysis_result",
    "select_prompt",
]
