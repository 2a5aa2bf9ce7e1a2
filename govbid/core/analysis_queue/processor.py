"""
Analysis queue processor.

One process_queue() call reaps stale leases, dequeues a batch and runs a
JobWorker per item with bounded concurrency. Safe to invoke repeatedly and
from several triggers at once; the conditional claim keeps items exclusive.

Dependencies: asyncio, govbid.core.analysis_queue
System role: Entry point used by the HTTP triggers and the scheduled handler
"""

import asyncio
import logging

from govbid.configs.queue import QueueSettings
from govbid.core.analysis_queue.clock import Clock, utcnow
from govbid.core.analysis_queue.dequeuer import QueueDequeuer
from govbid.core.analysis_queue.interfaces import AnalysisService, MetadataStore, ObjectStore
from govbid.core.analysis_queue.models import QueueItem, QueueRunSummary, WorkerOutcome
from govbid.core.analysis_queue.reaper import StaleProcessingReaper
from govbid.core.analysis_queue.retry_controller import RetryController
from govbid.core.analysis_queue.worker import JobWorker
from govbid.core.exceptions import PersistError
from govbid.observability.log_utils import log_job_failure

logger = logging.getLogger(__name__)


class AnalysisQueueProcessor:
    """
    Run one bounded batch of the analysis queue.

    Args:
        dequeuer: Batch selector
        worker: Per-item executor
        reaper: Stale lease sweeper (None disables reaping)
        max_concurrency: Workers allowed to run at once
    """

    def __init__(
        self,
        dequeuer: QueueDequeuer,
        worker: JobWorker,
        reaper: StaleProcessingReaper | None = None,
        max_concurrency: int = 5,
    ) -> None:
        self._dequeuer = dequeuer
        self._worker = worker
        self._reaper = reaper
        self._max_concurrency = max(1, max_concurrency)

    async def process_queue(self) -> QueueRunSummary:
        """
        Reap, dequeue and process one batch.

        Worker errors are logged and counted, never raised.

        Returns:
            QueueRunSummary: Counters for this run
        """
        summary = QueueRunSummary()

        if self._reaper is not None:
            summary.reaped = await self._reaper.reap()

        items = await self._dequeuer.dequeue()
        summary.dequeued = len(items)
        if not items:
            logger.info(f"{__name__}:process_queue - No items in queue")
            return summary

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run_one(item: QueueItem) -> None:
            async with semaphore:
                try:
                    summary.record(await self._worker.run(item))
                except PersistError as e:
                    summary.persist_failed += 1
                    log_job_failure(logger, f"{__name__}:process_queue - Result not saved", item, e)
                except Exception as e:
                    summary.errored += 1
                    log_job_failure(
                        logger,
                        f"{__name__}:process_queue - Worker crashed",
                        item,
                        e,
                        with_traceback=True,
                    )

        await asyncio.gather(*(run_one(item) for item in items))

        logger.info(
            f"{__name__}:process_queue - {summary.message}",
            extra=summary.model_dump(),
        )
        return summary


def build_queue_processor(
    settings: QueueSettings,
    store: MetadataStore,
    object_store: ObjectStore,
    analysis_service: AnalysisService,
    clock: Clock = utcnow,
) -> AnalysisQueueProcessor:
    """Wire dequeuer, retry controller, worker and reaper from queue settings."""
    retry_controller = RetryController(
        store,
        backoff_seconds=settings.retry_backoff_seconds,
        backoff_max_seconds=settings.retry_backoff_max_seconds,
        store_timeout=settings.store_timeout_seconds,
        clock=clock,
    )
    worker = JobWorker(
        store,
        object_store,
        analysis_service,
        retry_controller,
        download_timeout=settings.download_timeout_seconds,
        analysis_timeout=settings.analysis_timeout_seconds,
        store_timeout=settings.store_timeout_seconds,
        persist_attempts=settings.persist_retry_attempts,
        persist_wait_initial=settings.persist_retry_wait_seconds,
        persist_wait_max=settings.persist_retry_wait_seconds * 10,
        clock=clock,
    )
    return AnalysisQueueProcessor(
        dequeuer=QueueDequeuer(
            store,
            batch_size=settings.batch_size,
            store_timeout=settings.store_timeout_seconds,
            clock=clock,
        ),
        worker=worker,
        reaper=StaleProcessingReaper(
            store,
            retry_controller,
            stale_after_seconds=settings.stale_processing_seconds,
            store_timeout=settings.store_timeout_seconds,
            clock=clock,
        ),
        max_concurrency=settings.max_concurrency,
    )
