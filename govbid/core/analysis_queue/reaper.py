"""
Stale-processing reaper.

Items stuck in processing past their lease (a crashed worker, a lost
persistence write) are pushed back through the RetryController. The attempt
counted at claim time stays counted.

Dependencies: govbid.core.analysis_queue
System role: Recovery sweep at the start of every queue run
"""

import asyncio
import logging
from datetime import timedelta

from govbid.core.analysis_queue.clock import Clock, utcnow
from govbid.core.analysis_queue.interfaces import MetadataStore
from govbid.core.analysis_queue.models import WorkerOutcome
from govbid.core.analysis_queue.retry_controller import RetryController
from govbid.observability.log_utils import job_context

logger = logging.getLogger(__name__)

LEASE_EXPIRED_MESSAGE = "Processing lease expired"


class StaleProcessingReaper:
    """Requeue or fail processing items whose claim is older than the lease."""

    def __init__(
        self,
        store: MetadataStore,
        retry_controller: RetryController,
        stale_after_seconds: float = 900,
        batch_limit: int | None = 100,
        store_timeout: float = 15.0,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._retry = retry_controller
        self._stale_after = timedelta(seconds=stale_after_seconds)
        self._batch_limit = batch_limit
        self._store_timeout = store_timeout
        self._clock = clock

    async def reap(self) -> int:
        """
        Sweep stale processing items once.

        Returns:
            int: Number of items moved to queued or failed
        """
        cutoff = self._clock() - self._stale_after
        stale_items = await asyncio.wait_for(
            self._store.select_stale_processing(cutoff, self._batch_limit),
            timeout=self._store_timeout,
        )

        reaped = 0
        for item in stale_items:
            outcome = await self._retry.handle_failure(item, LEASE_EXPIRED_MESSAGE)
            if outcome in (WorkerOutcome.REQUEUED, WorkerOutcome.FAILED):
                reaped += 1
                logger.warning(
                    f"{__name__}:reap - Reclaimed stale item",
                    extra=job_context(item, outcome=outcome),
                )

        if stale_items:
            logger.info(
                f"{__name__}:reap - Swept {len(stale_items)} stale item(s), reclaimed {reaped}",
                extra={"stale": len(stale_items), "reaped": reaped},
            )
        return reaped
