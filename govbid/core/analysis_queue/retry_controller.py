"""
Retry controller.

Decides whether a failed attempt is requeued or terminally failed, based on
attempts already counted at claim time.

Dependencies: govbid.core.analysis_queue.interfaces
System role: Failure routing for workers and the stale-processing reaper
"""

import asyncio
import logging
import random
from datetime import timedelta

from govbid.core.analysis_queue.clock import Clock, utcnow
from govbid.core.analysis_queue.interfaces import MetadataStore
from govbid.core.analysis_queue.models import QueueItem, QueueStatus, WorkerOutcome
from govbid.core.exceptions import AnalysisQueueError
from govbid.observability.log_utils import job_context

logger = logging.getLogger(__name__)

MAX_ERROR_MESSAGE_LENGTH = 2000


def describe_error(error: BaseException | str) -> str:
    """Error text stored on the queue item, truncated to 2000 characters."""
    if isinstance(error, AnalysisQueueError):
        text = error.message
    elif isinstance(error, BaseException):
        text = str(error) or type(error).__name__
    else:
        text = error
    return text[:MAX_ERROR_MESSAGE_LENGTH]


class RetryController:
    """
    Route failed attempts to QUEUED or FAILED.

    Args:
        store: Metadata store
        backoff_seconds: Base delay before a requeued item is eligible again (0 = immediate)
        backoff_max_seconds: Ceiling for the exponential delay
        store_timeout: Seconds allowed for each metadata store write
        clock: UTC time source
    """

    def __init__(
        self,
        store: MetadataStore,
        backoff_seconds: float = 0.0,
        backoff_max_seconds: float = 600.0,
        store_timeout: float = 15.0,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._backoff_seconds = backoff_seconds
        self._backoff_max_seconds = backoff_max_seconds
        self._store_timeout = store_timeout
        self._clock = clock

    @staticmethod
    def should_retry(item: QueueItem) -> bool:
        return not item.attempts_exhausted

    def backoff_delay(self, attempts: int) -> float:
        """Exponential delay with jitter for the given attempt count."""
        if self._backoff_seconds <= 0:
            return 0.0
        delay = self._backoff_seconds * (2 ** max(attempts - 1, 0))
        delay += random.uniform(0, self._backoff_seconds)
        return min(delay, self._backoff_max_seconds)

    async def handle_failure(
        self,
        item: QueueItem,
        error: BaseException | str,
    ) -> WorkerOutcome:
        """
        Record a failed attempt.

        Args:
            item: Item as claimed (attempts already incremented)
            error: Failure that ended the attempt

        Returns:
            REQUEUED or FAILED, or SKIPPED when the item had already left processing

        Raises:
            asyncio.TimeoutError: The store write did not finish within store_timeout
        """
        now = self._clock()
        message = describe_error(error)

        if self.should_retry(item):
            delay = self.backoff_delay(item.attempts)
            patch = {
                "status": QueueStatus.QUEUED,
                "error_message": message,
                "result_data": None,
                "claimed_at": None,
                "available_at": now + timedelta(seconds=delay) if delay > 0 else None,
            }
            updated = await asyncio.wait_for(
                self._store.update_queue_item(
                    item.id, patch, expected_status=QueueStatus.PROCESSING
                ),
                timeout=self._store_timeout,
            )
            outcome = WorkerOutcome.REQUEUED
        else:
            updated = await asyncio.wait_for(
                self._store.fail_queue_item(item.id, item.file_id, message, now),
                timeout=self._store_timeout,
            )
            outcome = WorkerOutcome.FAILED

        if updated is None:
            logger.warning(
                f"{__name__}:handle_failure - Item no longer processing, leaving as is",
                extra=job_context(item),
            )
            return WorkerOutcome.SKIPPED

        logger.info(
            f"{__name__}:handle_failure - Item {outcome.value}",
            extra=job_context(updated, error_msg=message),
        )
        return outcome
