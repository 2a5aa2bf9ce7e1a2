"""
Queue dequeuer.

Selects the next batch of eligible queue items. Read-only: claiming happens
per item in the worker.

Dependencies: govbid.core.analysis_queue.interfaces
System role: First step of every queue run
"""

import asyncio
import logging

from govbid.core.analysis_queue.clock import Clock, utcnow
from govbid.core.analysis_queue.interfaces import MetadataStore
from govbid.core.analysis_queue.models import QueueItem

logger = logging.getLogger(__name__)


class QueueDequeuer:
    """Fetch queued items ordered by priority desc, created_at asc."""

    def __init__(
        self,
        store: MetadataStore,
        batch_size: int = 5,
        store_timeout: float = 15.0,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._batch_size = batch_size
        self._store_timeout = store_timeout
        self._clock = clock

    async def dequeue(self, batch_size: int | None = None) -> list[QueueItem]:
        """
        Select up to batch_size queued items.

        An empty or short batch is normal. Items backed off past now are left
        for a later run.
        """
        limit = self._batch_size if batch_size is None else batch_size
        if limit <= 0:
            return []

        items = await asyncio.wait_for(
            self._store.select_queued(limit, self._clock()),
            timeout=self._store_timeout,
        )
        logger.info(
            f"{__name__}:dequeue - Selected {len(items)} queued item(s)",
            extra={"limit": limit, "selected": len(items)},
        )
        return items
