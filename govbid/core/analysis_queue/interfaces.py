"""
Collaborator protocols for the analysis queue.

Workers, the reaper and the processor depend on these shapes only, so the
SQL store, S3 and Gemini adapters can be swapped for in-memory fakes.

Dependencies: typing
System role: Seams between queue logic and external systems
"""

from datetime import datetime
from typing import Any, Protocol, Sequence
from uuid import UUID

from govbid.core.analysis_queue.models import (
    DocumentPayload,
    FileRecord,
    QueueItem,
    QueueStatus,
)


class ObjectStore(Protocol):
    """Blocking blob store; called from worker threads."""

    def download(self, path: str) -> bytes: ...


class AnalysisService(Protocol):
    """Generative analysis capability."""

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        document: DocumentPayload,
    ) -> str: ...


class MetadataStore(Protocol):
    """Transactional access to queue items and checklist files."""

    async def select_queued(self, limit: int, now: datetime) -> list[QueueItem]: ...

    async def claim_queue_item(self, item_id: UUID, now: datetime) -> QueueItem | None: ...

    async def get_file_record(self, file_id: UUID) -> FileRecord | None: ...

    async def update_queue_item(
        self,
        item_id: UUID,
        patch: dict[str, Any],
        expected_status: QueueStatus | Sequence[QueueStatus] | None = None,
    ) -> QueueItem | None: ...

    async def update_file_record(
        self,
        file_id: UUID,
        patch: dict[str, Any],
    ) -> FileRecord | None: ...

    async def save_analysis(
        self,
        item_id: UUID,
        file_id: UUID,
        result: dict,
        now: datetime,
    ) -> QueueItem | None: ...

    async def fail_queue_item(
        self,
        item_id: UUID,
        file_id: UUID,
        error: str,
        now: datetime,
    ) -> QueueItem | None: ...

    async def select_stale_processing(
        self,
        before: datetime,
        limit: int | None = None,
    ) -> list[QueueItem]: ...
