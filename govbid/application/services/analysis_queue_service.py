"""
Analysis queue service orchestrator.

Enqueues checklist files for analysis, registers new uploads and answers
status queries for queue items and file analyses.

Dependencies: govbid.boundary.db.metadata_store, govbid.configs
System role: Queue management orchestration for the HTTP API
"""

import asyncio
import logging
from uuid import UUID

from govbid.boundary.db.metadata_store import SqlMetadataStore
from govbid.configs.queue import QueueSettings
from govbid.core.analysis_queue.clock import Clock, utcnow
from govbid.core.analysis_queue.models import AnalysisType, FileRecord, QueueItem
from govbid.core.exceptions import (
    FileRecordNotFoundError,
    QueueItemNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def build_file_path(company_id: UUID, checklist_item_id: str, file_name: str, now_ms: int) -> str:
    """Object key for an upload: {company_id}/{checklist_item_id}/{ms}-{file_name}."""
    return f"{company_id}/{checklist_item_id}/{now_ms}-{file_name}"


class AnalysisQueueService:
    """
    Analysis queue service orchestrator.

    Keeps at most one active (queued or processing) queue item per file.
    """

    def __init__(
        self,
        store: SqlMetadataStore,
        settings: QueueSettings,
        object_store=None,
        clock: Clock = utcnow,
    ) -> None:
        """
        Initialize analysis queue service.

        Args:
            store: Metadata store
            settings: Queue defaults (priority, max attempts)
            object_store: Blob store, required only for register_upload
            clock: UTC time source
        """
        self.store = store
        self.settings = settings
        self.object_store = object_store
        self._clock = clock

    async def enqueue_file(
        self,
        file_id: UUID,
        analysis_type: AnalysisType | str = AnalysisType.CHECKLIST_DOCUMENT,
        priority: int | None = None,
        max_attempts: int | None = None,
    ) -> tuple[QueueItem, bool]:
        """
        Queue a file for analysis.

        Args:
            file_id: Checklist file UUID
            analysis_type: Prompt family (unknown tags become OTHER)
            priority: Dequeue priority (defaults from settings)
            max_attempts: Attempt budget (defaults from settings)

        Returns:
            tuple[QueueItem, bool]: The active item and whether it was created now

        Raises:
            FileRecordNotFoundError: No such file
            ValidationError: max_attempts below 1
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValidationError("max_attempts must be at least 1", field="max_attempts")

        file_record = await self.store.get_file_record(file_id)
        if file_record is None:
            raise FileRecordNotFoundError(str(file_id))

        existing = await self.store.get_active_queue_item(file_id)
        if existing is not None:
            logger.info(
                f"{__name__}:enqueue_file - File already has an active queue item",
                extra={"file_id": str(file_id), "queue_item_id": str(existing.id)},
            )
            return existing, False

        item, created = await self.store.create_queue_item(
            file_id=file_id,
            analysis_type=AnalysisType.from_tag(analysis_type),
            priority=self.settings.default_priority if priority is None else priority,
            max_attempts=(
                self.settings.default_max_attempts if max_attempts is None else max_attempts
            ),
            now=self._clock(),
        )
        if not created:
            return item, False
        logger.info(
            f"{__name__}:enqueue_file - Queued file for analysis",
            extra={
                "file_id": str(file_id),
                "queue_item_id": str(item.id),
                "analysis_type": item.analysis_type.value,
                "priority": item.priority,
            },
        )
        return item, True

    async def register_upload(
        self,
        company_id: UUID,
        checklist_item_id: str,
        file_name: str,
        content: bytes,
        file_type: str,
        uploaded_by: UUID | None = None,
        analysis_type: AnalysisType | str = AnalysisType.CHECKLIST_DOCUMENT,
        priority: int | None = None,
    ) -> tuple[FileRecord, QueueItem]:
        """
        Store an uploaded document, record it and queue it for analysis.

        Returns:
            tuple[FileRecord, QueueItem]: New file record and its queue item

        Raises:
            ValidationError: Missing name, empty content, or no object store configured
        """
        if not file_name:
            raise ValidationError("Filename is required", field="file_name")
        if not content:
            raise ValidationError("File is empty", field="file")
        if self.object_store is None:
            raise ValidationError("Uploads are not configured")

        now = self._clock()
        file_path = build_file_path(
            company_id, checklist_item_id, file_name, int(now.timestamp() * 1000)
        )
        await asyncio.to_thread(self.object_store.upload, file_path, content, file_type)

        file_record = await self.store.create_file_record(
            company_id=company_id,
            checklist_item_id=checklist_item_id,
            file_name=file_name,
            file_path=file_path,
            file_size=len(content),
            file_type=file_type,
            uploaded_by=uploaded_by,
        )
        item, _ = await self.enqueue_file(file_record.id, analysis_type, priority)
        return file_record, item

    async def get_queue_item(self, item_id: UUID) -> QueueItem:
        """
        Raises:
            QueueItemNotFoundError: No such queue item
        """
        item = await self.store.get_queue_item(item_id)
        if item is None:
            raise QueueItemNotFoundError(str(item_id))
        return item

    async def list_file_analyses(
        self,
        file_id: UUID | None = None,
        company_id: UUID | None = None,
    ) -> list[FileRecord]:
        """
        List files with their latest analysis, by file or by company.

        Raises:
            ValidationError: Neither filter given
        """
        if file_id is None and company_id is None:
            raise ValidationError("Either file_id or company_id is required")
        return await self.store.list_file_records(file_id=file_id, company_id=company_id)
