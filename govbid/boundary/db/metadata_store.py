"""
SQL-backed metadata store for the analysis queue.

Wraps the queue item and checklist file CRUD classes behind the
MetadataStore protocol. Every operation runs in its own short session and
transaction, and returns detached pydantic snapshots rather than ORM rows.

Dependencies: sqlalchemy, govbid.boundary.db.CRUD
System role: Persistence adapter used by workers, the reaper and the queue service
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from govbid.boundary.db.CRUD import file_record_crud, queue_item_crud
from govbid.boundary.db.models.file_record_model import FileRecordModel
from govbid.boundary.db.models.queue_item_model import QueueItemModel
from govbid.core.analysis_queue.models import (
    AnalysisType,
    FileAnalysisStatus,
    FileRecord,
    QueueItem,
    QueueStatus,
)

logger = logging.getLogger(__name__)


def _to_item(row: QueueItemModel | None) -> QueueItem | None:
    return QueueItem.model_validate(row) if row is not None else None


def _to_file(row: FileRecordModel | None) -> FileRecord | None:
    return FileRecord.model_validate(row) if row is not None else None


class SqlMetadataStore:
    """
    MetadataStore implementation over SQLAlchemy async sessions.

    Args:
        session_factory: async_sessionmaker bound to the target engine
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Open a session, commit on success, roll back and re-raise on error."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
                await session.rollback()
                raise

    async def select_queued(self, limit: int, now: datetime) -> list[QueueItem]:
        async with self._transaction("select_queued") as session:
            rows = await queue_item_crud.get_queued_batch(session, limit=limit, now=now)
            return [QueueItem.model_validate(row) for row in rows]

    async def claim_queue_item(self, item_id: UUID, now: datetime) -> QueueItem | None:
        """
        Claim a queued item and mark its file as processing.

        Returns:
            Claimed item, or None when the claim was lost
        """
        async with self._transaction("claim_queue_item") as session:
            row = await queue_item_crud.claim(session, item_id, now)
            if row is None:
                return None
            await file_record_crud.update_by_id(
                session,
                row.file_id,
                ai_analysis_status=FileAnalysisStatus.PROCESSING,
                ai_analysis_updated_at=now,
            )
            return _to_item(row)

    async def get_queue_item(self, item_id: UUID) -> QueueItem | None:
        async with self._transaction("get_queue_item") as session:
            return _to_item(await queue_item_crud.get_by_id(session, item_id))

    async def get_file_record(self, file_id: UUID) -> FileRecord | None:
        async with self._transaction("get_file_record") as session:
            return _to_file(await file_record_crud.get_by_id(session, file_id))

    async def update_queue_item(
        self,
        item_id: UUID,
        patch: dict[str, Any],
        expected_status: QueueStatus | Sequence[QueueStatus] | None = None,
    ) -> QueueItem | None:
        """
        Apply a patch to a queue item, optionally guarded by its current status.

        Returns:
            Updated item, or None when missing or the guard did not match
        """
        async with self._transaction("update_queue_item") as session:
            if expected_status is None:
                row = await queue_item_crud.update_by_id(session, item_id, **patch)
            else:
                expected = (
                    [expected_status]
                    if isinstance(expected_status, QueueStatus)
                    else list(expected_status)
                )
                row = await queue_item_crud.update_if_status(
                    session, item_id, expected, **patch
                )
            return _to_item(row)

    async def update_file_record(
        self,
        file_id: UUID,
        patch: dict[str, Any],
    ) -> FileRecord | None:
        async with self._transaction("update_file_record") as session:
            return _to_file(await file_record_crud.update_by_id(session, file_id, **patch))

    async def save_analysis(
        self,
        item_id: UUID,
        file_id: UUID,
        result: dict,
        now: datetime,
    ) -> QueueItem | None:
        """
        Persist a successful analysis to the queue item and its file.

        Both rows are written in one transaction. The write is accepted while
        the item is processing or already completed, so replaying it after a
        partial failure converges on the same state.

        Returns:
            Completed item, or None when the item left processing meanwhile
        """
        async with self._transaction("save_analysis") as session:
            row = await queue_item_crud.update_if_status(
                session,
                item_id,
                [QueueStatus.PROCESSING, QueueStatus.COMPLETED],
                status=QueueStatus.COMPLETED,
                result_data=result,
                error_message=None,
                processed_at=now,
            )
            if row is None:
                return None
            await file_record_crud.update_by_id(
                session,
                file_id,
                ai_analysis=result,
                ai_analysis_status=FileAnalysisStatus.COMPLETED,
                ai_analysis_updated_at=now,
            )
            return _to_item(row)

    async def fail_queue_item(
        self,
        item_id: UUID,
        file_id: UUID,
        error: str,
        now: datetime,
    ) -> QueueItem | None:
        """
        Terminally fail a processing item and mark its file failed.

        Returns:
            Failed item, or None when the item was no longer processing
        """
        async with self._transaction("fail_queue_item") as session:
            row = await queue_item_crud.update_if_status(
                session,
                item_id,
                [QueueStatus.PROCESSING],
                status=QueueStatus.FAILED,
                error_message=error,
                result_data=None,
                claimed_at=None,
            )
            if row is None:
                return None
            await file_record_crud.update_by_id(
                session,
                file_id,
                ai_analysis_status=FileAnalysisStatus.FAILED,
                ai_analysis_updated_at=now,
            )
            return _to_item(row)

    async def select_stale_processing(
        self,
        before: datetime,
        limit: int | None = None,
    ) -> list[QueueItem]:
        async with self._transaction("select_stale_processing") as session:
            rows = await queue_item_crud.get_stale_processing(
                session, claimed_before=before, limit=limit
            )
            return [QueueItem.model_validate(row) for row in rows]

    async def get_active_queue_item(self, file_id: UUID) -> QueueItem | None:
        async with self._transaction("get_active_queue_item") as session:
            return _to_item(await queue_item_crud.get_active_for_file(session, file_id))

    async def create_queue_item(
        self,
        file_id: UUID,
        analysis_type: AnalysisType,
        priority: int,
        max_attempts: int,
        now: datetime,
    ) -> tuple[QueueItem, bool]:
        """
        Insert a queued item and reset the file's analysis status to pending.

        Returns:
            tuple: (item, created). When another writer already holds the
            file's active slot, the existing item is returned with False.
        """
        try:
            async with self._transaction("create_queue_item") as session:
                row = await queue_item_crud.create(
                    session,
                    file_id=file_id,
                    analysis_type=analysis_type,
                    status=QueueStatus.QUEUED,
                    priority=priority,
                    attempts=0,
                    max_attempts=max_attempts,
                )
                await file_record_crud.update_by_id(
                    session,
                    file_id,
                    ai_analysis_status=FileAnalysisStatus.PENDING,
                    ai_analysis_updated_at=now,
                )
                item = QueueItem.model_validate(row)
        except IntegrityError:
            existing = await self.get_active_queue_item(file_id)
            if existing is None:
                raise
            logger.info(
                f"{__name__}:create_queue_item - Active item already exists for file",
                extra={"file_id": str(file_id), "queue_item_id": str(existing.id)},
            )
            return existing, False
        return item, True

    async def create_file_record(self, **fields: Any) -> FileRecord:
        async with self._transaction("create_file_record") as session:
            row = await file_record_crud.create(session, **fields)
            return FileRecord.model_validate(row)

    async def list_file_records(
        self,
        file_id: UUID | None = None,
        company_id: UUID | None = None,
    ) -> list[FileRecord]:
        async with self._transaction("list_file_records") as session:
            if file_id is not None:
                row = await file_record_crud.get_by_id(session, file_id)
                if row is None or (company_id is not None and row.company_id != company_id):
                    return []
                return [FileRecord.model_validate(row)]
            rows = await file_record_crud.get_by_company(session, company_id)
            return [FileRecord.model_validate(row) for row in rows]
