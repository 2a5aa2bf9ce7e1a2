"""
Queue item CRUD operations.

Provides queue-specific queries: ordered batch selection, the atomic
claim, conditional status transitions and stale lease lookup.

Dependencies: sqlalchemy, govbid.boundary.db.models
System role: Persistence operations for the analysis queue
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from govbid.boundary.db.CRUD.base_crud import BaseCRUD
from govbid.boundary.db.models.queue_item_model import QueueItemModel
from govbid.core.analysis_queue.models.enums import ACTIVE_QUEUE_STATUSES, QueueStatus


class QueueItemCRUD(BaseCRUD[QueueItemModel]):
    """
    CRUD operations for QueueItemModel.

    Extends BaseCRUD with dequeue ordering and compare-and-set
    transitions on the status column.
    """

    def __init__(self) -> None:
        super().__init__(QueueItemModel)

    async def get_queued_batch(
        self,
        session: AsyncSession,
        limit: int,
        now: datetime,
    ) -> Sequence[QueueItemModel]:
        """
        Select eligible queued items, highest priority then oldest first.

        Args:
            session: Async database session
            limit: Maximum number of items
            now: Items backed off until after this time are skipped

        Returns:
            Up to `limit` items ordered priority desc, created_at asc, id asc
        """
        stmt = (
            select(QueueItemModel)
            .where(
                QueueItemModel.status == QueueStatus.QUEUED,
                or_(
                    QueueItemModel.available_at.is_(None),
                    QueueItemModel.available_at <= now,
                ),
            )
            .order_by(
                QueueItemModel.priority.desc(),
                QueueItemModel.created_at.asc(),
                QueueItemModel.id.asc(),
            )
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def claim(
        self,
        session: AsyncSession,
        item_id: UUID,
        now: datetime,
    ) -> QueueItemModel | None:
        """
        Atomically move a queued item to processing and count the attempt.

        Returns:
            The claimed row, or None when another worker already claimed it
        """
        return await self.update_where(
            session,
            item_id,
            QueueItemModel.status == QueueStatus.QUEUED,
            status=QueueStatus.PROCESSING,
            attempts=QueueItemModel.attempts + 1,
            claimed_at=now,
            available_at=None,
        )

    async def update_if_status(
        self,
        session: AsyncSession,
        item_id: UUID,
        expected: Sequence[QueueStatus],
        **values: Any,
    ) -> QueueItemModel | None:
        """
        Update an item only while its status is one of `expected`.

        Returns:
            Updated row, or None when the status no longer matches
        """
        return await self.update_where(
            session,
            item_id,
            QueueItemModel.status.in_(list(expected)),
            **values,
        )

    async def get_stale_processing(
        self,
        session: AsyncSession,
        claimed_before: datetime,
        limit: int | None = None,
    ) -> Sequence[QueueItemModel]:
        """
        Retrieve processing items whose lease started before `claimed_before`.

        Items without a claimed_at are treated as stale.
        """
        stmt = (
            select(QueueItemModel)
            .where(
                QueueItemModel.status == QueueStatus.PROCESSING,
                or_(
                    QueueItemModel.claimed_at.is_(None),
                    QueueItemModel.claimed_at < claimed_before,
                ),
            )
            .order_by(QueueItemModel.claimed_at.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_active_for_file(
        self,
        session: AsyncSession,
        file_id: UUID,
    ) -> QueueItemModel | None:
        """Retrieve the queued or processing item for a file, if any."""
        stmt = (
            select(QueueItemModel)
            .where(
                QueueItemModel.file_id == file_id,
                QueueItemModel.status.in_(list(ACTIVE_QUEUE_STATUSES)),
            )
            .order_by(QueueItemModel.created_at.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
