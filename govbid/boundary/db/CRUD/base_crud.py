"""
Generic async CRUD for queue tables.

Model-specific classes inherit insert, primary-key lookup and conditional
update. Nothing here commits; SqlMetadataStore owns the transaction.

Dependencies: sqlalchemy
System role: Shared data access for QueueItemCRUD and FileRecordCRUD
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from govbid.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Row access for a single mapped model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields: Any) -> ModelT:
        """Insert a row and load server-side defaults back onto it."""
        row = self.model(**fields)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, row_id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == row_id))
        return result.scalar_one_or_none()

    async def update_by_id(
        self,
        session: AsyncSession,
        row_id: UUID,
        **values: Any,
    ) -> ModelT | None:
        return await self.update_where(session, row_id, **values)

    async def update_where(
        self,
        session: AsyncSession,
        row_id: UUID,
        *conditions: ColumnElement[bool],
        **values: Any,
    ) -> ModelT | None:
        """
        Compare-and-set update of one row.

        Args:
            session: Open async session
            row_id: Primary key of the row
            *conditions: Extra WHERE clauses that must all hold
            **values: Columns to write

        Returns:
            The updated row, or None when the key or a condition did not match
        """
        stmt = (
            update(self.model)
            .where(self.model.id == row_id, *conditions)
            .values(**values)
            .returning(self.model)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
