"""
Checklist file CRUD operations.

Dependencies: sqlalchemy, govbid.boundary.db.models
System role: Persistence operations for uploaded checklist files
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from govbid.boundary.db.CRUD.base_crud import BaseCRUD
from govbid.boundary.db.models.file_record_model import FileRecordModel


class FileRecordCRUD(BaseCRUD[FileRecordModel]):
    """CRUD operations for FileRecordModel."""

    def __init__(self) -> None:
        super().__init__(FileRecordModel)

    async def get_by_company(
        self,
        session: AsyncSession,
        company_id: UUID,
        limit: int | None = None,
    ) -> Sequence[FileRecordModel]:
        """
        Retrieve a company's checklist files, newest first.

        Args:
            session: Async database session
            company_id: Owning company
            limit: Maximum number of files to return

        Returns:
            Sequence of FileRecordModels for the company
        """
        stmt = (
            select(FileRecordModel)
            .where(FileRecordModel.company_id == company_id)
            .order_by(FileRecordModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()
