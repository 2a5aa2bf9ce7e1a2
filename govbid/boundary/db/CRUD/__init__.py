"""
CRUD operations package.

Exports:
  - BaseCRUD: Generic CRUD base class
  - QueueItemCRUD: Analysis queue operations
  - FileRecordCRUD: Checklist file operations
  - queue_item_crud, file_record_crud: Shared instances
"""

from govbid.boundary.db.CRUD.base_crud import BaseCRUD
from govbid.boundary.db.CRUD.file_record_crud import FileRecordCRUD
from govbid.boundary.db.CRUD.queue_item_crud import QueueItemCRUD

queue_item_crud = QueueItemCRUD()
file_record_crud = FileRecordCRUD()

__all__ = [
    "BaseCRUD",
    "FileRecordCRUD",
    "QueueItemCRUD",
    "file_record_crud",
    "queue_item_crud",
]
