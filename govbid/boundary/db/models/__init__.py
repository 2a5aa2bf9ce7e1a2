"""
Database models package.

Exports:
  - FileRecordModel: Checklist file ORM model
  - QueueItemModel: Analysis queue ORM model

Dependencies: sqlalchemy, govbid.boundary.db.base
System role: Database model definitions for domain entities
"""

from govbid.boundary.db.models.file_record_model import FileRecordModel
from govbid.boundary.db.models.queue_item_model import QueueItemModel

__all__ = [
    "FileRecordModel",
    "QueueItemModel",
]
