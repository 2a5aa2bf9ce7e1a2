"""Object storage adapters."""

from govbid.boundary.storage.s3_object_store import S3ObjectStore

__all__ = ["S3ObjectStore"]
