"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: govbid.configs, govbid.application, govbid.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends

from govbid.application import container
from govbid.application.services.analysis_queue_service import AnalysisQueueService
from govbid.boundary.db.metadata_store import SqlMetadataStore
from govbid.boundary.storage.s3_object_store import S3ObjectStore
from govbid.configs import Settings, get_settings
from govbid.core.analysis_queue.processor import AnalysisQueueProcessor


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


@lru_cache
def get_metadata_store() -> SqlMetadataStore:
    """Get the process-wide SQL metadata store."""
    return container.create_metadata_store()


@lru_cache
def get_object_store() -> S3ObjectStore:
    """Get the process-wide S3 object store."""
    return container.create_object_store(get_settings())


@lru_cache
def get_queue_processor() -> AnalysisQueueProcessor:
    """
    Get the queue processor.

    Built lazily so the Gemini client is only created when a trigger runs.
    """
    return container.create_queue_processor(get_settings())


def get_analysis_queue_service(
    store: SqlMetadataStore = Depends(get_metadata_store),
    object_store: S3ObjectStore = Depends(get_object_store),
    settings: Settings = Depends(get_settings_dependency),
) -> AnalysisQueueService:
    """
    Get analysis queue service instance.

    Returns:
        AnalysisQueueService: Service over the shared metadata and object stores
    """
    return AnalysisQueueService(store=store, settings=settings.queue, object_store=object_store)
