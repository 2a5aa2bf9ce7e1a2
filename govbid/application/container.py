"""
Adapter wiring.

Builds the SQL metadata store, S3 object store, Gemini analysis client and
queue processor from settings. Shared by the API dependencies and the
scheduled handler.

Dependencies: govbid.boundary, govbid.configs
System role: Composition root
"""

from govbid.boundary.db.connection import get_async_session_factory
from govbid.boundary.db.metadata_store import SqlMetadataStore
from govbid.boundary.llm.gemini_analysis_client import GeminiAnalysisClient, build_chat_model
from govbid.boundary.storage.s3_object_store import S3ObjectStore
from govbid.configs.settings import Settings
from govbid.core.analysis_queue.processor import AnalysisQueueProcessor, build_queue_processor


def create_metadata_store() -> SqlMetadataStore:
    return SqlMetadataStore(get_async_session_factory())


def create_object_store(settings: Settings) -> S3ObjectStore:
    config = settings.object_store
    return S3ObjectStore(
        bucket=config.bucket,
        region=config.region,
        endpoint_url=config.endpoint_url,
    )


def create_analysis_service(settings: Settings) -> GeminiAnalysisClient:
    config = settings.analysis
    return GeminiAnalysisClient(
        build_chat_model(
            model_name=config.model_name,
            temperature=config.temperature,
            max_output_tokens=config.max_output_tokens,
            google_api_key=config.google_api_key,
        )
    )


def create_queue_processor(settings: Settings) -> AnalysisQueueProcessor:
    """Processor over the production adapters."""
    return build_queue_processor(
        settings.queue,
        store=create_metadata_store(),
        object_store=create_object_store(settings),
        analysis_service=create_analysis_service(settings),
    )
