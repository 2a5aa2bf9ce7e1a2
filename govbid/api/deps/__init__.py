"""API-specific dependencies."""

from .dependencies import (
    get_analysis_queue_service,
    get_metadata_store,
    get_object_store,
    get_queue_processor,
    get_settings_dependency,
)

__all__ = [
    "get_analysis_queue_service",
    "get_metadata_store",
    "get_object_store",
    "get_queue_processor",
    "get_settings_dependency",
]
