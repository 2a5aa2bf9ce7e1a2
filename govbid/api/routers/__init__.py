"""API routers."""

from .analysis_queue import router as analysis_queue_router
from .files import router as files_router
from .health import router as health_router

__all__ = [
    "analysis_queue_router",
    "files_router",
    "health_router",
]
