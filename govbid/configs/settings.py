"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from govbid.configs.analysis import AnalysisSettings
from govbid.configs.base import BaseSettings
from govbid.configs.database import DatabaseSettings
from govbid.configs.object_store import ObjectStoreSettings
from govbid.configs.queue import QueueSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    object_store: ObjectStoreSettings = ObjectStoreSettings()
    analysis: AnalysisSettings = AnalysisSettings()
    queue: QueueSettings = QueueSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from govbid.configs import get_settings
        settings = get_settings()
    """
    return Settings()
