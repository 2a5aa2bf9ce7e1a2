"""
Analysis queue configuration.

Batch sizing, retry defaults, timeouts and trigger authentication for the
document analysis queue.

Dependencies: pydantic_settings
System role: Queue processing configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QueueSettings(BaseSettings):
    """Settings for dequeuing, processing and retrying analysis jobs."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ANALYSIS_QUEUE_",
        case_sensitive=False,
        extra="ignore",
    )

    batch_size: int = Field(default=5, ge=1, description="Items dequeued per run")
    max_concurrency: int = Field(default=5, ge=1, description="Workers running at once within a batch")

    default_priority: int = Field(default=0, description="Priority assigned to new queue items")
    default_max_attempts: int = Field(default=3, ge=1, description="Attempts before terminal failure")

    download_timeout_seconds: float = Field(default=30.0, gt=0, description="Object store download timeout")
    analysis_timeout_seconds: float = Field(default=120.0, gt=0, description="Analysis service call timeout")
    store_timeout_seconds: float = Field(default=15.0, gt=0, description="Metadata store call timeout")

    persist_retry_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts for the success write before giving up",
    )
    persist_retry_wait_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Initial backoff between success write attempts",
    )
    stale_processing_seconds: int = Field(
        default=900,
        ge=1,
        description="Age of a claim after which a processing item is reaped",
    )
    retry_backoff_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Base delay before a requeued item is eligible again (0 disables backoff)",
    )
    retry_backoff_max_seconds: float = Field(default=600.0, ge=0, description="Backoff ceiling")

    cron_secret: str = Field(
        default="default-secret",
        description="Bearer token required by the cron trigger endpoint",
    )
