"""
Object store configuration.

Settings for the bucket holding uploaded checklist documents.

Dependencies: pydantic_settings
System role: Object store (S3-compatible) configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObjectStoreSettings(BaseSettings):
    """Settings for the checklist file bucket."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OBJECT_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="bidding-checklist-files",
        description="Bucket holding uploaded checklist documents",
    )
    region: str = Field(
        default="us-east-1",
        description="Region of the bucket",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom endpoint for S3-compatible storage (None for AWS S3)",
    )
