"""
Shared settings for the analysis queue service.

Every concern-specific settings class derives from this one, so the .env
file, encoding and case rules are declared once.

Dependencies: pydantic_settings
System role: Root of the configuration tree
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Deployment-wide values: environment name, debug flag, log level."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment name (development, staging, production)",
    )
    debug: bool = Field(default=False, description="Verbose API errors")
    log_level: str = Field(
        default="INFO",
        description="Root log level applied by configure_logging()",
    )
