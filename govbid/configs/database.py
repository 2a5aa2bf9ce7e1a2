"""
Metadata database settings.

PostgreSQL holds the ai_analysis_queue and checklist_files tables. Either a
full URL (POSTGRES_URL, as handed out by managed providers) or the individual
POSTGRES_* parts may be given.

Dependencies: pydantic, pydantic_settings
System role: Connection parameters for the async engine
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from govbid.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """POSTGRES_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="",
        description="Complete database URL; wins over the individual parts when set",
    )
    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    user: str = Field(default="postgres")
    password: str = Field(default="postgres")
    db: str = Field(default="govbid", description="Database name")
    sslmode: str = Field(default="require", description="'require' adds ssl=require for asyncpg")

    pool_size: int = Field(default=10, description="Persistent connections per process")
    max_overflow: int = Field(default=20, description="Burst connections above pool_size")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a free connection")
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    @property
    def async_database_url(self) -> str:
        """SQLAlchemy URL using the asyncpg driver."""
        if self.url:
            return _normalize_async_url(self.url)
        query = "?ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}{query}"
        )


def _normalize_async_url(raw_url: str) -> str:
    """Point postgres:// and postgresql:// URLs at the asyncpg dialect."""
    raw_url = raw_url.strip()
    for prefix in ("postgres://", "postgresql://"):
        if raw_url.startswith(prefix):
            return "postgresql+asyncpg://" + raw_url[len(prefix):]
    return raw_url
