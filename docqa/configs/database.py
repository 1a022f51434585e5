"""
Database configuration settings.

Connection parameters for the document record store.
Supports connection pooling and async operations.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docqa.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Document record store configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./docqa.db",
        description="Async SQLAlchemy URL (postgresql+asyncpg://... in production)",
    )
    pool_size: int = Field(default=10, description="Connection pool size (ignored for SQLite)")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def is_sqlite(self) -> bool:
        """Whether the URL points at SQLite (no pool sizing)."""
        return self.url.startswith("sqlite")
