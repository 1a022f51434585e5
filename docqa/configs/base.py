"""
Settings shared by the aggregated application configuration.

Only process-wide values live here; each concern has its own module with
its own env prefix.

Dependencies: pydantic_settings
System role: Process-wide settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Unprefixed settings read from the environment or .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Deployment name reported in startup logs")
    log_level: str = Field(default="INFO", description="Root log level passed to configure_logging()")
