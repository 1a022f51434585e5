"""
Observability configuration settings.

Settings for Langfuse tracing of chat and retrieval chains.

Dependencies: pydantic_settings
System role: Observability configuration for tracing
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Observability configuration for Langfuse."""

    model_config = SettingsConfigDict(
        env_prefix="LANGFUSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    public_key: str | None = Field(
        default=None,
        description="Langfuse public key for tracing",
    )
    secret_key: str | None = Field(
        default=None,
        description="Langfuse secret key for tracing",
    )
    host: str = Field(
        default="http://localhost:3000",
        description="Langfuse server host URL",
    )
    enable_tracing: bool = Field(
        default=True,
        description="Enable Langfuse tracing when keys are present",
    )

    @property
    def tracing_configured(self) -> bool:
        """Tracing runs only when enabled and both keys are set."""
        return bool(self.enable_tracing and self.public_key and self.secret_key)
