"""
Model provider configuration settings.

Embedding and completion services are consumed as opaque capabilities.
The embedding model fixes vector dimensionality, which must match the
dimension the vector index was provisioned with.

Dependencies: pydantic, pydantic_settings
System role: Embedding and chat model configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(default="google", description="Embedding vendor: 'google' or 'bedrock'")
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model ID (gemini-embedding-001 or amazon.titan-embed-text-v2:0)",
    )
    dimension: int = Field(
        default=1024,
        description="Embedding vector dimension (must match the vector index)",
    )
    region: str = Field(default="us-east-1", description="AWS region for Bedrock embeddings")
    api_key: SecretStr | None = Field(default=None, description="Google API key (falls back to GOOGLE_API_KEY)")


class LLMSettings(BaseSettings):
    """Completion service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(default="google", description="Chat model vendor: 'google' or 'bedrock'")
    model: str = Field(default="gemini-2.5-flash", description="Chat model identifier")
    temperature: float = Field(default=0.0, description="Sampling temperature", ge=0.0, le=2.0)
    region: str = Field(default="us-east-1", description="AWS region for Bedrock chat models")
    api_key: SecretStr | None = Field(default=None, description="Google API key (falls back to GOOGLE_API_KEY)")
