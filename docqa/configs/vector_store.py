"""
Vector store configuration settings.

Selects the vector backend for the process lifetime and carries the
connection parameters each backend needs.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for ingestion and retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS partitions or one S3 Vectors index)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="faiss",
        description="Vector store type: 'faiss' (one partition per namespace) or 's3' (filtered single index)",
    )

    # Namespace-partitioned backend
    faiss_index_dir: str = Field(
        default="/tmp/.docqa_faiss",
        description="Root directory holding one FAISS index per namespace",
    )

    # Filtered single-collection backend
    vectors_bucket: str = Field(default="docqa-dev-vectors", description="S3 Vectors bucket name")
    index_name: str = Field(default="documents", description="S3 Vectors index name within the bucket")
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
    query_retries: int = Field(
        default=3,
        description="Attempts for throttled S3 Vectors queries",
        ge=1,
    )

    top_k: int = Field(default=4, description="Number of chunks to retrieve per chat turn", ge=1, le=100)
