"""
Ingestion and chat pipeline settings.

Dependencies: pydantic, pydantic_settings
System role: Quota, chunking, extraction and retrieval tuning
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Settings for document upload and background ingestion."""

    model_config = SettingsConfigDict(
        env_prefix="INGESTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_documents_per_owner: int = Field(
        default=3,
        description="Per-owner document quota",
        ge=0,
    )
    max_file_size_mb: int = Field(default=25, description="Upload size limit in megabytes")
    allowed_extensions: list[str] = Field(
        default=[".pdf", ".txt", ".md"],
        description="Accepted upload file extensions",
    )

    chunk_size: int = Field(default=1000, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Overlap between consecutive chunks")

    min_text_chars: int = Field(
        default=50,
        description="Below this, whole-document text is treated as a probable scan",
    )
    min_fallback_chars: int = Field(
        default=20,
        description="Below this, per-page fallback text is treated as empty",
    )

    max_tracked_jobs: int = Field(
        default=1000,
        description="Finished ingestion jobs kept in memory before the oldest are dropped",
        ge=1,
    )
    job_retention_seconds: float = Field(
        default=3600.0,
        description="How long a finished ingestion job stays visible to status polling",
        ge=0,
    )


class ChatSettings(BaseSettings):
    """Settings for the chat responder."""

    model_config = SettingsConfigDict(
        env_prefix="CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    retrieval_timeout_seconds: float = Field(
        default=5.0,
        description="Deadline for the retriever callback before answering 'no documents'",
        gt=0,
    )
    source_preview_chars: int = Field(
        default=50,
        description="Characters of chunk content included in x-sources previews",
    )
