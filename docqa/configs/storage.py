"""
Raw document storage configuration.

Dependencies: pydantic_settings
System role: Blob storage configuration for uploaded files
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for raw document storage."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(default="local", description="Storage backend: 's3' or 'local'")
    bucket: str = Field(default="docqa-dev-documents", description="S3 bucket for raw documents")
    region: str = Field(default="us-east-1", description="AWS region for the documents bucket")
    key_prefix: str = Field(default="pdfs", description="Object key prefix for uploads")
    local_dir: str = Field(default="/tmp/.docqa_uploads", description="Directory for local storage")
