"""
Raw document storage boundary.

Dependencies: boto3
System role: Blob storage adapters and factory
"""

import logging

from docqa.boundary.storage.base import DocumentStorage, build_object_key
from docqa.boundary.storage.local_storage import LocalDocumentStorage
from docqa.boundary.storage.s3_storage import S3DocumentStorage
from docqa.configs.storage import StorageSettings

logger = logging.getLogger(__name__)


def get_document_storage(settings: StorageSettings) -> DocumentStorage:
    """Select the storage backend from configuration."""
    backend = settings.backend.lower()
    if backend == "s3":
        logger.info(f"{__name__}:get_document_storage - Using S3 bucket {settings.bucket}")
        return S3DocumentStorage(bucket=settings.bucket, region=settings.region)
    if backend == "local":
        logger.info(f"{__name__}:get_document_storage - Using local directory {settings.local_dir}")
        return LocalDocumentStorage(settings.local_dir)
    raise ValueError(f"Invalid STORAGE_BACKEND: {backend}. Must be 's3' or 'local'.")


__all__ = [
    "DocumentStorage",
    "LocalDocumentStorage",
    "S3DocumentStorage",
    "build_object_key",
    "get_document_storage",
]
