"""
S3 client for document bucket operations.

Uploads raw documents and downloads them again for background ingestion.
Locators have the form s3://<bucket>/<key>.

Dependencies: boto3
System role: Production blob storage for uploaded documents
"""

import logging
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docqa.boundary.storage.base import DocumentStorage
from docqa.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3DocumentStorage(DocumentStorage):
    """S3 client for document bucket operations."""

    def __init__(self, bucket: str, region: str = "us-east-1") -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = boto3.client("s3", region_name=region)

    def put(self, key: str, data: bytes, content_type: str | None = None) -> str:
        extra = {"ContentType": content_type} if content_type else {}
        try:
            self._s3_client.put_object(Bucket=self._bucket, Key=key, Body=data, **extra)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:put - FAILED: key={key}, {type(e).__name__}: {e}")
            raise StorageError(f"Failed to upload document: {e}", {"key": key}) from e
        logger.info(f"{__name__}:put - Uploaded s3://{self._bucket}/{key} ({len(data)} bytes)")
        return f"s3://{self._bucket}/{key}"

    def fetch(self, locator: str) -> bytes:
        parsed = urlparse(locator)
        if parsed.scheme != "s3" or not parsed.netloc:
            raise StorageError(f"Not an S3 locator: {locator}")
        key = parsed.path.lstrip("/")
        try:
            response = self._s3_client.get_object(Bucket=parsed.netloc, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:fetch - FAILED: {locator}, {type(e).__name__}: {e}")
            raise StorageError(f"Failed to download document: {e}", {"locator": locator}) from e

    def delete(self, locator: str) -> None:
        parsed = urlparse(locator)
        if parsed.scheme != "s3" or not parsed.netloc:
            raise StorageError(f"Not an S3 locator: {locator}")
        try:
            self._s3_client.delete_object(Bucket=parsed.netloc, Key=parsed.path.lstrip("/"))
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:delete - FAILED: {locator}, {type(e).__name__}: {e}")
            raise StorageError(f"Failed to delete document: {e}", {"locator": locator}) from e
        logger.info(f"{__name__}:delete - Removed {locator}")
