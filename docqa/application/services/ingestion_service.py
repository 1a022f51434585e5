"""
Ingestion service: synchronous phase of document upload.

Validates the upload, enforces the per-owner quota, stores the raw bytes,
creates the document record and schedules background ingestion. Returns as
soon as the work is scheduled; embedding happens after the response.

Dependencies: fastapi, sqlalchemy, docqa.boundary, docqa.core
System role: Upload orchestration
"""

import asyncio
import logging
from collections import defaultdict
from pathlib import PurePosixPath

from fastapi import BackgroundTasks
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.storage import DocumentStorage, build_object_key
from docqa.configs.ingestion import IngestionSettings
from docqa.core.document_processing.pipeline import IngestionPipeline
from docqa.core.exceptions import (
    QuotaExceededError,
    StorageError,
    UnauthenticatedError,
    UpstreamServiceError,
    ValidationError,
)
from docqa.core.job_tracker import JobTracker
from docqa.models.document import IngestAccepted
from docqa.models.job import IngestionJob

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Upload orchestrator.

    One instance per request. Uploads from the same owner are serialised
    through upload_locks (shared across requests by the service container)
    so the quota check and the insert cannot interleave within a process.
    """

    def __init__(
        self,
        db: AsyncSession,
        storage: DocumentStorage,
        pipeline: IngestionPipeline,
        job_tracker: JobTracker,
        settings: IngestionSettings,
        key_prefix: str = "pdfs",
        upload_locks: dict[str, asyncio.Lock] | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            db: AsyncSession for the document record
            storage: Raw document storage
            pipeline: Background ingestion pipeline
            job_tracker: In-memory job registry
            settings: Quota and upload limits
            key_prefix: Object key prefix for stored uploads
            upload_locks: Per-owner locks guarding quota check and insert
        """
        self.db = db
        self._storage = storage
        self._pipeline = pipeline
        self._job_tracker = job_tracker
        self._settings = settings
        self._key_prefix = key_prefix
        self._upload_locks = upload_locks if upload_locks is not None else defaultdict(asyncio.Lock)

    def validate_upload(self, file_name: str | None, content: bytes | None) -> str:
        """
        Check name, extension and size of an upload.

        Returns:
            str: Normalised file name

        Raises:
            ValidationError: Missing file, unsupported type or oversize
        """
        if not file_name or not file_name.strip():
            raise ValidationError("No file provided", field="file")
        if not content:
            raise ValidationError("Uploaded file is empty", field="file")

        name = file_name.strip()
        suffix = PurePosixPath(name).suffix.lower()
        if suffix not in self._settings.allowed_extensions:
            raise ValidationError(
                f"File type '{suffix or 'none'}' not allowed. "
                f"Allowed types: {', '.join(self._settings.allowed_extensions)}",
                field="file",
            )

        max_bytes = self._settings.max_file_size_mb * 1024 * 1024
        if len(content) > max_bytes:
            raise ValidationError(
                f"File too large. Maximum size: {self._settings.max_file_size_mb}MB",
                field="file",
                details={"size_bytes": len(content)},
            )
        return name

    async def check_quota(self, owner_id: str) -> int:
        """
        Raise QuotaExceededError when the owner is at the limit.

        Returns:
            int: Documents the owner currently holds
        """
        try:
            count = await document_crud.count_by_owner(self.db, owner_id)
        except SQLAlchemyError as e:
            logger.exception(f"{__name__}:check_quota - Database error")
            raise UpstreamServiceError("Could not check document quota", "database") from e

        limit = self._settings.max_documents_per_owner
        if count >= limit:
            logger.info(
                f"{__name__}:check_quota - Quota reached",
                extra={"owner_id": owner_id, "count": count, "limit": limit},
            )
            raise QuotaExceededError(owner_id, limit)
        return count

    async def accept_upload(
        self,
        owner_id: str | None,
        file_name: str | None,
        content: bytes | None,
        background_tasks: BackgroundTasks,
        content_type: str | None = None,
    ) -> IngestAccepted:
        """
        Accept an upload and schedule background ingestion.

        Steps:
        1. Validate owner and file
        2. Enforce the per-owner document quota (no record created on rejection);
           steps 2-4 hold the owner's upload lock
        3. Store raw bytes and obtain the source locator
        4. Create the document record; its id becomes the namespace. On
           failure the stored bytes are deleted again
        5. Register a queued job and schedule the pipeline

        Args:
            owner_id: Uploading user's identity
            file_name: Client file name
            content: File bytes
            background_tasks: FastAPI background task registry
            content_type: Client-declared MIME type

        Returns:
            IngestAccepted: Document id and job id

        Raises:
            UnauthenticatedError: No owner identity
            ValidationError: Bad upload
            QuotaExceededError: Owner at quota
            UpstreamServiceError: Storage or database failure
        """
        if not owner_id:
            raise UnauthenticatedError("Authentication required")

        name = self.validate_upload(file_name, content)
        async with self._upload_locks[owner_id]:
            await self.check_quota(owner_id)

            key = build_object_key(self._key_prefix, name)
            locator = await run_in_threadpool(self._storage.put, key, content, content_type)

            try:
                document = await document_crud.create(
                    self.db,
                    file_url=locator,
                    file_name=name,
                    owner_id=owner_id,
                )
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.exception(f"{__name__}:accept_upload - Failed to create document record")
                await self._discard_upload(locator)
                raise UpstreamServiceError("Could not save document record", "database") from e

        job = self._job_tracker.register(
            IngestionJob(
                namespace=document.namespace,
                owner_id=owner_id,
                source_locator=locator,
                file_name=name,
            )
        )
        background_tasks.add_task(self._pipeline.run, job)

        logger.info(
            f"{__name__}:accept_upload - Document accepted",
            extra={"document_id": document.namespace, "job_id": str(job.id), "owner_id": owner_id},
        )
        return IngestAccepted(
            message="Document uploaded; embedding will continue in the background",
            document_id=document.namespace,
            job_id=str(job.id),
        )

    async def _discard_upload(self, locator: str) -> None:
        """Remove raw bytes whose document record was never created."""
        try:
            await run_in_threadpool(self._storage.delete, locator)
        except StorageError as e:
            logger.warning(f"{__name__}:accept_upload - Orphaned upload left at {locator}: {e}")
