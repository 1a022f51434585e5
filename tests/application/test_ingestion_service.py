"""
Test suite for IngestionService.

Uses the in-memory database with mocked storage and pipeline.

System role: Verification of upload validation, quota and scheduling
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID

import pytest
from fastapi import BackgroundTasks
from sqlalchemy.exc import SQLAlchemyError

from docqa.application.services import IngestionService
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.storage import DocumentStorage
from docqa.configs.ingestion import IngestionSettings
from docqa.core.document_processing import IngestionPipeline
from docqa.core.exceptions import (
    QuotaExceededError,
    StorageError,
    UnauthenticatedError,
    UpstreamServiceError,
    ValidationError,
)
from docqa.core.job_tracker import JobTracker
from docqa.models.job import JobStatus

PDF_BYTES = b"%PDF-1.4 pretend content"


@pytest.fixture
def mock_storage():
    storage = MagicMock(spec=DocumentStorage)
    storage.put.side_effect = lambda key, data, content_type=None: f"s3://docs/{key}"
    return storage


@pytest.fixture
def mock_pipeline():
    return MagicMock(spec=IngestionPipeline)


@pytest.fixture
def job_tracker() -> JobTracker:
    return JobTracker()


@pytest.fixture
def service(test_async_db, mock_storage, mock_pipeline, job_tracker) -> IngestionService:
    return IngestionService(
        db=test_async_db,
        storage=mock_storage,
        pipeline=mock_pipeline,
        job_tracker=job_tracker,
        settings=IngestionSettings(max_documents_per_owner=3, max_file_size_mb=1),
    )


class TestValidateUpload:
    """Tests for validate_upload()."""

    def test_accepts_allowed_types(self, service) -> None:
        assert service.validate_upload(" notes.PDF ", b"x") == "notes.PDF"
        assert service.validate_upload("notes.md", b"x") == "notes.md"
        assert service.validate_upload("\treport.txt  ", b"x") == "report.txt"

    @pytest.mark.parametrize("file_name", [None, "", "   "])
    def test_missing_file(self, service, file_name) -> None:
        with pytest.raises(ValidationError, match="No file provided"):
            service.validate_upload(file_name, b"x")

    def test_empty_content(self, service) -> None:
        with pytest.raises(ValidationError):
            service.validate_upload("a.pdf", b"")

    def test_rejects_unknown_extension(self, service) -> None:
        with pytest.raises(ValidationError, match="not allowed"):
            service.validate_upload("malware.exe", b"x")

    def test_rejects_oversize(self, service) -> None:
        with pytest.raises(ValidationError, match="File too large"):
            service.validate_upload("big.pdf", b"x" * (1024 * 1024 + 1))


class TestAcceptUpload:
    """Tests for accept_upload()."""

    @pytest.mark.asyncio
    async def test_creates_record_and_schedules_pipeline(
        self, service, test_async_db, mock_storage, mock_pipeline, job_tracker
    ) -> None:
        background_tasks = BackgroundTasks()

        accepted = await service.accept_upload("user-1", "notes.pdf", PDF_BYTES, background_tasks)

        document = await document_crud.get_for_owner(test_async_db, UUID(accepted.document_id), "user-1")
        assert document is not None
        assert document.file_name == "notes.pdf"
        assert document.file_url.startswith("s3://docs/pdfs/")
        assert document.file_url.endswith("-notes.pdf")

        job = job_tracker.get(accepted.document_id)
        assert job.status == JobStatus.QUEUED
        assert str(job.id) == accepted.job_id
        assert job.source_locator == document.file_url

        assert len(background_tasks.tasks) == 1
        assert background_tasks.tasks[0].func == mock_pipeline.run
        assert background_tasks.tasks[0].args == (job,)
        mock_pipeline.run.assert_not_called()
        assert "background" in accepted.message

    @pytest.mark.asyncio
    async def test_quota_blocks_fourth_upload(self, service, test_async_db, mock_storage) -> None:
        for i in range(3):
            await service.accept_upload("user-1", f"doc{i}.pdf", PDF_BYTES, BackgroundTasks())

        with pytest.raises(QuotaExceededError) as exc_info:
            await service.accept_upload("user-1", "doc3.pdf", PDF_BYTES, BackgroundTasks())

        assert exc_info.value.status_code == 403
        assert "maximum number of documents (3)" in exc_info.value.message
        assert await document_crud.count_by_owner(test_async_db, "user-1") == 3
        assert mock_storage.put.call_count == 3

    @pytest.mark.asyncio
    async def test_quota_is_per_owner(self, service, test_async_db) -> None:
        for i in range(3):
            await service.accept_upload("user-1", f"doc{i}.pdf", PDF_BYTES, BackgroundTasks())

        accepted = await service.accept_upload("user-2", "doc.pdf", PDF_BYTES, BackgroundTasks())

        assert accepted.document_id

    @pytest.mark.asyncio
    async def test_missing_owner_is_unauthenticated(self, service, mock_storage) -> None:
        with pytest.raises(UnauthenticatedError):
            await service.accept_upload(None, "notes.pdf", PDF_BYTES, BackgroundTasks())

        mock_storage.put.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_upload_stores_nothing(self, service, test_async_db, mock_storage) -> None:
        with pytest.raises(ValidationError):
            await service.accept_upload("user-1", "notes.exe", PDF_BYTES, BackgroundTasks())

        mock_storage.put.assert_not_called()
        assert await document_crud.count_by_owner(test_async_db, "user-1") == 0

    @pytest.mark.asyncio
    async def test_concurrent_uploads_respect_quota(self, service, test_async_db, mock_storage) -> None:
        results = await asyncio.gather(
            *(service.accept_upload("user-1", f"doc{i}.pdf", PDF_BYTES, BackgroundTasks()) for i in range(5)),
            return_exceptions=True,
        )

        rejected = [r for r in results if isinstance(r, QuotaExceededError)]
        assert len(rejected) == 2
        assert await document_crud.count_by_owner(test_async_db, "user-1") == 3
        assert mock_storage.put.call_count == 3


class TestFailedInsert:
    """Tests for the database failure path of accept_upload()."""

    @pytest.mark.asyncio
    async def test_stored_bytes_are_removed(self, service, mock_storage, job_tracker) -> None:
        background_tasks = BackgroundTasks()
        with patch(
            "docqa.application.services.ingestion_service.document_crud.create",
            new=AsyncMock(side_effect=SQLAlchemyError("insert failed")),
        ):
            with pytest.raises(UpstreamServiceError) as exc_info:
                await service.accept_upload("user-1", "notes.pdf", PDF_BYTES, background_tasks)

        assert exc_info.value.status_code == 502
        mock_storage.delete.assert_called_once()
        (locator,) = mock_storage.delete.call_args.args
        assert locator.startswith("s3://docs/pdfs/") and locator.endswith("-notes.pdf")
        assert background_tasks.tasks == []

    @pytest.mark.asyncio
    async def test_delete_failure_keeps_database_error(self, service, mock_storage) -> None:
        mock_storage.delete.side_effect = StorageError("bucket gone")
        with patch(
            "docqa.application.services.ingestion_service.document_crud.create",
            new=AsyncMock(side_effect=SQLAlchemyError("insert failed")),
        ):
            with pytest.raises(UpstreamServiceError, match="Could not save document record"):
                await service.accept_upload("user-1", "notes.pdf", PDF_BYTES, BackgroundTasks())
