"""
Document service: owner dashboard reads and ingestion status.

Dependencies: sqlalchemy, docqa.boundary.db, docqa.core.job_tracker
System role: Document read orchestration
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.core.exceptions import DocumentNotFoundError
from docqa.core.job_tracker import JobTracker
from docqa.models.document import DocumentListResponse, DocumentResponse
from docqa.models.job import JobStatusResponse


class DocumentService:
    """Read-side operations over an owner's documents."""

    def __init__(self, db: AsyncSession, job_tracker: JobTracker, quota: int) -> None:
        self.db = db
        self._job_tracker = job_tracker
        self._quota = quota

    async def list_documents(self, owner_id: str) -> DocumentListResponse:
        """Owner's documents, newest first, with the quota for display."""
        documents = await document_crud.get_by_owner(self.db, owner_id)
        return DocumentListResponse(
            documents=[DocumentResponse.model_validate(doc) for doc in documents],
            total=len(documents),
            quota=self._quota,
        )

    async def get_document(self, owner_id: str, document_id: UUID) -> DocumentResponse:
        """
        Fetch one document the owner holds.

        Raises:
            DocumentNotFoundError: Missing or owned by someone else
        """
        document = await document_crud.get_for_owner(self.db, document_id, owner_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return DocumentResponse.model_validate(document)

    async def get_status(self, owner_id: str, document_id: UUID) -> JobStatusResponse:
        """
        Ingestion status for an owned document.

        "unknown" means this process never ran (or has forgotten) the job.
        """
        await self.get_document(owner_id, document_id)
        job = self._job_tracker.get(str(document_id))
        if job is None:
            return JobStatusResponse(document_id=str(document_id), status="unknown")
        return JobStatusResponse(
            document_id=job.namespace,
            status=job.status.value,
            chunk_count=job.chunk_count,
            error=job.error,
            updated_at=job.updated_at,
        )
