"""
Document API endpoints.

Routes: POST /documents, GET /documents, GET /documents/{id},
GET /documents/{id}/status

Dependencies: docqa.application.services, docqa.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile

from docqa.api.deps import get_document_service, get_ingestion_service, get_owner_id
from docqa.application.services import DocumentService, IngestionService
from docqa.models.document import DocumentListResponse, DocumentResponse, IngestAccepted
from docqa.models.job import JobStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=IngestAccepted, response_model_by_alias=True)
async def upload_document(
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(default=None),
    owner_id: str = Depends(get_owner_id),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestAccepted:
    """
    Upload a document for background ingestion.

    Returns immediately with the document id; extraction, chunking and
    embedding run after the response. Poll /documents/{id}/status to see
    when the document becomes searchable.
    """
    content = await file.read() if file is not None else None
    return await ingestion_service.accept_upload(
        owner_id=owner_id,
        file_name=file.filename if file is not None else None,
        content=content,
        background_tasks=background_tasks,
        content_type=file.content_type if file is not None else None,
    )


@router.get("", response_model=DocumentListResponse, response_model_by_alias=True)
async def list_documents(
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List the caller's documents, newest first."""
    return await document_service.list_documents(owner_id)


@router.get("/{document_id}", response_model=DocumentResponse, response_model_by_alias=True)
async def get_document(
    document_id: UUID,
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Get one of the caller's documents."""
    return await document_service.get_document(owner_id, document_id)


@router.get("/{document_id}/status", response_model=JobStatusResponse, response_model_by_alias=True)
async def get_document_status(
    document_id: UUID,
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> JobStatusResponse:
    """Get the in-memory ingestion status of a document."""
    return await document_service.get_status(owner_id, document_id)
