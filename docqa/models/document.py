"""
Document domain models and schemas.

Response schemas for document upload and the owner dashboard.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IngestAccepted(BaseModel):
    """Immediate response for an accepted upload; embedding continues in background."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    document_id: str
    job_id: str


class DocumentResponse(BaseModel):
    """Response schema for a single document record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    file_name: str
    file_url: str
    owner_id: str
    created_at: datetime


class DocumentListResponse(BaseModel):
    """Owner document list response."""

    documents: list[DocumentResponse]
    total: int
    quota: int = Field(description="Per-owner document limit")
