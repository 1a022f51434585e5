"""
Ingestion job models.

Jobs are transient, process-local records of background ingestion progress.
They are not persisted; a restart forgets them.

Dependencies: pydantic
System role: Ingestion job state and status API contracts
"""

import enum
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class JobStatus(str, enum.Enum):
    """
    Ingestion lifecycle states.

    QUEUED: Accepted, background phase not started yet
    EXTRACTING: Fetching raw bytes and extracting text
    CHUNKING: Splitting text into overlapping windows
    EMBEDDING: Embedding chunks and writing them to the vector store
    STORED: All chunks written
    EMPTY: Finished with zero chunks (nothing embedded)
    FAILED: Background phase raised; error holds the reason
    """

    QUEUED = "queued"
    EXTRACTING = "extracting"
    CHUNKING = "chunking"
    EMBEDDING = "embedding"
    STORED = "stored"
    EMPTY = "empty"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.STORED, JobStatus.EMPTY, JobStatus.FAILED)


class IngestionJob(BaseModel):
    """In-memory record of one document's background ingestion."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    namespace: str = Field(description="Document id the chunks are stored under")
    owner_id: str
    source_locator: str
    file_name: str
    status: JobStatus = JobStatus.QUEUED
    chunk_count: int = 0
    error: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class JobStatusResponse(BaseModel):
    """Response schema for ingestion status polling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    document_id: str
    status: str
    chunk_count: int = 0
    error: str | None = None
    updated_at: datetime | None = None
