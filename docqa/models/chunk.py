"""
Chunk domain model.

A chunk is a bounded text span derived from one source document and is the
unit of embedding and retrieval. Chunks are created only during ingestion
and never updated afterwards.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChunkMetadata(BaseModel):
    """
    Metadata attached to every stored chunk.

    Serialized with camelCase keys (namespaceId, sourceLocator, ...) so the
    same shape is stored in the vector backend and reported in x-sources.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    namespace_id: str = Field(description="Namespace (document id) the chunk belongs to")
    source_locator: str = Field(description="Fetchable URL or path of the raw document")
    source_file_name: str = Field(description="Original uploaded filename")
    total_pages: int = Field(default=1, description="Page count of the source document")
    chunk_index: int = Field(default=0, description="Position of the chunk within the document")

    def to_store(self) -> dict:
        """Serialize for vector store metadata (camelCase keys)."""
        return self.model_dump(by_alias=True)


class Chunk(BaseModel):
    """Document chunk model."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Chunk text content")
    metadata: ChunkMetadata = Field(description="Chunk metadata")


class ScoredChunk(BaseModel):
    """Chunk returned from a vector query with its similarity score."""

    chunk: Chunk
    score: float = Field(description="Similarity score (higher is more similar)")
