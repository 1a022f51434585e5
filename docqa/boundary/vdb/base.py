"""
Vector store abstraction.

Uniform write/query surface over the two backend variants. The variant is an
explicit tag on the store so callers never sniff for backend-specific
attributes.

Dependencies: docqa.models.chunk
System role: Vector store contract for ingestion and retrieval
"""

import enum
from abc import ABC, abstractmethod

from docqa.core.exceptions import ValidationError
from docqa.models.chunk import Chunk, ScoredChunk


class VectorBackendKind(str, enum.Enum):
    """How a backend isolates namespaces."""

    PARTITIONED = "partitioned"  # one physical partition per namespace
    FILTERED = "filtered"  # one collection, namespace enforced by metadata filter


class VectorStore(ABC):
    """
    Namespace-scoped vector store.

    Implementations acquire their connection resource per operation and
    release it on every exit path; nothing is held across requests.
    """

    kind: VectorBackendKind

    @abstractmethod
    def write(self, namespace: str, chunks: list[Chunk], vectors: list[list[float]]) -> int:
        """
        Persist chunks with their embeddings under a namespace.

        Args:
            namespace: Target namespace (document id)
            chunks: Chunks to store, all stamped with the same namespace
            vectors: Embeddings, aligned 1:1 with chunks

        Returns:
            int: Number of vectors written

        Raises:
            StoreUnavailableError: Connection or auth failure
            VectorStoreError: Any other backend failure (dimension mismatch included)
        """

    @abstractmethod
    def query(self, namespace: str, query_vector: list[float], k: int) -> list[ScoredChunk]:
        """
        Return at most k chunks of the namespace, most similar first.

        Querying a namespace that holds nothing returns an empty list.
        """

    @abstractmethod
    def ping(self) -> None:
        """Check the backend is reachable. Raises StoreUnavailableError otherwise."""


def validate_write(namespace: str, chunks: list[Chunk], vectors: list[list[float]]) -> None:
    """Shared precondition check for write()."""
    require_namespace(namespace)
    if len(chunks) != len(vectors):
        raise ValidationError(
            f"Got {len(chunks)} chunks but {len(vectors)} vectors",
            field="vectors",
        )
    for chunk in chunks:
        if chunk.metadata.namespace_id != namespace:
            raise ValidationError(
                "Chunk namespace does not match write namespace",
                field="namespace",
                details={"namespace": namespace, "chunk_namespace": chunk.metadata.namespace_id},
            )


def require_namespace(namespace: str) -> str:
    """Reject empty or whitespace-only namespaces."""
    if not namespace or not namespace.strip():
        raise ValidationError("Namespace must be a non-empty string", field="namespace")
    return namespace
