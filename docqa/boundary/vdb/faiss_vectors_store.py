"""
FAISS namespace-partitioned vector store.

Keeps one FAISS index per namespace on local disk (index_dir/<namespace>).
Writes and queries address exactly one partition, so namespaces are isolated
physically rather than by filtering.

Dependencies: faiss-cpu, langchain_community, docqa.boundary.vdb.base
System role: Namespace-partitioned vector backend
"""

import logging
import re
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import faiss
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_core.embeddings import Embeddings

from docqa.boundary.vdb.base import (
    VectorBackendKind,
    VectorStore,
    require_namespace,
    validate_write,
)
from docqa.core.exceptions import StoreUnavailableError, ValidationError, VectorStoreError
from docqa.models.chunk import Chunk, ChunkMetadata, ScoredChunk

logger = logging.getLogger(__name__)

_SAFE_NAMESPACE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FAISSPartitionedStore(VectorStore):
    """
    FAISS vector store with one on-disk index per namespace.

    The embeddings object is only handed to LangChain's FAISS wrapper, which
    requires one; reads and writes here always pass precomputed vectors.
    """

    kind = VectorBackendKind.PARTITIONED

    def __init__(self, index_dir: str, embeddings: Embeddings) -> None:
        """
        Initialize the partitioned store.

        Args:
            index_dir: Root directory holding one sub-directory per namespace
            embeddings: Embeddings object for the LangChain FAISS wrapper
        """
        self._root = Path(index_dir)
        self._embeddings = embeddings
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        logger.info(f"{__name__}:__init__ - FAISS partitions under {self._root}")

    def _partition_path(self, namespace: str) -> Path:
        require_namespace(namespace)
        if not _SAFE_NAMESPACE.match(namespace) or namespace in (".", ".."):
            raise ValidationError("Namespace contains unsupported characters", field="namespace")
        return self._root / namespace

    def _lock_for(self, namespace: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(namespace, threading.Lock())

    @contextmanager
    def _connect(self, namespace: str) -> Iterator[Path]:
        """Hold the partition lock for the duration of one operation."""
        path = self._partition_path(namespace)
        lock = self._lock_for(namespace)
        lock.acquire()
        try:
            yield path
        finally:
            lock.release()

    def _load(self, path: Path) -> FAISS | None:
        if not (path / "index.faiss").exists():
            return None
        try:
            return FAISS.load_local(
                str(path),
                self._embeddings,
                allow_dangerous_deserialization=True,
            )
        except OSError as e:
            raise StoreUnavailableError(
                f"Cannot open FAISS partition: {e}", operation="load", details={"path": str(path)}
            ) from e

    def _create(self, dimension: int) -> FAISS:
        return FAISS(
            embedding_function=self._embeddings,
            index=faiss.IndexFlatL2(dimension),
            docstore=InMemoryDocstore(),
            index_to_docstore_id={},
        )

    def write(self, namespace: str, chunks: list[Chunk], vectors: list[list[float]]) -> int:
        validate_write(namespace, chunks, vectors)
        if not chunks:
            return 0

        with self._connect(namespace) as path:
            logger.info(
                f"{__name__}:write - START: namespace={namespace}, chunks={len(chunks)}",
            )
            try:
                store = self._load(path) or self._create(len(vectors[0]))
                store.add_embeddings(
                    text_embeddings=[(c.content, v) for c, v in zip(chunks, vectors)],
                    metadatas=[c.metadata.to_store() for c in chunks],
                )
                path.mkdir(parents=True, exist_ok=True)
                store.save_local(str(path))
            except StoreUnavailableError:
                raise
            except OSError as e:
                raise StoreUnavailableError(
                    f"Cannot persist FAISS partition: {e}", operation="write"
                ) from e
            except Exception as e:
                # faiss raises AssertionError/RuntimeError on dimension mismatch
                logger.error(f"{__name__}:write - FAILED: {type(e).__name__}: {e}")
                raise VectorStoreError(
                    f"FAISS write failed: {e}",
                    operation="write",
                    details={"namespace": namespace},
                ) from e

        logger.info(f"{__name__}:write - SUCCESS: namespace={namespace}, written={len(chunks)}")
        return len(chunks)

    def query(self, namespace: str, query_vector: list[float], k: int) -> list[ScoredChunk]:
        with self._connect(namespace) as path:
            store = self._load(path)
            if store is None:
                logger.info(f"{__name__}:query - No partition for namespace={namespace}")
                return []
            try:
                results = store.similarity_search_with_score_by_vector(query_vector, k=k)
            except Exception as e:
                logger.error(f"{__name__}:query - FAILED: {type(e).__name__}: {e}")
                raise VectorStoreError(
                    f"FAISS query failed: {e}",
                    operation="query",
                    details={"namespace": namespace},
                ) from e

        # IndexFlatL2 returns distances, smallest first
        scored = [
            ScoredChunk(
                chunk=Chunk(
                    content=doc.page_content,
                    metadata=ChunkMetadata.model_validate(doc.metadata),
                ),
                score=1.0 / (1.0 + float(distance)),
            )
            for doc, distance in results
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        logger.info(
            f"{__name__}:query - Found {len(scored)} results",
            extra={"namespace": namespace, "k": k},
        )
        return scored[:k]

    def ping(self) -> None:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreUnavailableError(f"FAISS index directory unusable: {e}", operation="ping") from e
