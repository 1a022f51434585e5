"""
Test suite for FAISSPartitionedStore.

Uses real FAISS indexes on a temp directory with hand-made vectors.

System role: Verification of the namespace-partitioned backend
"""

from pathlib import Path

import pytest

from docqa.boundary.vdb import FAISSPartitionedStore, VectorBackendKind
from docqa.core.exceptions import ValidationError, VectorStoreError
from docqa.models.chunk import Chunk, ChunkMetadata

VECTORS = [
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
    [0.9, 0.1, 0.0, 0.0],
]


def make_chunks(namespace: str, count: int) -> list[Chunk]:
    return [
        Chunk(
            content=f"{namespace} chunk {i}",
            metadata=ChunkMetadata(
                namespace_id=namespace,
                source_locator=f"file:///{namespace}.txt",
                source_file_name=f"{namespace}.txt",
                chunk_index=i,
            ),
        )
        for i in range(count)
    ]


@pytest.fixture
def store(tmp_path: Path, fake_embeddings) -> FAISSPartitionedStore:
    return FAISSPartitionedStore(str(tmp_path / "faiss"), fake_embeddings)


def test_kind_is_partitioned(store: FAISSPartitionedStore) -> None:
    assert store.kind == VectorBackendKind.PARTITIONED


def test_write_then_query_orders_by_similarity(store: FAISSPartitionedStore) -> None:
    assert store.write("doc-a", make_chunks("doc-a", 5), VECTORS) == 5

    results = store.query("doc-a", [1.0, 0.0, 0.0, 0.0], k=2)

    assert [r.chunk.content for r in results] == ["doc-a chunk 0", "doc-a chunk 4"]
    assert results[0].score > results[1].score
    assert results[0].chunk.metadata.chunk_index == 0


def test_query_respects_k(store: FAISSPartitionedStore) -> None:
    store.write("doc-a", make_chunks("doc-a", 5), VECTORS)

    results = store.query("doc-a", [0.0, 0.0, 1.0, 0.0], k=4)

    assert len(results) == 4
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_namespaces_are_isolated(store: FAISSPartitionedStore) -> None:
    store.write("doc-a", make_chunks("doc-a", 3), VECTORS[:3])
    store.write("doc-b", make_chunks("doc-b", 3), VECTORS[:3])

    results = store.query("doc-a", [1.0, 0.0, 0.0, 0.0], k=10)

    assert len(results) == 3
    assert {r.chunk.metadata.namespace_id for r in results} == {"doc-a"}


def test_writes_append_to_existing_partition(store: FAISSPartitionedStore) -> None:
    store.write("doc-a", make_chunks("doc-a", 2), VECTORS[:2])
    store.write("doc-a", make_chunks("doc-a", 2), VECTORS[2:4])

    assert len(store.query("doc-a", VECTORS[0], k=10)) == 4


def test_unknown_namespace_returns_empty(store: FAISSPartitionedStore) -> None:
    assert store.query("never-written", VECTORS[0], k=4) == []


def test_empty_write_is_noop(store: FAISSPartitionedStore) -> None:
    assert store.write("doc-a", [], []) == 0
    assert store.query("doc-a", VECTORS[0], k=4) == []


def test_dimension_mismatch_raises_vector_store_error(store: FAISSPartitionedStore) -> None:
    store.write("doc-a", make_chunks("doc-a", 1), VECTORS[:1])

    with pytest.raises(VectorStoreError):
        store.write("doc-a", make_chunks("doc-a", 1), [[1.0, 0.0]])


def test_chunk_from_other_namespace_rejected(store: FAISSPartitionedStore) -> None:
    with pytest.raises(ValidationError):
        store.write("doc-a", make_chunks("doc-b", 1), VECTORS[:1])


def test_vector_count_must_match_chunks(store: FAISSPartitionedStore) -> None:
    with pytest.raises(ValidationError):
        store.write("doc-a", make_chunks("doc-a", 2), VECTORS[:1])


@pytest.mark.parametrize("namespace", ["", "   ", "../escape", "a/b", ".."])
def test_unsafe_namespaces_rejected(store: FAISSPartitionedStore, namespace: str) -> None:
    with pytest.raises(ValidationError):
        store.query(namespace, VECTORS[0], k=1)


def test_ping_creates_root(tmp_path: Path, fake_embeddings) -> None:
    root = tmp_path / "nested" / "faiss"
    FAISSPartitionedStore(str(root), fake_embeddings).ping()

    assert root.is_dir()
