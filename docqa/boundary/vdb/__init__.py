"""
Vector database boundary layer.

- FAISSPartitionedStore: one local FAISS index per namespace
- S3VectorsFilteredStore: one S3 Vectors index, namespace metadata filter

Dependencies: faiss-cpu, langchain_community, boto3
System role: Vector store adapters for ingestion and retrieval
"""

from docqa.boundary.vdb.base import VectorBackendKind, VectorStore
from docqa.boundary.vdb.faiss_vectors_store import FAISSPartitionedStore
from docqa.boundary.vdb.s3_vectors_store import S3VectorsFilteredStore, build_namespace_filter
from docqa.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "VectorBackendKind",
    "VectorStore",
    "FAISSPartitionedStore",
    "S3VectorsFilteredStore",
    "build_namespace_filter",
    "get_vector_store",
]
