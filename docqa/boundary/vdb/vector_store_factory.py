"""
Vector store factory for selecting between FAISS partitions and S3 Vectors.

Depends on VECTOR_STORE_STORE_TYPE. The choice is made once and fixed for
the process lifetime (the service container caches the result).

Dependencies: docqa.boundary.vdb, docqa.configs
System role: Vector store instantiation and selection
"""

import logging

from langchain_core.embeddings import Embeddings

from docqa.boundary.vdb.base import VectorStore
from docqa.boundary.vdb.faiss_vectors_store import FAISSPartitionedStore
from docqa.boundary.vdb.s3_vectors_store import S3VectorsFilteredStore
from docqa.configs import Settings

logger = logging.getLogger(__name__)


def get_vector_store(settings: Settings, embeddings: Embeddings) -> VectorStore:
    """
    Factory function to get vector store based on configuration.

    Args:
        settings: Application settings
        embeddings: Embeddings used by the FAISS wrapper

    Returns:
        VectorStore: FAISSPartitionedStore or S3VectorsFilteredStore

    Raises:
        ValueError: If the store type is invalid
    """
    store_type = settings.vector_store.store_type.lower()

    if store_type == "faiss":
        logger.info(f"{__name__}:get_vector_store - Creating FAISS partitioned store")
        return FAISSPartitionedStore(
            index_dir=settings.vector_store.faiss_index_dir,
            embeddings=embeddings,
        )

    if store_type == "s3":
        logger.info(f"{__name__}:get_vector_store - Creating S3 Vectors filtered store")
        return S3VectorsFilteredStore(
            vectors_bucket=settings.vector_store.vectors_bucket,
            index_name=settings.vector_store.index_name,
            region=settings.vector_store.aws_region,
            query_retries=settings.vector_store.query_retries,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. Must be 'faiss' or 's3'."
    )
