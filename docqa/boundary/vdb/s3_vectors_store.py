"""
S3 Vectors filtered store.

All documents share one S3 Vectors index. Every vector is stamped with a
filterable namespace_id metadata key and every query carries a namespace
equality filter, so isolation depends on the filter being present.

Metadata Keys:
- Filterable: namespace_id, namespaceId, chunkIndex, totalPages
- Non-filterable: text_content

Dependencies: boto3, tenacity, docqa.boundary.vdb.base
System role: Filtered single-collection vector backend
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import boto3
from botocore.exceptions import BotoCoreError, ClientError, EndpointConnectionError, NoCredentialsError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from docqa.boundary.vdb.base import (
    VectorBackendKind,
    VectorStore,
    require_namespace,
    validate_write,
)
from docqa.core.exceptions import StoreUnavailableError, VectorStoreError
from docqa.models.chunk import Chunk, ChunkMetadata, ScoredChunk

logger = logging.getLogger(__name__)

NAMESPACE_KEY = "namespace_id"
TEXT_KEY = "text_content"
PUT_BATCH_SIZE = 500

_THROTTLING_CODES = {"ThrottlingException", "TooManyRequestsException", "ServiceUnavailableException"}
_UNAVAILABLE_CODES = {
    "AccessDeniedException",
    "UnrecognizedClientException",
    "ExpiredTokenException",
    "InvalidSignatureException",
    "NotFoundException",
}


def build_namespace_filter(namespace: str) -> dict[str, Any]:
    """
    Build the metadata filter restricting a query to one namespace.

    Args:
        namespace: Namespace (document id) to restrict to

    Returns:
        dict: S3 Vectors filter expression

    Raises:
        ValidationError: If namespace is empty
    """
    require_namespace(namespace)
    return {NAMESPACE_KEY: {"$eq": namespace}}


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def _is_throttling(error: BaseException) -> bool:
    return isinstance(error, ClientError) and _error_code(error) in _THROTTLING_CODES


def _translate(error: Exception, operation: str) -> VectorStoreError:
    """Map a boto error onto the vector store error taxonomy."""
    if isinstance(error, (NoCredentialsError, EndpointConnectionError)):
        return StoreUnavailableError(f"S3 Vectors unreachable: {error}", operation=operation)
    if isinstance(error, ClientError) and _error_code(error) in _UNAVAILABLE_CODES:
        return StoreUnavailableError(
            f"S3 Vectors rejected the request: {_error_code(error)}",
            operation=operation,
        )
    return VectorStoreError(f"S3 Vectors {operation} failed: {error}", operation=operation)


class S3VectorsFilteredStore(VectorStore):
    """
    S3 Vectors store for production retrieval.

    A boto3 client is created per operation and closed afterwards.
    Throttled queries are retried with exponential backoff.
    """

    kind = VectorBackendKind.FILTERED

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str = "documents",
        region: str = "us-east-1",
        query_retries: int = 3,
        retry_backoff: float = 1.0,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name within the bucket
            region: AWS region for S3 Vectors
            query_retries: Attempts for throttled queries
            retry_backoff: Initial backoff in seconds between throttled attempts
        """
        self._vectors_bucket = vectors_bucket
        self._index_name = index_name
        self._region = region

        self._query_with_retry = retry(
            retry=retry_if_exception(_is_throttling),
            stop=stop_after_attempt(query_retries),
            wait=wait_exponential_jitter(initial=retry_backoff, max=30 * retry_backoff, jitter=2 * retry_backoff),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:query - Retry {retry_state.attempt_number}/{query_retries} after throttling"
            ),
            reraise=True,
        )(self._query_once)

    @contextmanager
    def _connect(self) -> Iterator[Any]:
        """Create an s3vectors client for one operation and close it afterwards."""
        client = boto3.client("s3vectors", region_name=self._region)
        try:
            yield client
        finally:
            client.close()

    def write(self, namespace: str, chunks: list[Chunk], vectors: list[list[float]]) -> int:
        validate_write(namespace, chunks, vectors)
        if not chunks:
            return 0

        records = []
        for chunk, vector in zip(chunks, vectors):
            metadata = chunk.metadata.to_store()
            metadata[NAMESPACE_KEY] = namespace
            metadata[TEXT_KEY] = chunk.content
            records.append(
                {
                    "key": f"{namespace}#{chunk.metadata.chunk_index}",
                    "data": {"float32": [float(x) for x in vector]},
                    "metadata": metadata,
                }
            )

        logger.info(f"{__name__}:write - START: namespace={namespace}, vectors={len(records)}")
        try:
            with self._connect() as client:
                for start in range(0, len(records), PUT_BATCH_SIZE):
                    client.put_vectors(
                        vectorBucketName=self._vectors_bucket,
                        indexName=self._index_name,
                        vectors=records[start : start + PUT_BATCH_SIZE],
                    )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:write - FAILED: {type(e).__name__}: {e}")
            raise _translate(e, "write") from e

        logger.info(f"{__name__}:write - SUCCESS: namespace={namespace}, written={len(records)}")
        return len(records)

    def _query_once(self, query_vector: list[float], k: int, filter_dict: dict[str, Any]) -> list[dict]:
        with self._connect() as client:
            response = client.query_vectors(
                vectorBucketName=self._vectors_bucket,
                indexName=self._index_name,
                queryVector={"float32": [float(x) for x in query_vector]},
                topK=k,
                filter=filter_dict,
                returnMetadata=True,
                returnDistance=True,
            )
        return response.get("vectors", [])

    def query(self, namespace: str, query_vector: list[float], k: int) -> list[ScoredChunk]:
        filter_dict = build_namespace_filter(namespace)
        try:
            hits = self._query_with_retry(query_vector, k, filter_dict)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:query - ClientError after retries: {e}")
            raise _translate(e, "query") from e

        scored = []
        for hit in hits:
            metadata = dict(hit.get("metadata") or {})
            content = metadata.pop(TEXT_KEY, "")
            metadata.pop(NAMESPACE_KEY, None)
            scored.append(
                ScoredChunk(
                    chunk=Chunk(content=content, metadata=ChunkMetadata.model_validate(metadata)),
                    # cosine distance, smaller is closer
                    score=1.0 - float(hit.get("distance", 0.0)),
                )
            )
        scored.sort(key=lambda s: s.score, reverse=True)

        logger.info(
            f"{__name__}:query - Found {len(scored)} results",
            extra={"namespace": namespace, "k": k},
        )
        return scored[:k]

    def ping(self) -> None:
        try:
            with self._connect() as client:
                client.get_index(vectorBucketName=self._vectors_bucket, indexName=self._index_name)
        except (ClientError, BotoCoreError) as e:
            raise StoreUnavailableError(f"S3 Vectors index unavailable: {e}", operation="ping") from e
