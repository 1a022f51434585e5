"""
Namespace-scoped retrieval.

NamespaceRetriever runs a top-k vector query restricted to one namespace.
RetrievalSignal is a callback handler that captures the first retrieval
result of a chain run so the caller can wait for it with a deadline while
the model output is already streaming.

Dependencies: langchain_core, fastapi.concurrency, docqa.boundary.vdb
System role: RAG retrieval business logic
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from langchain_core.callbacks import (
    AsyncCallbackHandler,
    AsyncCallbackManagerForRetrieverRun,
    CallbackManagerForRetrieverRun,
)
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.retrievers import BaseRetriever

from docqa.boundary.vdb import VectorStore
from docqa.core.exceptions import DocQAError, NamespaceMismatchError, UpstreamServiceError
from docqa.models.chunk import ScoredChunk

logger = logging.getLogger(__name__)


class NamespaceRetriever(BaseRetriever):
    """
    Top-k retriever bound to a single namespace.

    Results whose chunk namespace differs from the requested one are dropped
    and logged; a backend leaking across namespaces is a defect, never an
    answer source.
    """

    store: VectorStore
    embeddings: Embeddings
    namespace: str
    k: int = 4

    def _search(self, query: str) -> list[Document]:
        query_vector = self.embeddings.embed_query(query)
        results = self.store.query(self.namespace, query_vector, self.k)
        return self._to_documents(results)

    def _to_documents(self, results: list[ScoredChunk]) -> list[Document]:
        documents = []
        for result in results[: self.k]:
            found = result.chunk.metadata.namespace_id
            if found != self.namespace:
                error = NamespaceMismatchError(self.namespace, found)
                logger.error(f"{__name__}:retrieve - Dropping chunk: {error}")
                continue
            metadata = result.chunk.metadata.to_store()
            metadata["score"] = result.score
            documents.append(Document(page_content=result.chunk.content, metadata=metadata))
        logger.info(
            f"{__name__}:retrieve - {len(documents)} documents",
            extra={"namespace": self.namespace, "k": self.k},
        )
        return documents

    def _get_relevant_documents(
        self,
        query: str,
        *,
        run_manager: CallbackManagerForRetrieverRun,
    ) -> list[Document]:
        return self._search(query)

    async def _aget_relevant_documents(
        self,
        query: str,
        *,
        run_manager: AsyncCallbackManagerForRetrieverRun,
    ) -> list[Document]:
        # Embedding and vector SDKs are blocking
        return await run_in_threadpool(self._search, query)


@dataclass(frozen=True)
class RetrievalOutcome:
    """Result of waiting for retrieval: documents, or a timeout with none."""

    documents: list[Document] = field(default_factory=list)
    timed_out: bool = False


class RetrievalSignal(AsyncCallbackHandler):
    """
    Single-shot "documents retrieved" signal.

    Settled by the first on_retriever_end or on_retriever_error. Once a
    wait() has timed out the signal is sealed and later results are
    discarded rather than delivered.
    """

    def __init__(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._future: asyncio.Future[list[Document]] = self._loop.create_future()
        self._sealed = False

    def _settle(self, documents: list[Document] | None, error: BaseException | None) -> None:
        if self._sealed or self._future.done():
            if self._sealed:
                logger.info(f"{__name__}:signal - Discarding retrieval result after timeout")
            return
        if error is not None:
            self._future.set_exception(error)
        else:
            self._future.set_result(documents or [])

    async def on_retriever_end(
        self,
        documents: Sequence[Document],
        *,
        run_id: UUID,
        parent_run_id: UUID | None = None,
        tags: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        logger.info(f"{__name__}:on_retriever_end - Retrieved {len(documents or [])} documents")
        self._loop.call_soon_threadsafe(self._settle, list(documents or []), None)

    async def on_retriever_error(
        self,
        error: BaseException,
        *,
        run_id: UUID,
        parent_run_id: UUID | None = None,
        tags: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        logger.warning(f"{__name__}:on_retriever_error - {type(error).__name__}: {error}")
        self._loop.call_soon_threadsafe(self._settle, None, error)

    async def wait(self, timeout: float) -> RetrievalOutcome:
        """
        Wait for the first retrieval result, at most timeout seconds.

        Returns:
            RetrievalOutcome: Documents (possibly empty) or timed_out=True

        Raises:
            UpstreamServiceError: Retrieval failed before the deadline
        """
        try:
            documents = await asyncio.wait_for(asyncio.shield(self._future), timeout)
        except asyncio.TimeoutError:
            self._sealed = True
            logger.warning(f"{__name__}:wait - No retrieval result within {timeout}s")
            return RetrievalOutcome(documents=[], timed_out=True)
        except DocQAError:
            raise
        except Exception as e:
            raise UpstreamServiceError(f"Retrieval failed: {e}", "retrieval") from e
        return RetrievalOutcome(documents=documents)
