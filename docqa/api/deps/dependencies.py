"""
Dependency injection container.

ServiceCache builds long-lived clients lazily, once per process; FastAPI
dependency functions below assemble per-request services from it.

Dependencies: fastapi, sqlalchemy, docqa.configs, docqa.application, docqa.boundary
System role: DI container for service injection
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncGenerator

from fastapi import Cookie, Depends, Request
from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from docqa.application.services import ChatService, DocumentService, IngestionService
from docqa.boundary.db import get_async_engine, get_async_session_factory
from docqa.boundary.llm import EmbeddingProvider, build_chat_model
from docqa.boundary.storage import DocumentStorage, get_document_storage
from docqa.boundary.vdb import VectorStore, get_vector_store
from docqa.configs import Settings, get_settings
from docqa.core.document_processing import ChunkingTask, ExtractionTask, IngestionPipeline
from docqa.core.exceptions import UnauthenticatedError
from docqa.core.job_tracker import JobTracker
from docqa.observability.langfuse_tracer import LangfuseTracer


class ServiceCache:
    """
    Container for cached service instances.

    Components may be passed in directly (tests, scripts); anything not
    supplied is built from settings on first use.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        engine: AsyncEngine | None = None,
        embeddings: Embeddings | None = None,
        vector_store: VectorStore | None = None,
        chat_model: BaseChatModel | None = None,
        storage: DocumentStorage | None = None,
        tracer: LangfuseTracer | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.job_tracker = JobTracker(
            max_jobs=self.settings.ingestion.max_tracked_jobs,
            retention_seconds=self.settings.ingestion.job_retention_seconds,
        )
        self.upload_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._engine = engine
        self._session_factory: async_sessionmaker | None = None
        self._embeddings = embeddings
        self._vector_store = vector_store
        self._chat_model = chat_model
        self._storage = storage
        self._tracer = tracer
        self._pipeline: IngestionPipeline | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def embeddings(self) -> Embeddings:
        if self._embeddings is None:
            self._embeddings = EmbeddingProvider.from_settings(self.settings.embedding)
        return self._embeddings

    @property
    def vector_store(self) -> VectorStore:
        """Get cached vector store (backend fixed for the process lifetime)."""
        if self._vector_store is None:
            self._vector_store = get_vector_store(self.settings, self.embeddings)
        return self._vector_store

    @property
    def chat_model(self) -> BaseChatModel:
        if self._chat_model is None:
            self._chat_model = build_chat_model(self.settings.llm)
        return self._chat_model

    @property
    def storage(self) -> DocumentStorage:
        if self._storage is None:
            self._storage = get_document_storage(self.settings.storage)
        return self._storage

    @property
    def tracer(self) -> LangfuseTracer:
        if self._tracer is None:
            self._tracer = LangfuseTracer(self.settings.observability)
        return self._tracer

    @property
    def pipeline(self) -> IngestionPipeline:
        """Get cached ingestion pipeline."""
        if self._pipeline is None:
            ingestion = self.settings.ingestion
            self._pipeline = IngestionPipeline(
                storage=self.storage,
                extraction_task=ExtractionTask(
                    min_text_chars=ingestion.min_text_chars,
                    min_fallback_chars=ingestion.min_fallback_chars,
                ),
                chunking_task=ChunkingTask(
                    chunk_size=ingestion.chunk_size,
                    chunk_overlap=ingestion.chunk_overlap,
                ),
                embeddings=self.embeddings,
                vector_store=self.vector_store,
                job_tracker=self.job_tracker,
            )
        return self._pipeline

    async def aclose(self) -> None:
        """Release pooled connections and flush traces."""
        if self._engine is not None:
            await self._engine.dispose()
        if self._tracer is not None:
            self._tracer.flush()


def get_service_cache(request: Request) -> ServiceCache:
    """Get the service cache attached to the application."""
    return request.app.state.service_cache


async def get_async_db(
    cache: ServiceCache = Depends(get_service_cache),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Session scoped to the request
    """
    async with cache.session_factory() as session:
        yield session


def get_owner_id(user_id: str | None = Cookie(default=None, alias="userId")) -> str:
    """
    Resolve the caller's identity from the userId cookie.

    Raises:
        UnauthenticatedError: Cookie missing or empty
    """
    if not user_id:
        raise UnauthenticatedError("Authentication required")
    return user_id


def get_ingestion_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> IngestionService:
    """Get ingestion service instance."""
    return IngestionService(
        db=db,
        storage=cache.storage,
        pipeline=cache.pipeline,
        job_tracker=cache.job_tracker,
        settings=cache.settings.ingestion,
        key_prefix=cache.settings.storage.key_prefix,
        upload_locks=cache.upload_locks,
    )


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> DocumentService:
    """Get document service instance."""
    return DocumentService(
        db=db,
        job_tracker=cache.job_tracker,
        quota=cache.settings.ingestion.max_documents_per_owner,
    )


def get_chat_service(cache: ServiceCache = Depends(get_service_cache)) -> ChatService:
    """Get chat service instance with a fresh tracing handler."""
    handler = cache.tracer.callback_handler()
    return ChatService(
        model=cache.chat_model,
        embeddings=cache.embeddings,
        vector_store=cache.vector_store,
        settings=cache.settings.chat,
        top_k=cache.settings.vector_store.top_k,
        callbacks=[handler] if handler is not None else None,
    )
