"""
Background ingestion pipeline.

Coordinates fetch, extraction, chunking, embedding and the vector store
write for one uploaded document. Runs after the upload response has been
sent; failures are logged and recorded on the job, never raised.

Dependencies: docqa.core.document_processing.tasks, docqa.boundary
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time

from langchain_core.embeddings import Embeddings

from docqa.boundary.storage import DocumentStorage
from docqa.boundary.vdb import VectorStore
from docqa.core.document_processing.tasks import ChunkingTask, ExtractionTask
from docqa.core.exceptions import DocQAError, ExtractionEmptyError
from docqa.core.job_tracker import JobTracker
from docqa.models.job import IngestionJob, JobStatus

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate document ingestion: fetch -> extract -> chunk -> embed -> write."""

    def __init__(
        self,
        storage: DocumentStorage,
        extraction_task: ExtractionTask,
        chunking_task: ChunkingTask,
        embeddings: Embeddings,
        vector_store: VectorStore,
        job_tracker: JobTracker,
    ) -> None:
        self._storage = storage
        self._extraction_task = extraction_task
        self._chunking_task = chunking_task
        self._embeddings = embeddings
        self._vector_store = vector_store
        self._job_tracker = job_tracker

    def run(self, job: IngestionJob) -> IngestionJob:
        """
        Process one document end to end.

        Blocking; FastAPI runs it in a worker thread after the response.

        Args:
            job: Queued job describing the document

        Returns:
            IngestionJob: Final job snapshot (stored, empty or failed)
        """
        namespace = job.namespace
        start_time = time.perf_counter()
        log_extra = {"namespace": namespace, "job_id": str(job.id), "file_name": job.file_name}
        logger.info(f"{__name__}:run - START", extra=log_extra)

        try:
            self._job_tracker.update(namespace, JobStatus.EXTRACTING)
            data = self._storage.fetch(job.source_locator)
            extracted = self._extraction_task.extract(data, job.file_name, document_id=namespace)

            self._job_tracker.update(namespace, JobStatus.CHUNKING)
            chunks = self._chunking_task.chunk(
                extracted,
                namespace_id=namespace,
                source_locator=job.source_locator,
                file_name=job.file_name,
            )
            if not chunks:
                logger.warning(f"{__name__}:run - No chunks produced, nothing to embed", extra=log_extra)
                return self._finish(job, JobStatus.EMPTY, chunk_count=0)

            self._job_tracker.update(namespace, JobStatus.EMBEDDING, chunk_count=len(chunks))
            vectors = self._embeddings.embed_documents([chunk.content for chunk in chunks])
            written = self._vector_store.write(namespace, chunks, vectors)

        except ExtractionEmptyError as e:
            logger.warning(f"{__name__}:run - {e.message}", extra={**log_extra, **e.details})
            return self._finish(job, JobStatus.FAILED, error=e.message)
        except DocQAError as e:
            logger.exception(f"{__name__}:run - FAILED: {type(e).__name__}: {e}", extra=log_extra)
            return self._finish(job, JobStatus.FAILED, error=e.message)
        except Exception as e:
            # Nothing observes this task; the job record is the only outcome
            logger.exception(f"{__name__}:run - FAILED: {type(e).__name__}: {e}", extra=log_extra)
            return self._finish(job, JobStatus.FAILED, error=f"{type(e).__name__}: {e}")

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:run - SUCCESS: {written} chunks stored in {elapsed_ms:.0f}ms",
            extra={**log_extra, "strategy": extracted.strategy.value},
        )
        return self._finish(job, JobStatus.STORED, chunk_count=written)

    def _finish(
        self,
        job: IngestionJob,
        status: JobStatus,
        chunk_count: int | None = None,
        error: str | None = None,
    ) -> IngestionJob:
        updated = self._job_tracker.update(job.namespace, status, chunk_count=chunk_count, error=error)
        if updated is None:
            updated = job.model_copy(update={"status": status, "error": error, "chunk_count": chunk_count or 0})
        return updated
