"""
In-memory ingestion job tracking.

Records the progress of background ingestion per document. State is
process-local and lost on restart; it only exists so clients can poll
whether a freshly uploaded document is searchable yet. Finished jobs are
forgotten after a retention period, or earlier when the registry is full.

Dependencies: threading, docqa.models.job
System role: Job tracking business logic
"""

import logging
import threading
from datetime import datetime, timedelta, timezone

from docqa.models.job import IngestionJob, JobStatus

logger = logging.getLogger(__name__)


class JobTracker:
    """
    Thread-safe registry of ingestion jobs keyed by namespace.

    Background ingestion runs in worker threads while the API reads status
    from the event loop, so every access goes through one lock.
    """

    def __init__(self, max_jobs: int = 1000, retention_seconds: float = 3600.0) -> None:
        """
        Initialize tracker.

        Args:
            max_jobs: Registry size above which the oldest finished jobs are dropped
            retention_seconds: How long a finished job stays readable
        """
        self._lock = threading.Lock()
        self._by_namespace: dict[str, IngestionJob] = {}
        self._max_jobs = max_jobs
        self._retention = timedelta(seconds=retention_seconds)

    def register(self, job: IngestionJob) -> IngestionJob:
        """Add a queued job, replacing any earlier job for the same namespace."""
        with self._lock:
            self._by_namespace[job.namespace] = job
            self._evict_locked()
        logger.info(
            f"{__name__}:register - Job {job.id} queued",
            extra={"namespace": job.namespace, "job_id": str(job.id)},
        )
        return job

    def update(
        self,
        namespace: str,
        status: JobStatus,
        chunk_count: int | None = None,
        error: str | None = None,
    ) -> IngestionJob | None:
        """
        Move a job to a new state.

        Args:
            namespace: Job namespace (document id)
            status: New state
            chunk_count: Chunks produced so far, if known
            error: Failure reason when status is FAILED

        Returns:
            IngestionJob | None: Updated snapshot, None if the job is unknown
        """
        with self._lock:
            current = self._by_namespace.get(namespace)
            if current is None:
                return None
            changes = {"status": status, "updated_at": datetime.now(timezone.utc)}
            if chunk_count is not None:
                changes["chunk_count"] = chunk_count
            if error is not None:
                changes["error"] = error
            updated = current.model_copy(update=changes)
            self._by_namespace[namespace] = updated

        logger.debug(f"{__name__}:update - {namespace} -> {status.value}")
        return updated

    def get(self, namespace: str) -> IngestionJob | None:
        """Return the latest job snapshot for a namespace."""
        with self._lock:
            return self._by_namespace.get(namespace)

    def _evict_locked(self) -> None:
        # In-flight jobs are never dropped, so the cap can be exceeded
        cutoff = datetime.now(timezone.utc) - self._retention
        finished = sorted(
            (job for job in self._by_namespace.values() if job.status.is_terminal),
            key=lambda job: job.updated_at,
        )
        expired = [job for job in finished if job.updated_at <= cutoff]
        overflow = len(self._by_namespace) - len(expired) - self._max_jobs
        if overflow > 0:
            expired.extend(finished[len(expired) : len(expired) + overflow])

        for job in expired:
            del self._by_namespace[job.namespace]
        if expired:
            logger.debug(f"{__name__}:evict - Dropped {len(expired)} finished jobs")
