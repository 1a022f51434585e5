"""
Test suite for JobTracker.

System role: Verification of in-memory ingestion job state
"""

from docqa.core.job_tracker import JobTracker
from docqa.models.job import IngestionJob, JobStatus


def make_job(namespace: str = "doc-1") -> IngestionJob:
    return IngestionJob(
        namespace=namespace,
        owner_id="user-1",
        source_locator="file:///tmp/a.pdf",
        file_name="a.pdf",
    )


def test_register_then_get() -> None:
    tracker = JobTracker()
    job = tracker.register(make_job())

    assert tracker.get("doc-1") == job
    assert tracker.get("doc-1").status == JobStatus.QUEUED


def test_update_changes_status_and_counts() -> None:
    tracker = JobTracker()
    tracker.register(make_job())

    updated = tracker.update("doc-1", JobStatus.STORED, chunk_count=7)

    assert updated.status == JobStatus.STORED
    assert updated.chunk_count == 7
    assert updated.status.is_terminal
    assert tracker.get("doc-1").chunk_count == 7


def test_update_records_error() -> None:
    tracker = JobTracker()
    tracker.register(make_job())

    tracker.update("doc-1", JobStatus.FAILED, error="boom")

    assert tracker.get("doc-1").error == "boom"


def test_update_unknown_namespace_returns_none() -> None:
    assert JobTracker().update("missing", JobStatus.STORED) is None


def test_snapshots_are_not_mutated() -> None:
    tracker = JobTracker()
    original = tracker.register(make_job())

    tracker.update("doc-1", JobStatus.EXTRACTING)

    assert original.status == JobStatus.QUEUED
    assert not JobStatus.EXTRACTING.is_terminal



def test_finished_jobs_expire_after_retention() -> None:
    tracker = JobTracker(retention_seconds=0)
    tracker.register(make_job("doc-1"))
    tracker.update("doc-1", JobStatus.STORED, chunk_count=3)

    tracker.register(make_job("doc-2"))

    assert tracker.get("doc-1") is None
    assert tracker.get("doc-2").status == JobStatus.QUEUED


def test_in_flight_jobs_are_never_evicted() -> None:
    tracker = JobTracker(max_jobs=1, retention_seconds=0)
    tracker.register(make_job("doc-1"))
    tracker.update("doc-1", JobStatus.EMBEDDING)

    tracker.register(make_job("doc-2"))

    assert tracker.get("doc-1").status == JobStatus.EMBEDDING
    assert tracker.get("doc-2") is not None


def test_cap_drops_oldest_finished_jobs_first() -> None:
    tracker = JobTracker(max_jobs=2)
    for namespace in ("doc-1", "doc-2"):
        tracker.register(make_job(namespace))
        tracker.update(namespace, JobStatus.FAILED, error="no text")

    tracker.register(make_job("doc-3"))

    assert tracker.get("doc-1") is None
    assert tracker.get("doc-2").status == JobStatus.FAILED
    assert tracker.get("doc-3").status == JobStatus.QUEUED
