"""
Document processing pipeline for ingestion.

Extraction, chunking and the background pipeline that ties them to
embedding and vector storage.
"""

from .pipeline import IngestionPipeline
from .tasks import ChunkingTask, ExtractionTask

__all__ = ["IngestionPipeline", "ExtractionTask", "ChunkingTask"]
