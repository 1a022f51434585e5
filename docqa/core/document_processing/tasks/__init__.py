"""
Task modules for document processing pipeline.

Exports: ExtractionTask, ChunkingTask
"""

from .chunking_task import ChunkingTask
from .extraction_task import ExtractionTask

__all__ = ["ExtractionTask", "ChunkingTask"]
