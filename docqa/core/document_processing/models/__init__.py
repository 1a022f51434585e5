"""
Models for document processing pipeline.

Exports: ExtractedText, ExtractionStrategy
"""

from .extracted_text import ExtractedText, ExtractionStrategy

__all__ = ["ExtractedText", "ExtractionStrategy"]
