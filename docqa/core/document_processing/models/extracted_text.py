"""
Extraction result model.

Dependencies: pydantic
System role: Output of the extraction stage, input of chunking
"""

import enum

from pydantic import BaseModel, Field


class ExtractionStrategy(str, enum.Enum):
    """Which extraction path produced the text."""

    PLAIN_TEXT = "plain_text"
    PDF_TEXT = "pdf_text"
    PDF_LAYOUT = "pdf_layout"


class ExtractedText(BaseModel):
    """Plain text pulled out of a raw document."""

    text: str = Field(description="Extracted document text")
    total_pages: int = Field(default=1, description="Number of pages in the source")
    strategy: ExtractionStrategy = Field(description="Extraction path that produced the text")
