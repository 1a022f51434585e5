"""
Text extraction task using pypdf.

Converts raw upload bytes into plain text. PDFs are read whole first; text
too short to be a real document is treated as a probable scan and a
per-page layout extraction is tried before giving up.

Dependencies: pypdf
System role: First stage of document ingestion pipeline
"""

import logging
from io import BytesIO
from pathlib import PurePosixPath

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from docqa.core.document_processing.models import ExtractedText, ExtractionStrategy
from docqa.core.exceptions import ExtractionEmptyError, ParsingError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".md"}


class ExtractionTask:
    """Extract plain text from PDF, text and markdown uploads."""

    def __init__(self, min_text_chars: int = 50, min_fallback_chars: int = 20) -> None:
        """
        Initialize extraction task with text thresholds.

        Args:
            min_text_chars: Below this the primary PDF text is treated as a scan
            min_fallback_chars: Below this the fallback text counts as empty
        """
        self._min_text_chars = min_text_chars
        self._min_fallback_chars = min_fallback_chars

    def extract(self, data: bytes, file_name: str, document_id: str | None = None) -> ExtractedText:
        """
        Extract text from raw document bytes.

        Args:
            data: Raw file content
            file_name: Original file name (selects the format by extension)
            document_id: Document ID for error context

        Returns:
            ExtractedText: Text, page count and the strategy that produced it

        Raises:
            ParsingError: Bytes cannot be parsed as the declared format
            ExtractionEmptyError: No usable text after the fallback
        """
        suffix = PurePosixPath(file_name).suffix.lower()
        if suffix in TEXT_EXTENSIONS:
            return self._extract_plain(data, document_id)
        if suffix == ".pdf":
            return self._extract_pdf(data, document_id)
        raise ParsingError(
            f"Unsupported file format: {suffix or file_name}",
            document_id=document_id,
            file_type=suffix,
        )

    def _extract_plain(self, data: bytes, document_id: str | None) -> ExtractedText:
        text = data.decode("utf-8", errors="replace")
        stripped_length = len(text.strip())
        if stripped_length < self._min_fallback_chars:
            raise ExtractionEmptyError(stripped_length, 1, document_id)
        return ExtractedText(text=text, total_pages=1, strategy=ExtractionStrategy.PLAIN_TEXT)

    def _extract_pdf(self, data: bytes, document_id: str | None) -> ExtractedText:
        try:
            reader = PdfReader(BytesIO(data))
            pages = list(reader.pages)
            text = "\n\n".join(page.extract_text() or "" for page in pages)
        except (PyPdfError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"{__name__}:extract - Unparseable PDF: {type(e).__name__}: {e}")
            raise ParsingError(
                f"Failed to parse PDF: {e}",
                document_id=document_id,
                file_type=".pdf",
            ) from e

        total_pages = len(pages)
        if len(text.strip()) >= self._min_text_chars:
            logger.info(
                f"{__name__}:extract - Extracted {len(text)} chars from {total_pages} pages",
                extra={"document_id": document_id},
            )
            return ExtractedText(text=text, total_pages=total_pages, strategy=ExtractionStrategy.PDF_TEXT)

        logger.warning(
            f"{__name__}:extract - Only {len(text.strip())} chars extracted, "
            f"trying per-page layout extraction",
            extra={"document_id": document_id, "total_pages": total_pages},
        )
        fallback = self._extract_pages_layout(pages)
        if fallback.strip():
            kept, strategy = fallback, ExtractionStrategy.PDF_LAYOUT
        else:
            # Layout mode found nothing; the short primary text is all there is
            kept, strategy = text, ExtractionStrategy.PDF_TEXT

        if len(kept.strip()) < self._min_fallback_chars:
            raise ExtractionEmptyError(len(kept.strip()), total_pages, document_id)

        return ExtractedText(text=kept, total_pages=total_pages, strategy=strategy)

    @staticmethod
    def _extract_pages_layout(pages: list) -> str:
        parts = []
        for index, page in enumerate(pages):
            try:
                parts.append(page.extract_text(extraction_mode="layout") or "")
            except Exception as e:
                logger.warning(f"{__name__}:extract - Page {index + 1} layout extraction failed: {e}")
        return "\n".join(parts)
