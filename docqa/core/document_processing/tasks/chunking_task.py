"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits extracted text into overlapping windows, preferring paragraph, then
line, then sentence, then word boundaries before a hard cut.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion pipeline
"""

from langchain_text_splitters import RecursiveCharacterTextSplitter

from docqa.core.document_processing.models import ExtractedText
from docqa.models.chunk import Chunk, ChunkMetadata

SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


class ChunkingTask:
    """Split extracted text into chunks using RecursiveCharacterTextSplitter."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks
        """
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=SEPARATORS,
            keep_separator="end",
            length_function=len,
        )

    def chunk(
        self,
        extracted: ExtractedText,
        namespace_id: str,
        source_locator: str,
        file_name: str,
    ) -> list[Chunk]:
        """
        Split text into chunks stamped with document metadata.

        An empty result is valid and means nothing should be embedded.

        Args:
            extracted: Extraction result
            namespace_id: Namespace (document id) every chunk belongs to
            source_locator: Where the raw document lives
            file_name: Original file name

        Returns:
            list[Chunk]: Chunks in document order
        """
        texts = self._splitter.split_text(extracted.text)
        return [
            Chunk(
                content=text,
                metadata=ChunkMetadata(
                    namespace_id=namespace_id,
                    source_locator=source_locator,
                    source_file_name=file_name,
                    total_pages=extracted.total_pages,
                    chunk_index=index,
                ),
            )
            for index, text in enumerate(texts)
        ]
