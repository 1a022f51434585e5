"""
Exception hierarchy for the document Q&A service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.
Each error that can reach a client carries the HTTP status it maps to.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocQAError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DocQAError):
    """Raised when input validation fails (missing file, empty messages)."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class UnauthenticatedError(DocQAError):
    """Raised when the request carries no owner identity."""

    status_code = 401


class QuotaExceededError(DocQAError):
    """Raised when an owner already holds the maximum number of documents."""

    status_code = 403

    def __init__(self, owner_id: str, limit: int) -> None:
        super().__init__(
            f"You have reached the maximum number of documents ({limit})",
            {"owner_id": owner_id, "limit": limit},
        )


class DocumentNotFoundError(DocQAError):
    """Raised when a document record cannot be found for the owner."""

    status_code = 404

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class NoRelevantDocumentsError(DocQAError):
    """Raised when a chat turn retrieves nothing (including the timeout case)."""

    status_code = 404

    def __init__(self, namespace: str, timed_out: bool = False) -> None:
        super().__init__(
            "No relevant documents found. The document might still be processing, "
            "or there may be no embeddings for this document yet.",
            {"namespace": namespace, "timed_out": timed_out},
        )


class DocumentProcessingError(DocQAError):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when document bytes cannot be parsed at all."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            document_id: ID of the document
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)


class ExtractionEmptyError(DocumentProcessingError):
    """Raised when neither extraction strategy yields usable text. Not retryable."""

    def __init__(
        self,
        text_length: int,
        total_pages: int,
        document_id: str | None = None,
    ) -> None:
        super().__init__(
            "Could not extract text from document. It might be a scanned image without OCR.",
            document_id,
            {"text_length": text_length, "total_pages": total_pages},
        )


class UpstreamServiceError(DocQAError):
    """Raised when an embedding, completion, storage or database dependency fails."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if service:
            details["service"] = service
        super().__init__(message, details)


class EmbeddingError(UpstreamServiceError):
    """Raised when embedding generation fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "embedding", details)


class CompletionError(UpstreamServiceError):
    """Raised when the completion model cannot be built or called."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "completion", details)


class StorageError(UpstreamServiceError):
    """Raised when raw document storage cannot be read or written."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "storage", details)


class VectorStoreError(UpstreamServiceError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (write, query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, "vector_store", details)


class StoreUnavailableError(VectorStoreError):
    """Raised on connection or auth failure against the vector backend. Not retried."""


class NamespaceMismatchError(DocQAError):
    """Invariant violation: a backend returned a chunk from another namespace."""

    def __init__(self, requested: str, found: str | None) -> None:
        super().__init__(
            "Retrieved chunk belongs to a different namespace",
            {"requested_namespace": requested, "chunk_namespace": found},
        )
