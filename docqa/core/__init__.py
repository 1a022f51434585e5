"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from docqa.core.exceptions import (
    CompletionError,
    DocQAError,
    DocumentNotFoundError,
    DocumentProcessingError,
    EmbeddingError,
    ExtractionEmptyError,
    NamespaceMismatchError,
    NoRelevantDocumentsError,
    ParsingError,
    QuotaExceededError,
    StorageError,
    StoreUnavailableError,
    UnauthenticatedError,
    UpstreamServiceError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "DocQAError",
    "ValidationError",
    "UnauthenticatedError",
    "QuotaExceededError",
    "DocumentNotFoundError",
    "NoRelevantDocumentsError",
    "DocumentProcessingError",
    "ParsingError",
    "ExtractionEmptyError",
    "UpstreamServiceError",
    "EmbeddingError",
    "CompletionError",
    "StorageError",
    "VectorStoreError",
    "StoreUnavailableError",
    "NamespaceMismatchError",
]
