"""Service orchestrators."""

from .chat_service import ChatService, ChatStream
from .document_service import DocumentService
from .ingestion_service import IngestionService

__all__ = [
    "ChatService",
    "ChatStream",
    "DocumentService",
    "IngestionService",
]
