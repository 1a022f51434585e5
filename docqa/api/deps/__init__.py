"""FastAPI dependencies."""

from .dependencies import (
    ServiceCache,
    get_async_db,
    get_chat_service,
    get_document_service,
    get_ingestion_service,
    get_owner_id,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_async_db",
    "get_chat_service",
    "get_document_service",
    "get_ingestion_service",
    "get_owner_id",
    "get_service_cache",
]
