"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), create_tables(): Connection management
  - DocumentModel: Document record entity
  - document_crud: CRUD operation singleton

Dependencies: sqlalchemy, docqa.configs
System role: Database adapter for document records
"""

from docqa.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docqa.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from docqa.boundary.db.CRUD import BaseCRUD, DocumentCRUD, document_crud
from docqa.boundary.db.models import DocumentModel

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentModel",
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
]
