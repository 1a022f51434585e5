"""
CRUD operations for database models.

Usage:
    from docqa.boundary.db.CRUD import document_crud

    total = await document_crud.count_by_owner(db, owner_id)
"""

from docqa.boundary.db.CRUD.base_crud import BaseCRUD
from docqa.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = ["BaseCRUD", "DocumentCRUD", "document_crud"]
