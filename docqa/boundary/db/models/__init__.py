"""
Database models package.

Exports:
  - DocumentModel: Document ORM model

Dependencies: sqlalchemy, docqa.boundary.db.base
System role: Database model definitions for domain entities
"""

from docqa.boundary.db.models.document_model import DocumentModel

__all__ = ["DocumentModel"]
