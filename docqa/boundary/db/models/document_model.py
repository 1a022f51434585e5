"""
Document ORM model.

One row per uploaded document. The row id is the document's retrieval
namespace: every chunk embedded from the file is stored under str(id).

Dependencies: sqlalchemy, docqa.boundary.db.base
System role: Document record persistence
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from docqa.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Uploaded document record.

    Attributes:
        id: Document UUID, also the vector namespace
        file_url: Source locator of the raw file in blob storage
        file_name: Original client file name
        owner_id: Identity of the uploading user
    """

    __tablename__ = "documents"

    file_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    file_name: Mapped[str] = mapped_column(String(512), nullable=False)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (Index("ix_documents_owner_id", "owner_id"),)

    @property
    def namespace(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, file_name={self.file_name!r}, owner_id={self.owner_id!r})>"
