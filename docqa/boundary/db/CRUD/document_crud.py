"""
Document CRUD operations.

Owner-scoped queries over DocumentModel: quota counting and the dashboard
listing.

Dependencies: sqlalchemy, docqa.boundary.db.models.document_model
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.base_crud import BaseCRUD
from docqa.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with owner-scoped queries.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def count_by_owner(self, session: AsyncSession, owner_id: str) -> int:
        """
        Count documents uploaded by an owner.

        Args:
            session: Async database session
            owner_id: Owner identity

        Returns:
            int: Number of documents the owner holds
        """
        stmt = select(func.count()).select_from(DocumentModel).where(DocumentModel.owner_id == owner_id)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def get_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve an owner's documents, newest first.

        Args:
            session: Async database session
            owner_id: Owner identity
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of DocumentModels belonging to the owner
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: str,
    ) -> DocumentModel | None:
        """Retrieve a document only if it belongs to the owner."""
        stmt = select(DocumentModel).where(DocumentModel.id == id, DocumentModel.owner_id == owner_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


document_crud = DocumentCRUD()
