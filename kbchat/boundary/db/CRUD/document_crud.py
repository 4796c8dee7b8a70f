"""
Document CRUD operations.

Provides tenant-scoped operations for DocumentModel with status
transitions used by the ingestion pipeline.

Dependencies: sqlalchemy, kbchat.boundary.db.models.document_model
System role: Document persistence operations
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from kbchat.boundary.db.CRUD.base_crud import BaseCRUD
from kbchat.boundary.db.models.document_model import DocumentModel, DocumentStatus


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with completion and failure updates.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def mark_completed(
        self,
        session: AsyncSession,
        tenant_id: str,
        document_id: UUID,
        content: str,
        chunk_count: int,
    ) -> DocumentModel | None:
        """
        Mark a document as completed with its extracted text and chunk count.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            document_id: Document UUID
            content: Extracted document text
            chunk_count: Number of chunks indexed

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            tenant_id,
            document_id,
            status=DocumentStatus.COMPLETED,
            content=content,
            chunk_count=chunk_count,
            error_message=None,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        tenant_id: str,
        document_id: UUID,
        error_message: str,
    ) -> DocumentModel | None:
        """
        Mark a document as failed with a human-readable reason.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            document_id: Document UUID
            error_message: Failure reason

        Returns:
            Updated DocumentModel if found, None otherwise
        """
        return await self.update_by_id(
            session,
            tenant_id,
            document_id,
            status=DocumentStatus.FAILED,
            error_message=error_message,
        )


document_crud = DocumentCRUD()
