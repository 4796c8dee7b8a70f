"""
Chunk CRUD operations.

Bulk insertion, per-document deletion and the cosine similarity query
over the pgvector ``embedding`` column.

Dependencies: sqlalchemy, pgvector, kbchat.boundary.db.models
System role: Vector index persistence and search
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from kbchat.boundary.db.CRUD.base_crud import BaseCRUD
from kbchat.boundary.db.models.chunk_model import ChunkModel
from kbchat.boundary.db.models.document_model import DocumentModel, DocumentStatus


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def bulk_create(
        self,
        session: AsyncSession,
        tenant_id: str,
        document_id: UUID,
        rows: Sequence[dict[str, Any]],
    ) -> int:
        """
        Insert all chunks of a document in one statement.

        Args:
            session: Async database session (caller owns the transaction)
            tenant_id: Owning tenant
            document_id: Parent document UUID
            rows: Dicts with ``chunk_index``, ``content`` and ``embedding``

        Returns:
            Number of rows inserted
        """
        if not rows:
            return 0
        values = [
            {
                "tenant_id": tenant_id,
                "document_id": document_id,
                "chunk_index": row["chunk_index"],
                "content": row["content"],
                "embedding": row["embedding"],
            }
            for row in rows
        ]
        await session.execute(insert(ChunkModel), values)
        return len(values)

    async def delete_by_document(
        self,
        session: AsyncSession,
        tenant_id: str,
        document_id: UUID,
    ) -> int:
        """
        Delete every chunk of a document.

        Returns:
            Number of chunks deleted
        """
        stmt = delete(ChunkModel).where(
            ChunkModel.document_id == document_id,
            ChunkModel.tenant_id == tenant_id,
        )
        result = await session.execute(stmt)
        return result.rowcount or 0

    def build_similarity_query(
        self,
        tenant_id: str,
        query_vector: Sequence[float],
        k: int,
        min_similarity: float,
    ) -> Select:
        """
        Build the tenant-scoped cosine similarity query.

        similarity = 1 - cosine_distance. Only chunks of completed documents
        are eligible. Ties are broken by document creation time then chunk
        index, which is insertion order.

        Args:
            tenant_id: Owning tenant
            query_vector: Query embedding
            k: Maximum number of rows
            min_similarity: Inclusive similarity threshold

        Returns:
            Select yielding (chunk_id, document_id, chunk_index, content, filename, similarity)
        """
        distance = ChunkModel.embedding.cosine_distance(list(query_vector))
        similarity = (1 - distance).label("similarity")
        return (
            select(
                ChunkModel.id,
                ChunkModel.document_id,
                ChunkModel.chunk_index,
                ChunkModel.content,
                DocumentModel.filename,
                similarity,
            )
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(
                ChunkModel.tenant_id == tenant_id,
                DocumentModel.tenant_id == tenant_id,
                DocumentModel.status == DocumentStatus.COMPLETED,
                (1 - distance) >= min_similarity,
            )
            .order_by(distance.asc(), DocumentModel.created_at.asc(), ChunkModel.chunk_index.asc())
            .limit(k)
        )

    async def similarity_search(
        self,
        session: AsyncSession,
        tenant_id: str,
        query_vector: Sequence[float],
        k: int,
        min_similarity: float,
    ) -> Sequence[Any]:
        """
        Run the similarity query.

        Returns:
            Result rows as produced by build_similarity_query
        """
        stmt = self.build_similarity_query(tenant_id, query_vector, k, min_similarity)
        result = await session.execute(stmt)
        return result.all()


chunk_crud = ChunkCRUD()
