"""
PostgreSQL + pgvector store.

Documents and chunks live in regular tables; similarity is computed by
pgvector's cosine distance operator. Each public method runs in its own
transaction taken from the session factory.

Dependencies: sqlalchemy, pgvector, kbchat.boundary.db.CRUD
System role: Production vector store for RAG retrieval
"""

import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kbchat.boundary.db.base import parse_uuid
from kbchat.boundary.db.CRUD import chunk_crud, document_crud
from kbchat.boundary.db.models.document_model import DocumentStatus
from kbchat.boundary.vdb.base import VectorStore
from kbchat.boundary.vdb.vector_schemas import (
    ChunkInput,
    DocumentRecord,
    KnowledgeBaseStats,
    SearchResult,
)
from kbchat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


def _to_record(model) -> DocumentRecord:
    return DocumentRecord(
        id=str(model.id),
        tenant_id=model.tenant_id,
        filename=model.filename,
        media_type=model.media_type,
        size_bytes=model.size_bytes,
        status=model.status,
        chunk_count=model.chunk_count,
        error_message=model.error_message,
        created_at=model.created_at,
    )


class PgVectorStore(VectorStore):
    """
    pgvector-backed implementation of VectorStore.

    Atomicity of upsert_chunks and delete_document comes from running the
    chunk statements and the document update in one database transaction.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedding_dimension: int,
    ) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Async session factory created at startup
            embedding_dimension: Expected length of every embedding
        """
        super().__init__(embedding_dimension)
        self._session_factory = session_factory

    async def create_document(
        self,
        tenant_id: str,
        filename: str,
        media_type: str,
        size_bytes: int,
    ) -> DocumentRecord:
        try:
            async with self._session_factory() as session, session.begin():
                document = await document_crud.create(
                    session,
                    tenant_id,
                    filename=filename,
                    media_type=media_type,
                    size_bytes=size_bytes,
                    status=DocumentStatus.PROCESSING,
                )
                record = _to_record(document)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Failed to create document record",
                operation="create_document",
                details={"tenant_id": tenant_id, "error_type": type(e).__name__},
            ) from e
        logger.info(
            f"{__name__}:create_document - Created document",
            extra={"tenant_id": tenant_id, "document_id": record.id},
        )
        return record

    async def upsert_chunks(
        self,
        tenant_id: str,
        document_id: str,
        content: str,
        chunks: Sequence[ChunkInput],
    ) -> DocumentRecord:
        self._check_dimensions(chunks)
        doc_uuid = parse_uuid(document_id)
        if doc_uuid is None:
            raise VectorStoreError("Invalid document id", operation="upsert")

        try:
            async with self._session_factory() as session, session.begin():
                existing = await document_crud.get_by_id(session, tenant_id, doc_uuid)
                if existing is None:
                    raise VectorStoreError(
                        "Document not found for tenant",
                        operation="upsert",
                        details={"document_id": document_id},
                    )
                # Replace any chunks left from a previous indexing attempt
                await chunk_crud.delete_by_document(session, tenant_id, doc_uuid)
                inserted = await chunk_crud.bulk_create(
                    session,
                    tenant_id,
                    doc_uuid,
                    [chunk.model_dump() for chunk in chunks],
                )
                document = await document_crud.mark_completed(
                    session,
                    tenant_id,
                    doc_uuid,
                    content=content,
                    chunk_count=inserted,
                )
                record = _to_record(document)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Failed to write chunks",
                operation="upsert",
                details={"document_id": document_id, "error_type": type(e).__name__},
            ) from e

        logger.info(
            f"{__name__}:upsert_chunks - Indexed {record.chunk_count} chunks",
            extra={"tenant_id": tenant_id, "document_id": document_id},
        )
        return record

    async def mark_failed(self, tenant_id: str, document_id: str, error_message: str) -> None:
        doc_uuid = parse_uuid(document_id)
        if doc_uuid is None:
            return
        try:
            async with self._session_factory() as session, session.begin():
                await document_crud.mark_failed(session, tenant_id, doc_uuid, error_message)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Failed to mark document as failed",
                operation="mark_failed",
                details={"document_id": document_id, "error_type": type(e).__name__},
            ) from e

    async def similarity_search(
        self,
        tenant_id: str,
        query_vector: Sequence[float],
        k: int,
        min_similarity: float,
    ) -> list[SearchResult]:
        if k <= 0:
            return []
        if len(query_vector) != self.embedding_dimension:
            raise VectorStoreError(
                "Query dimension mismatch",
                operation="query",
                details={"expected": self.embedding_dimension, "actual": len(query_vector)},
            )
        try:
            async with self._session_factory() as session:
                rows = await chunk_crud.similarity_search(
                    session, tenant_id, query_vector, k, min_similarity
                )
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Similarity search failed",
                operation="query",
                details={"tenant_id": tenant_id, "error_type": type(e).__name__},
            ) from e

        return [
            SearchResult(
                chunk_id=str(row.id),
                document_id=str(row.document_id),
                chunk_index=row.chunk_index,
                content=row.content,
                filename=row.filename,
                similarity_score=float(row.similarity),
            )
            for row in rows
        ]

    async def delete_document(self, tenant_id: str, document_id: str) -> bool:
        doc_uuid = parse_uuid(document_id)
        if doc_uuid is None:
            return False
        try:
            async with self._session_factory() as session, session.begin():
                chunks_deleted = await chunk_crud.delete_by_document(session, tenant_id, doc_uuid)
                deleted = await document_crud.delete_by_id(session, tenant_id, doc_uuid)
        except SQLAlchemyError as e:
            raise VectorStoreError(
                "Failed to delete document",
                operation="delete",
                details={"document_id": document_id, "error_type": type(e).__name__},
            ) from e
        if deleted:
            logger.info(
                f"{__name__}:delete_document - Deleted document and {chunks_deleted} chunks",
                extra={"tenant_id": tenant_id, "document_id": document_id},
            )
        return deleted

    async def get_document(self, tenant_id: str, document_id: str) -> DocumentRecord | None:
        doc_uuid = parse_uuid(document_id)
        if doc_uuid is None:
            return None
        async with self._session_factory() as session:
            document = await document_crud.get_by_id(session, tenant_id, doc_uuid)
        return _to_record(document) if document else None

    async def list_documents(self, tenant_id: str) -> list[DocumentRecord]:
        async with self._session_factory() as session:
            documents = await document_crud.get_all(session, tenant_id)
        return [_to_record(document) for document in documents]

    async def get_stats(self, tenant_id: str) -> KnowledgeBaseStats:
        async with self._session_factory() as session:
            documents = await document_crud.get_all(session, tenant_id)
            total_chunks = await chunk_crud.count(session, tenant_id)
        return KnowledgeBaseStats(
            total_documents=len(documents),
            completed_documents=sum(d.status == DocumentStatus.COMPLETED for d in documents),
            failed_documents=sum(d.status == DocumentStatus.FAILED for d in documents),
            total_chunks=total_chunks,
        )
