"""
Vector store interface.

Every operation takes the tenant id; implementations must never return or
modify rows of another tenant.

Dependencies: kbchat.boundary.vdb.vector_schemas
System role: Contract shared by the pgvector and in-memory stores
"""

from abc import ABC, abstractmethod
from typing import Sequence

from kbchat.boundary.vdb.vector_schemas import (
    ChunkInput,
    DocumentRecord,
    KnowledgeBaseStats,
    SearchResult,
)
from kbchat.core.exceptions import VectorStoreError


class VectorStore(ABC):
    """Tenant-scoped document and chunk index."""

    def __init__(self, embedding_dimension: int) -> None:
        self.embedding_dimension = embedding_dimension

    @abstractmethod
    async def create_document(
        self,
        tenant_id: str,
        filename: str,
        media_type: str,
        size_bytes: int,
    ) -> DocumentRecord:
        """Create a document record in ``processing`` state and commit it."""

    @abstractmethod
    async def upsert_chunks(
        self,
        tenant_id: str,
        document_id: str,
        content: str,
        chunks: Sequence[ChunkInput],
    ) -> DocumentRecord:
        """
        Index all chunks of a document and mark it completed, atomically.

        Either every chunk is stored and the document becomes ``completed``,
        or nothing changes.

        Raises:
            VectorStoreError: On dimension mismatch, unknown document or write failure
        """

    @abstractmethod
    async def mark_failed(self, tenant_id: str, document_id: str, error_message: str) -> None:
        """Record a pipeline failure on the document."""

    @abstractmethod
    async def similarity_search(
        self,
        tenant_id: str,
        query_vector: Sequence[float],
        k: int,
        min_similarity: float,
    ) -> list[SearchResult]:
        """
        Return at most k chunks with similarity >= min_similarity, best first.

        Ties keep insertion order (document creation, then chunk index).
        """

    @abstractmethod
    async def delete_document(self, tenant_id: str, document_id: str) -> bool:
        """Delete a document and all its chunks atomically. False if not found."""

    @abstractmethod
    async def get_document(self, tenant_id: str, document_id: str) -> DocumentRecord | None:
        """Fetch one document record."""

    @abstractmethod
    async def list_documents(self, tenant_id: str) -> list[DocumentRecord]:
        """List a tenant's documents, newest first."""

    @abstractmethod
    async def get_stats(self, tenant_id: str) -> KnowledgeBaseStats:
        """Document and chunk counters for a tenant."""

    def _check_dimensions(self, chunks: Sequence[ChunkInput]) -> None:
        for chunk in chunks:
            if len(chunk.embedding) != self.embedding_dimension:
                raise VectorStoreError(
                    "Embedding dimension mismatch",
                    operation="upsert",
                    details={
                        "expected": self.embedding_dimension,
                        "actual": len(chunk.embedding),
                        "chunk_index": chunk.chunk_index,
                    },
                )
