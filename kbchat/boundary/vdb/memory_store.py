"""
In-memory vector store for local development and tests.

Same semantics as PgVectorStore: tenant scoping, all-or-nothing
upsert, cosine similarity with threshold and stable tie ordering. State
is lost on restart.

Dependencies: kbchat.boundary.vdb.base
System role: Local vector store for development RAG
"""

import itertools
import logging
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence

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


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors; 0.0 when either is all zeros."""
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return dot / (norm_a * norm_b)


@dataclass
class _StoredChunk:
    id: str
    chunk_index: int
    content: str
    embedding: tuple[float, ...]


@dataclass
class _StoredDocument:
    record: DocumentRecord
    sequence: int
    content: str | None = None
    chunks: tuple[_StoredChunk, ...] = field(default_factory=tuple)


class InMemoryVectorStore(VectorStore):
    """
    Dictionary-backed VectorStore.

    Mutations build the new state first and then swap it in with a single
    assignment, with no await in between, so concurrent coroutines never
    observe a half-written document.
    """

    def __init__(self, embedding_dimension: int) -> None:
        super().__init__(embedding_dimension)
        self._documents: dict[tuple[str, str], _StoredDocument] = {}
        self._sequence = itertools.count()

    async def create_document(
        self,
        tenant_id: str,
        filename: str,
        media_type: str,
        size_bytes: int,
    ) -> DocumentRecord:
        record = DocumentRecord(
            id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            filename=filename,
            media_type=media_type,
            size_bytes=size_bytes,
            status=DocumentStatus.PROCESSING,
            created_at=datetime.now(timezone.utc),
        )
        self._documents[(tenant_id, record.id)] = _StoredDocument(
            record=record,
            sequence=next(self._sequence),
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
        stored = self._documents.get((tenant_id, document_id))
        if stored is None:
            raise VectorStoreError(
                "Document not found for tenant",
                operation="upsert",
                details={"document_id": document_id},
            )

        new_chunks = tuple(
            _StoredChunk(
                id=str(uuid.uuid4()),
                chunk_index=chunk.chunk_index,
                content=chunk.content,
                embedding=tuple(chunk.embedding),
            )
            for chunk in sorted(chunks, key=lambda c: c.chunk_index)
        )
        record = stored.record.model_copy(
            update={
                "status": DocumentStatus.COMPLETED,
                "chunk_count": len(new_chunks),
                "error_message": None,
            }
        )
        self._documents[(tenant_id, document_id)] = _StoredDocument(
            record=record,
            sequence=stored.sequence,
            content=content,
            chunks=new_chunks,
        )
        logger.info(
            f"{__name__}:upsert_chunks - Indexed {len(new_chunks)} chunks",
            extra={"tenant_id": tenant_id, "document_id": document_id},
        )
        return record

    async def mark_failed(self, tenant_id: str, document_id: str, error_message: str) -> None:
        stored = self._documents.get((tenant_id, document_id))
        if stored is None:
            return
        stored.record = stored.record.model_copy(
            update={"status": DocumentStatus.FAILED, "error_message": error_message}
        )

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

        scored = []
        for (owner, document_id), stored in list(self._documents.items()):
            if owner != tenant_id or stored.record.status != DocumentStatus.COMPLETED:
                continue
            for chunk in stored.chunks:
                similarity = cosine_similarity(query_vector, chunk.embedding)
                if similarity < min_similarity:
                    continue
                scored.append((similarity, stored.sequence, chunk.chunk_index, stored, chunk))

        scored.sort(key=lambda item: (-item[0], item[1], item[2]))
        return [
            SearchResult(
                chunk_id=chunk.id,
                document_id=stored.record.id,
                chunk_index=chunk.chunk_index,
                content=chunk.content,
                filename=stored.record.filename,
                similarity_score=similarity,
            )
            for similarity, _, _, stored, chunk in scored[:k]
        ]

    async def delete_document(self, tenant_id: str, document_id: str) -> bool:
        return self._documents.pop((tenant_id, document_id), None) is not None

    async def get_document(self, tenant_id: str, document_id: str) -> DocumentRecord | None:
        stored = self._documents.get((tenant_id, document_id))
        return stored.record if stored else None

    async def list_documents(self, tenant_id: str) -> list[DocumentRecord]:
        owned = [s for (owner, _), s in self._documents.items() if owner == tenant_id]
        owned.sort(key=lambda s: s.sequence, reverse=True)
        return [s.record for s in owned]

    async def get_stats(self, tenant_id: str) -> KnowledgeBaseStats:
        owned = [s for (owner, _), s in self._documents.items() if owner == tenant_id]
        return KnowledgeBaseStats(
            total_documents=len(owned),
            completed_documents=sum(s.record.status == DocumentStatus.COMPLETED for s in owned),
            failed_documents=sum(s.record.status == DocumentStatus.FAILED for s in owned),
            total_chunks=sum(len(s.chunks) for s in owned),
        )
