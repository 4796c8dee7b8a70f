"""
Vector store schemas.

Pydantic models exchanged with the vector store (document records,
chunks to index, search results). Store implementations convert their
native rows into these types so callers never see ORM objects.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kbchat.boundary.db.models.document_model import DocumentStatus


class DocumentRecord(BaseModel):
    """Knowledge-base document as seen by services."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Document identifier")
    tenant_id: str = Field(description="Owning tenant")
    filename: str = Field(description="Original filename")
    media_type: str = Field(description="Media type used for extraction")
    size_bytes: int = Field(default=0, description="Upload size in bytes")
    status: DocumentStatus = Field(description="Processing status")
    chunk_count: int = Field(default=0, description="Number of indexed chunks")
    error_message: str | None = Field(default=None, description="Failure reason")
    created_at: datetime | None = Field(default=None, description="Creation timestamp (UTC)")


class ChunkInput(BaseModel):
    """One chunk ready to be indexed."""

    chunk_index: int = Field(ge=0, description="0-based position within the document")
    content: str = Field(min_length=1, description="Chunk text")
    embedding: list[float] = Field(description="Chunk embedding")


class SearchResult(BaseModel):
    """Single result from similarity search."""

    chunk_id: str = Field(description="Chunk identifier")
    document_id: str = Field(description="Parent document identifier")
    chunk_index: int = Field(description="Position within the document")
    content: str = Field(description="Chunk text content")
    filename: str = Field(description="Filename of the parent document")
    similarity_score: float = Field(description="Cosine similarity, 1 - cosine distance")


class KnowledgeBaseStats(BaseModel):
    """Per-tenant index counters."""

    total_documents: int = 0
    completed_documents: int = 0
    failed_documents: int = 0
    total_chunks: int = 0
