"""
Knowledge-base API schemas.

Dependencies: pydantic
System role: Document upload and management API contracts
"""

from datetime import datetime

from pydantic import Field

from kbchat.models.common import CamelModel


class DocumentSummary(CamelModel):
    """Document fields returned by the ingestion entry point."""

    id: str
    filename: str
    chunk_count: int
    status: str


class DocumentDetail(DocumentSummary):
    """Document fields returned by list and get endpoints."""

    media_type: str
    size_bytes: int
    error_message: str | None = None
    created_at: datetime | None = None


class IngestionResponse(CamelModel):
    """Successful upload."""

    success: bool = True
    document: DocumentSummary


class IngestionErrorResponse(CamelModel):
    """Failed upload with the status the handler should use."""

    success: bool = False
    error: str
    http_status_hint: int


class DocumentListResponse(CamelModel):
    success: bool = True
    documents: list[DocumentDetail]
    total: int


class KnowledgeBaseStatsResponse(CamelModel):
    success: bool = True
    total_documents: int
    completed_documents: int
    failed_documents: int
    total_chunks: int


class SearchRequest(CamelModel):
    """Knowledge-base search preview."""

    query: str = Field(min_length=1)
    k: int | None = Field(default=None, ge=1, le=20)
    min_similarity: float | None = Field(default=None, ge=-1.0, le=1.0)


class SearchHit(CamelModel):
    document_id: str
    filename: str
    content: str
    similarity_score: float


class SearchResponse(CamelModel):
    success: bool = True
    results: list[SearchHit]
