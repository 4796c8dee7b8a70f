"""
Vector database boundary layer.

Provides vector store clients for storage and retrieval operations.
- PgVectorStore: Production PostgreSQL + pgvector store
- InMemoryVectorStore: Local development and test store

Dependencies: sqlalchemy, pgvector
System role: Vector store adapter for RAG retrieval
"""

from kbchat.boundary.vdb.base import VectorStore
from kbchat.boundary.vdb.memory_store import InMemoryVectorStore
from kbchat.boundary.vdb.pgvector_store import PgVectorStore
from kbchat.boundary.vdb.vector_schemas import (
    ChunkInput,
    DocumentRecord,
    KnowledgeBaseStats,
    SearchResult,
)
from kbchat.boundary.vdb.vector_store_factory import get_vector_store

__all__ = [
    "ChunkInput",
    "DocumentRecord",
    "InMemoryVectorStore",
    "KnowledgeBaseStats",
    "PgVectorStore",
    "SearchResult",
    "VectorStore",
    "get_vector_store",
]
