"""
Document chunk ORM model with pgvector embedding.

Dependencies: sqlalchemy, pgvector, kbchat.boundary.db.base
System role: Vector index rows used by similarity search
"""

from uuid import UUID

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kbchat.boundary.db.base import Base, TenantMixin, TimestampMixin, UUIDMixin
from kbchat.configs import get_settings

EMBEDDING_DIMENSION = get_settings().vector_store.embedding_dimension


class ChunkModel(Base, UUIDMixin, TenantMixin, TimestampMixin):
    """
    One contiguous slice of a document's text plus its embedding.

    tenant_id is denormalised from the parent document so the similarity
    query filters without a join on the hot path.

    Attributes:
        document_id: Parent document (ON DELETE CASCADE)
        chunk_index: 0-based position within the document
        content: Chunk text
        embedding: Vector of EMBEDDING_DIMENSION floats
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_chunk_document_index"),
    )

    document_id: Mapped[UUID] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=False)

    document = relationship("DocumentModel", back_populates="chunks")
