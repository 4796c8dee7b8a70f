"""
Knowledge-base document ORM model.

One row per upload attempt. Failed attempts are kept with their reason;
a resubmission produces a new row.

Dependencies: sqlalchemy, kbchat.boundary.db.base
System role: Document persistence for the ingestion pipeline
"""

import enum

from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kbchat.boundary.db.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    """
    Persisted document states.

    PROCESSING: Record created, pipeline running
    COMPLETED: All chunks indexed, document is retrievable
    FAILED: Pipeline stopped, see error_message
    """

    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class DocumentModel(Base, UUIDMixin, TenantMixin, TimestampMixin):
    """
    Document ORM model owning a set of indexed chunks.

    Attributes:
        id: UUID primary key
        tenant_id: Owning tenant
        filename: Original upload filename
        media_type: Declared media type after resolution
        size_bytes: Upload size
        content: Extracted text, set on completion
        status: DocumentStatus
        chunk_count: Number of indexed chunks (0 until completed)
        error_message: Failure reason for FAILED documents
        chunks: ChunkModel rows (cascade delete)
    """

    __tablename__ = "documents"

    filename: Mapped[str] = mapped_column(String(512), nullable=False)
    media_type: Mapped[str] = mapped_column(String(255), nullable=False)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    content: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    status: Mapped[DocumentStatus] = mapped_column(
        Enum(
            DocumentStatus,
            name="document_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=DocumentStatus.PROCESSING,
        index=True,
    )
    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
