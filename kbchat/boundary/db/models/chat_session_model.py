"""
Chat session and chat message ORM models.

A session groups the ordered turns of one end-user conversation with one
widget. Messages are append-only.

Dependencies: sqlalchemy, kbchat.boundary.db.base
System role: Conversation persistence for the chat orchestrator
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kbchat.boundary.db.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class ChatSessionModel(Base, UUIDMixin, TenantMixin, TimestampMixin):
    """
    Chat session ORM model.

    Attributes:
        widget_id: Widget the conversation belongs to (ON DELETE CASCADE)
        messages: ChatMessageModel rows ordered by sequence
    """

    __tablename__ = "chat_sessions"

    widget_id: Mapped[UUID] = mapped_column(
        ForeignKey("widget_configs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    messages = relationship(
        "ChatMessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ChatMessageModel.sequence",
        passive_deletes=True,
    )


class ChatMessageModel(Base, UUIDMixin, TenantMixin, TimestampMixin):
    """
    A single conversation turn.

    Attributes:
        session_id: Parent session
        sequence: Per-session arrival order, assigned on append, unique per session
        role: "user" or "assistant"
        content: Message text
    """

    __tablename__ = "chat_messages"
    __table_args__ = (UniqueConstraint("session_id", "sequence", name="uq_chat_messages_session_sequence"),)

    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    session = relationship("ChatSessionModel", back_populates="messages")
