"""
Chat session and message CRUD operations.

Dependencies: sqlalchemy, kbchat.boundary.db.models.chat_session_model
System role: Conversation persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kbchat.boundary.db.CRUD.base_crud import BaseCRUD
from kbchat.boundary.db.models.chat_session_model import ChatMessageModel, ChatSessionModel


class ChatSessionCRUD(BaseCRUD[ChatSessionModel]):
    """CRUD operations for ChatSessionModel."""

    def __init__(self) -> None:
        """Initialize ChatSessionCRUD with ChatSessionModel."""
        super().__init__(ChatSessionModel)

    async def get_by_widget(
        self,
        session: AsyncSession,
        tenant_id: str,
        widget_id: UUID,
        limit: int | None = None,
    ) -> Sequence[ChatSessionModel]:
        """
        Retrieve a tenant's sessions for one widget, newest first.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            widget_id: Widget UUID
            limit: Maximum number of sessions

        Returns:
            Sequence of ChatSessionModel
        """
        stmt = (
            select(ChatSessionModel)
            .where(
                ChatSessionModel.tenant_id == tenant_id,
                ChatSessionModel.widget_id == widget_id,
            )
            .order_by(ChatSessionModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


class ChatMessageCRUD(BaseCRUD[ChatMessageModel]):
    """
    Append-only operations for ChatMessageModel.

    No update or delete helpers are exposed beyond the generic ones;
    turns are removed only through session deletion.
    """

    def __init__(self) -> None:
        """Initialize ChatMessageCRUD with ChatMessageModel."""
        super().__init__(ChatMessageModel)

    async def append(
        self,
        session: AsyncSession,
        tenant_id: str,
        session_id: UUID,
        role: str,
        content: str,
    ) -> ChatMessageModel:
        """
        Append a turn after the current last turn of the session.

        Args:
            session: Async database session (caller owns the transaction)
            tenant_id: Owning tenant
            session_id: Chat session UUID
            role: "user" or "assistant"
            content: Message text

        Returns:
            Created ChatMessageModel
        """
        stmt = select(func.coalesce(func.max(ChatMessageModel.sequence), -1)).where(
            ChatMessageModel.session_id == session_id
        )
        last_sequence = (await session.execute(stmt)).scalar_one()
        return await self.create(
            session,
            tenant_id,
            session_id=session_id,
            sequence=int(last_sequence) + 1,
            role=role,
            content=content,
        )

    async def get_by_session(
        self,
        session: AsyncSession,
        tenant_id: str,
        session_id: UUID,
        limit: int | None = None,
    ) -> list[ChatMessageModel]:
        """
        Retrieve turns of a session, oldest first.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            session_id: Chat session UUID
            limit: Keep only the most recent N turns

        Returns:
            List of ChatMessageModel in arrival order
        """
        stmt = (
            select(ChatMessageModel)
            .where(
                ChatMessageModel.session_id == session_id,
                ChatMessageModel.tenant_id == tenant_id,
            )
            .order_by(ChatMessageModel.sequence.desc(), ChatMessageModel.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))


chat_session_crud = ChatSessionCRUD()
chat_message_crud = ChatMessageCRUD()
