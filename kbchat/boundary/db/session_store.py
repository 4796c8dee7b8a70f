"""
Append-only chat session store.

Sessions are keyed by tenant and widget. Each operation commits on its
own, so a user turn is durable before the model is called.

Dependencies: sqlalchemy, kbchat.boundary.db.CRUD
System role: Conversation log used by the chat orchestrator
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kbchat.boundary.db.base import parse_uuid
from kbchat.boundary.db.CRUD import chat_message_crud, chat_session_crud
from kbchat.boundary.db.records import ChatSessionRecord, ChatTurn, Role
from kbchat.core.exceptions import KBChatException, SessionNotFound

logger = logging.getLogger(__name__)

# Concurrent appends to one session can race for the same sequence number
APPEND_ATTEMPTS = 3


class SessionStoreError(KBChatException):
    """Raised when the conversation log cannot be read or written."""


class SessionStore:
    """Persistent, tenant-scoped conversation log."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Async session factory created at startup
        """
        self._session_factory = session_factory

    async def create_session(self, tenant_id: str, widget_id: str) -> ChatSessionRecord:
        """
        Create an empty session for a widget.

        Args:
            tenant_id: Owning tenant
            widget_id: Widget UUID string

        Returns:
            ChatSessionRecord

        Raises:
            SessionStoreError: If the row cannot be written
        """
        widget_uuid = parse_uuid(widget_id)
        if widget_uuid is None:
            raise SessionStoreError("Invalid widget id", {"widget_id": widget_id})
        try:
            async with self._session_factory() as session, session.begin():
                model = await chat_session_crud.create(session, tenant_id, widget_id=widget_uuid)
                record = ChatSessionRecord.from_model(model)
        except SQLAlchemyError as e:
            raise SessionStoreError(
                "Failed to create chat session",
                {"tenant_id": tenant_id, "error_type": type(e).__name__},
            ) from e
        logger.info(
            f"{__name__}:create_session - Created session",
            extra={"tenant_id": tenant_id, "session_id": record.id},
        )
        return record

    async def get_session(
        self,
        tenant_id: str,
        session_id: str,
        widget_id: str | None = None,
    ) -> ChatSessionRecord | None:
        """
        Look up a session, optionally requiring it to belong to a widget.

        Returns:
            ChatSessionRecord or None when absent for this tenant (and widget)
        """
        session_uuid = parse_uuid(session_id)
        if session_uuid is None:
            return None
        async with self._session_factory() as session:
            model = await chat_session_crud.get_by_id(session, tenant_id, session_uuid)
        if model is None:
            return None
        if widget_id is not None and str(model.widget_id) != str(widget_id):
            return None
        return ChatSessionRecord.from_model(model)

    async def list_sessions(self, tenant_id: str, widget_id: str, limit: int | None = 50) -> list[ChatSessionRecord]:
        widget_uuid = parse_uuid(widget_id)
        if widget_uuid is None:
            return []
        async with self._session_factory() as session:
            models = await chat_session_crud.get_by_widget(session, tenant_id, widget_uuid, limit)
        return [ChatSessionRecord.from_model(m) for m in models]

    async def append_turn(
        self,
        tenant_id: str,
        session_id: str,
        role: Role,
        content: str,
    ) -> ChatTurn:
        """
        Append one turn to the end of a session.

        Args:
            tenant_id: Owning tenant
            session_id: Session UUID string
            role: "user" or "assistant"
            content: Message text

        Returns:
            The stored ChatTurn

        Raises:
            SessionNotFound: If the session does not exist for this tenant
            SessionStoreError: If the write fails
        """
        session_uuid = parse_uuid(session_id)
        if session_uuid is None:
            raise SessionNotFound(session_id)
        for attempt in range(1, APPEND_ATTEMPTS + 1):
            try:
                async with self._session_factory() as session, session.begin():
                    if await chat_session_crud.get_by_id(session, tenant_id, session_uuid) is None:
                        raise SessionNotFound(session_id)
                    model = await chat_message_crud.append(
                        session, tenant_id, session_uuid, role, content
                    )
                    return ChatTurn.model_validate(model)
            except IntegrityError as e:
                if attempt < APPEND_ATTEMPTS:
                    logger.warning(
                        f"{__name__}:append_turn - Sequence taken by a concurrent append, retrying",
                        extra={"session_id": session_id, "attempt": attempt},
                    )
                    continue
                raise SessionStoreError(
                    "Failed to append chat turn",
                    {"session_id": session_id, "role": role, "error_type": type(e).__name__},
                ) from e
            except SQLAlchemyError as e:
                raise SessionStoreError(
                    "Failed to append chat turn",
                    {"session_id": session_id, "role": role, "error_type": type(e).__name__},
                ) from e

    async def get_turns(
        self,
        tenant_id: str,
        session_id: str,
        limit: int | None = None,
    ) -> list[ChatTurn]:
        """
        Read turns oldest first.

        Args:
            tenant_id: Owning tenant
            session_id: Session UUID string
            limit: Keep only the most recent N turns

        Returns:
            List of ChatTurn in arrival order (empty for unknown sessions)
        """
        session_uuid = parse_uuid(session_id)
        if session_uuid is None:
            return []
        async with self._session_factory() as session:
            models = await chat_message_crud.get_by_session(session, tenant_id, session_uuid, limit)
        return [ChatTurn.model_validate(m) for m in models]
