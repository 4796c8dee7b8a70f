"""
Integration tests for SessionStore against SQLite.

Covers session creation, append-only ordering, sequence conflicts,
history windows and tenant scoping.

System role: Verification of conversation persistence
"""

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from kbchat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from kbchat.boundary.db.CRUD import chat_message_crud
from kbchat.boundary.db.session_store import APPEND_ATTEMPTS, SessionStore, SessionStoreError
from kbchat.boundary.db.widget_store import WidgetConfigStore
from kbchat.core.exceptions import SessionNotFound
from langchain_core.messages import AIMessage, HumanMessage
from tests.fakes import TENANT_A, TENANT_B


@pytest.fixture
async def widget_id(widget_store: WidgetConfigStore) -> str:
    widget = await widget_store.create(TENANT_A, name="Support")
    return widget.id


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_should_return_session_for_widget(self, session_store: SessionStore, widget_id: str) -> None:
        session = await session_store.create_session(TENANT_A, widget_id)

        assert session.tenant_id == TENANT_A
        assert session.widget_id == widget_id
        assert uuid.UUID(session.id)

    @pytest.mark.asyncio
    async def test_invalid_widget_id_should_raise(self, session_store: SessionStore) -> None:
        with pytest.raises(SessionStoreError):
            await session_store.create_session(TENANT_A, "not-a-uuid")

    @pytest.mark.asyncio
    async def test_get_session_should_check_tenant_and_widget(self, session_store: SessionStore, widget_id: str) -> None:
        session = await session_store.create_session(TENANT_A, widget_id)

        assert (await session_store.get_session(TENANT_A, session.id)).id == session.id
        assert await session_store.get_session(TENANT_B, session.id) is None
        assert await session_store.get_session(TENANT_A, session.id, widget_id=str(uuid.uuid4())) is None
        assert await session_store.get_session(TENANT_A, "garbage") is None

    @pytest.mark.asyncio
    async def test_list_sessions_should_filter_by_widget(self, session_store: SessionStore, widget_id: str) -> None:
        await session_store.create_session(TENANT_A, widget_id)
        await session_store.create_session(TENANT_A, widget_id)

        assert len(await session_store.list_sessions(TENANT_A, widget_id)) == 2
        assert await session_store.list_sessions(TENANT_B, widget_id) == []


class TestAppendTurns:
    @pytest.mark.asyncio
    async def test_turns_should_be_returned_in_arrival_order(self, session_store: SessionStore, widget_id: str) -> None:
        # Arrange
        session = await session_store.create_session(TENANT_A, widget_id)

        # Act
        await session_store.append_turn(TENANT_A, session.id, "user", "First question")
        await session_store.append_turn(TENANT_A, session.id, "assistant", "First answer")
        await session_store.append_turn(TENANT_A, session.id, "user", "Second question")

        # Assert
        turns = await session_store.get_turns(TENANT_A, session.id)
        assert [(t.role, t.content) for t in turns] == [
            ("user", "First question"),
            ("assistant", "First answer"),
            ("user", "Second question"),
        ]

    @pytest.mark.asyncio
    async def test_limit_should_keep_most_recent_turns_oldest_first(self, session_store: SessionStore, widget_id: str) -> None:
        session = await session_store.create_session(TENANT_A, widget_id)
        for i in range(5):
            await session_store.append_turn(TENANT_A, session.id, "user", f"message {i}")

        turns = await session_store.get_turns(TENANT_A, session.id, limit=2)

        assert [t.content for t in turns] == ["message 3", "message 4"]

    @pytest.mark.asyncio
    async def test_append_to_unknown_session_should_raise(self, session_store: SessionStore) -> None:
        with pytest.raises(SessionNotFound):
            await session_store.append_turn(TENANT_A, str(uuid.uuid4()), "user", "Hello")

    @pytest.mark.asyncio
    async def test_append_from_other_tenant_should_raise(self, session_store: SessionStore, widget_id: str) -> None:
        session = await session_store.create_session(TENANT_A, widget_id)

        with pytest.raises(SessionNotFound):
            await session_store.append_turn(TENANT_B, session.id, "user", "Hello")

        assert await session_store.get_turns(TENANT_A, session.id) == []


class TestSequenceConflicts:
    """Two appends racing for the same sequence number."""

    @pytest.mark.asyncio
    async def test_duplicate_sequence_should_be_rejected(
        self, session_store: SessionStore, session_factory, widget_id: str
    ) -> None:
        # Arrange
        chat = await session_store.create_session(TENANT_A, widget_id)
        await session_store.append_turn(TENANT_A, chat.id, "user", "First")

        # Act / Assert
        with pytest.raises(IntegrityError):
            async with session_factory() as session, session.begin():
                await chat_message_crud.create(
                    session,
                    TENANT_A,
                    session_id=uuid.UUID(chat.id),
                    sequence=0,
                    role="user",
                    content="Duplicate",
                )

    @pytest.mark.asyncio
    async def test_conflicting_append_should_be_retried(self, session_store: SessionStore, widget_id: str) -> None:
        # Arrange
        chat = await session_store.create_session(TENANT_A, widget_id)
        original_append = chat_message_crud.append
        calls = []

        async def conflict_once(*args, **kwargs):
            calls.append(args)
            if len(calls) == 1:
                raise IntegrityError("INSERT INTO chat_messages", {}, Exception("UNIQUE constraint failed"))
            return await original_append(*args, **kwargs)

        # Act
        with patch.object(chat_message_crud, "append", side_effect=conflict_once):
            turn = await session_store.append_turn(TENANT_A, chat.id, "user", "Hello")

        # Assert
        assert len(calls) == 2
        assert turn.content == "Hello"
        assert [t.content for t in await session_store.get_turns(TENANT_A, chat.id)] == ["Hello"]

    @pytest.mark.asyncio
    async def test_persistent_conflict_should_raise_store_error(
        self, session_store: SessionStore, widget_id: str
    ) -> None:
        chat = await session_store.create_session(TENANT_A, widget_id)
        conflict = IntegrityError("INSERT INTO chat_messages", {}, Exception("UNIQUE constraint failed"))

        with patch.object(chat_message_crud, "append", side_effect=conflict) as append:
            with pytest.raises(SessionStoreError):
                await session_store.append_turn(TENANT_A, chat.id, "user", "Hello")

        assert append.call_count == APPEND_ATTEMPTS
        assert await session_store.get_turns(TENANT_A, chat.id) == []


class TestChatHistoryAdapter:
    @pytest.mark.asyncio
    async def test_adapter_should_map_turns_to_langchain_messages(self, session_store: SessionStore, widget_id: str) -> None:
        session = await session_store.create_session(TENANT_A, widget_id)
        history = ChatHistoryAdapter(session_store, TENANT_A, session.id)

        await history.add_user_message("Hi")
        await history.add_ai_message("Hello!")
        messages = await history.get_messages()

        assert isinstance(messages[0], HumanMessage)
        assert isinstance(messages[1], AIMessage)
        assert [m.content for m in messages] == ["Hi", "Hello!"]

    @pytest.mark.asyncio
    async def test_zero_window_should_return_no_messages(self, session_store: SessionStore, widget_id: str) -> None:
        session = await session_store.create_session(TENANT_A, widget_id)
        history = ChatHistoryAdapter(session_store, TENANT_A, session.id)
        await history.add_user_message("Hi")

        assert await history.get_messages(limit=0) == []
