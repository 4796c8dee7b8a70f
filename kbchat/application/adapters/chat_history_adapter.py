"""
Chat history adapter.

Binds a SessionStore to one tenant and session and converts stored turns
into LangChain messages for prompt construction.

Dependencies: langchain_core, kbchat.boundary.db.session_store
System role: Chat history business logic adapter
"""

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from kbchat.boundary.db.records import ChatTurn
from kbchat.boundary.db.session_store import SessionStore


class ChatHistoryAdapter:
    """
    High-level adapter for one conversation.

    Provides role-specific appends and message-typed reads on top of
    SessionStore.
    """

    def __init__(self, store: SessionStore, tenant_id: str, session_id: str) -> None:
        """
        Initialize chat history adapter.

        Args:
            store: Session store
            tenant_id: Owning tenant
            session_id: Session id for chat history scope
        """
        self.store = store
        self.tenant_id = tenant_id
        self.session_id = session_id

    async def add_user_message(self, content: str) -> ChatTurn:
        """
        Append the end user's message.

        Raises:
            SessionNotFound: If the session does not exist
        """
        return await self.store.append_turn(self.tenant_id, self.session_id, "user", content)

    async def add_ai_message(self, content: str) -> ChatTurn:
        """
        Append the assistant's answer.

        Raises:
            SessionNotFound: If the session does not exist
        """
        return await self.store.append_turn(self.tenant_id, self.session_id, "assistant", content)

    async def get_turns(self, limit: int | None = None) -> list[ChatTurn]:
        return await self.store.get_turns(self.tenant_id, self.session_id, limit)

    async def get_messages(self, limit: int | None = None) -> list[BaseMessage]:
        """
        Get chat messages for the session.

        Args:
            limit: Maximum number of recent messages to return (None = all)

        Returns:
            List of HumanMessage / AIMessage, oldest first
        """
        if limit == 0:
            return []
        turns = await self.get_turns(limit)
        return [to_message(turn) for turn in turns]


def to_message(turn: ChatTurn) -> BaseMessage:
    if turn.role == "user":
        return HumanMessage(content=turn.content)
    return AIMessage(content=turn.content)
