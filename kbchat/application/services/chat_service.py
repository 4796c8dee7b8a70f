"""
Chat orchestrator for knowledge-base grounded answers.

Orchestrates the full chat turn: widget resolution, session continuity,
retrieval, prompt assembly, completion (plain or streamed) and turn
persistence.

Turn persistence rules:
- The user turn is stored before the model is called.
- The assistant turn is stored only after the complete answer is known.
- A failure to store the assistant turn is logged and never fails the
  already-produced answer.

Dependencies: kbchat.application.services.retrieval_service, kbchat.boundary.providers,
    kbchat.boundary.db, kbchat.core.prompts
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field

from langchain_core.messages import BaseMessage

from kbchat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from kbchat.application.services.retrieval_service import RetrievedPassage, Retriever
from kbchat.boundary.db.records import ChatTurn, WidgetRecord
from kbchat.boundary.db.session_store import SessionStore, SessionStoreError
from kbchat.boundary.db.widget_store import WidgetConfigStore
from kbchat.boundary.providers.base import LLMProvider
from kbchat.core.exceptions import (
    CompletionFailed,
    KBChatException,
    ProviderError,
    SessionNotFound,
    WidgetNotFound,
)
from kbchat.core.prompts.chat_prompt import build_chat_messages

logger = logging.getLogger(__name__)

COMPLETION_FAILED_MESSAGE = "Sorry, I couldn't generate a response right now. Please try again."


@dataclass
class ChatResult:
    """Outcome of a non-streaming chat turn."""

    response: str
    session_id: str
    is_new_session: bool
    sources: list[RetrievedPassage] = field(default_factory=list)


@dataclass
class _PreparedTurn:
    widget: WidgetRecord
    history: ChatHistoryAdapter
    is_new_session: bool
    passages: list[RetrievedPassage]
    messages: list[BaseMessage]


class ChatStream:
    """
    A prepared streaming turn.

    ``tokens()`` yields answer deltas as the model produces them. The
    assistant turn is stored only if the stream finishes normally; closing
    the generator early (client disconnect) closes the model stream and
    stores nothing.
    """

    def __init__(self, provider: LLMProvider, turn: _PreparedTurn) -> None:
        self._provider = provider
        self._turn = turn

    @property
    def session_id(self) -> str:
        return self._turn.history.session_id

    @property
    def is_new_session(self) -> bool:
        return self._turn.is_new_session

    @property
    def sources(self) -> list[RetrievedPassage]:
        return self._turn.passages

    async def tokens(self) -> AsyncGenerator[str, None]:
        """
        Stream answer tokens.

        Yields:
            str: Text deltas in arrival order

        Raises:
            CompletionFailed: If the model stream errors or produces nothing
        """
        parts: list[str] = []
        upstream = self._provider.chat_complete_stream(self._turn.messages)
        try:
            async for token in upstream:
                parts.append(token)
                yield token
        except ProviderError as e:
            logger.error(
                f"{__name__}:tokens - Model stream failed after {len(parts)} tokens, nothing persisted",
                extra={"session_id": self.session_id, "error_type": type(e).__name__},
            )
            raise CompletionFailed(COMPLETION_FAILED_MESSAGE) from e
        finally:
            await upstream.aclose()

        answer = "".join(parts)
        if not answer.strip():
            logger.error(
                f"{__name__}:tokens - Model returned an empty answer",
                extra={"session_id": self.session_id},
            )
            raise CompletionFailed(COMPLETION_FAILED_MESSAGE)

        await _store_assistant_turn(self._turn.history, answer)


async def _store_assistant_turn(history: ChatHistoryAdapter, answer: str) -> None:
    try:
        await history.add_ai_message(answer)
    except KBChatException as e:
        logger.error(
            f"{__name__}:store_assistant_turn - Assistant turn not stored, answer already delivered",
            extra={"session_id": history.session_id, "error_type": type(e).__name__},
        )


class ChatOrchestrator:
    """
    Chat orchestrator for one tenant-scoped conversation turn.

    All collaborators are injected at construction; nothing is created
    per request.
    """

    def __init__(
        self,
        provider: LLMProvider,
        retriever: Retriever,
        session_store: SessionStore,
        widget_store: WidgetConfigStore,
        history_window: int = 10,
    ) -> None:
        """
        Initialize chat orchestrator.

        Args:
            provider: Chat completion client
            retriever: Context retriever
            session_store: Conversation log
            widget_store: Widget configuration lookup
            history_window: Prior turns included in the prompt
        """
        self.provider = provider
        self.retriever = retriever
        self.session_store = session_store
        self.widget_store = widget_store
        self.history_window = history_window

    async def respond(
        self,
        tenant_id: str,
        widget_id: str,
        message: str,
        session_id: str | None = None,
    ) -> ChatResult:
        """
        Produce a complete answer.

        Args:
            tenant_id: Tenant owning the widget
            widget_id: Widget the end user is chatting through
            message: End-user message
            session_id: Existing session to continue; None or an unknown id starts a new one

        Returns:
            ChatResult

        Raises:
            WidgetNotFound: Widget missing, inactive or owned by another tenant
            CompletionFailed: Model failed; the user turn stays stored
        """
        turn = await self._prepare(tenant_id, widget_id, message, session_id)
        session_id = turn.history.session_id

        try:
            answer = await self.provider.chat_complete(turn.messages)
        except ProviderError as e:
            logger.error(
                f"{__name__}:respond - Completion failed",
                extra={"tenant_id": tenant_id, "session_id": session_id, "error_type": type(e).__name__},
            )
            raise CompletionFailed(COMPLETION_FAILED_MESSAGE) from e
        if not answer.strip():
            raise CompletionFailed(COMPLETION_FAILED_MESSAGE)

        await _store_assistant_turn(turn.history, answer)
        logger.info(
            f"{__name__}:respond - Answered with {len(turn.passages)} sources",
            extra={"tenant_id": tenant_id, "session_id": session_id},
        )
        return ChatResult(
            response=answer,
            session_id=session_id,
            is_new_session=turn.is_new_session,
            sources=turn.passages,
        )

    async def open_stream(
        self,
        tenant_id: str,
        widget_id: str,
        message: str,
        session_id: str | None = None,
    ) -> ChatStream:
        """
        Prepare a streaming answer.

        Everything up to the model call happens here, so widget errors
        surface before any output is sent.

        Raises:
            WidgetNotFound, CompletionFailed
        """
        turn = await self._prepare(tenant_id, widget_id, message, session_id)
        return ChatStream(self.provider, turn)

    async def _prepare(
        self,
        tenant_id: str,
        widget_id: str,
        message: str,
        session_id: str | None,
    ) -> _PreparedTurn:
        widget = await self.widget_store.get_active(tenant_id, widget_id)
        if widget is None:
            logger.info(
                f"{__name__}:prepare - Widget not found or inactive",
                extra={"tenant_id": tenant_id, "widget_id": widget_id},
            )
            raise WidgetNotFound(widget_id)

        # A stale or foreign session id starts a fresh conversation
        if session_id is not None and await self.session_store.get_session(
            tenant_id, session_id, widget_id=widget.id
        ) is None:
            logger.info(
                f"{__name__}:prepare - Unknown session, starting a new one",
                extra={"tenant_id": tenant_id, "widget_id": widget.id, "session_id": session_id},
            )
            session_id = None

        is_new_session = session_id is None
        if is_new_session:
            try:
                record = await self.session_store.create_session(tenant_id, widget.id)
            except SessionStoreError as e:
                raise CompletionFailed(COMPLETION_FAILED_MESSAGE) from e
            session_id = record.id

        history = ChatHistoryAdapter(self.session_store, tenant_id, session_id)
        # Read prior turns before storing the new one
        prior_messages = [] if is_new_session else await history.get_messages(self.history_window)
        try:
            await history.add_user_message(message)
        except SessionStoreError as e:
            raise CompletionFailed(COMPLETION_FAILED_MESSAGE) from e

        passages = await self.retriever.retrieve(tenant_id, message)
        messages = build_chat_messages(
            question=message,
            passages=[(p.filename, p.content) for p in passages],
            history=prior_messages,
            widget_system_prompt=widget.system_prompt,
        )
        return _PreparedTurn(
            widget=widget,
            history=history,
            is_new_session=is_new_session,
            passages=passages,
            messages=messages,
        )

    async def get_history(self, tenant_id: str, session_id: str) -> list[ChatTurn]:
        """
        Read a conversation, oldest turn first.

        Raises:
            SessionNotFound: If the session does not exist for this tenant
        """
        if await self.session_store.get_session(tenant_id, session_id) is None:
            raise SessionNotFound(session_id)
        return await self.session_store.get_turns(tenant_id, session_id)
