"""
Chat API endpoints.

Routes: POST /chat, GET /chat/sessions/{session_id}

The chat endpoint is public: the embedded widget identifies itself with
tenantId and widgetId in the body, and the widget must be active.

Dependencies: kbchat.application.services.chat_service, kbchat.models.chat
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from kbchat.api.deps import get_chat_orchestrator, get_settings_dependency
from kbchat.api.routers.router_utils import SSE_HEADERS, error_response, stream_with_sentinel
from kbchat.application.services.chat_service import COMPLETION_FAILED_MESSAGE, ChatOrchestrator
from kbchat.configs import Settings
from kbchat.core.exceptions import CompletionFailed, SessionNotFound, WidgetNotFound
from kbchat.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatRequest,
    ChatResponse,
    ChatSource,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
    settings: Settings = Depends(get_settings_dependency),
):
    """
    Answer an end-user message from the tenant's knowledge base.

    With ``stream=true`` (default) the body is plain text. For a new
    session the first line is ``SESSION_ID:<id>``, followed by answer
    tokens as they arrive. The first token is awaited before responding,
    so failures before any output still return a JSON error.

    Args:
        request: Chat request body
        orchestrator: Injected chat orchestrator
        settings: Injected settings

    Returns:
        ChatResponse or StreamingResponse
    """
    missing = request.missing_fields()
    if missing:
        return error_response(400, f"Missing required fields: {', '.join(missing)}")

    message = request.message.strip()
    try:
        if not request.stream:
            result = await orchestrator.respond(
                tenant_id=request.tenant_id,
                widget_id=request.widget_id,
                message=message,
                session_id=request.session_id,
            )
            return ChatResponse(
                response=result.response,
                session_id=result.session_id,
                relevant_sources=[
                    ChatSource(filename=p.filename, similarity_score=p.similarity_score)
                    for p in result.sources
                ],
            )

        stream = await orchestrator.open_stream(
            tenant_id=request.tenant_id,
            widget_id=request.widget_id,
            message=message,
            session_id=request.session_id,
        )
        tokens = stream.tokens()
        first_token = await tokens.__anext__()
    except WidgetNotFound:
        return error_response(404, "Widget not found or inactive")
    except CompletionFailed as e:
        return error_response(500, e.message)
    except Exception as e:
        logger.exception(
            f"{__name__}:chat - Unexpected error",
            extra={"tenant_id": request.tenant_id, "widget_id": request.widget_id, "error_type": type(e).__name__},
        )
        return error_response(500, COMPLETION_FAILED_MESSAGE)

    return StreamingResponse(
        stream_with_sentinel(
            tokens,
            first_token,
            session_id=stream.session_id,
            is_new_session=stream.is_new_session,
            sentinel_prefix=settings.chat.session_sentinel_prefix,
        ),
        media_type="text/plain; charset=utf-8",
        headers={**SSE_HEADERS, "X-Session-ID": stream.session_id},
    )


@router.get("/sessions/{session_id}", response_model=ChatHistoryResponse)
async def get_chat_history(
    session_id: str,
    tenant_id: str = Query(alias="tenantId", min_length=1),
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
):
    """
    Get a conversation, oldest message first.

    Args:
        session_id: Session identifier
        tenant_id: Tenant owning the session

    Returns:
        ChatHistoryResponse
    """
    try:
        turns = await orchestrator.get_history(tenant_id, session_id)
    except SessionNotFound:
        return error_response(404, "Chat session not found")

    messages = [
        ChatMessageResponse(role=turn.role, content=turn.content, timestamp=turn.created_at.isoformat())
        for turn in turns
    ]
    return ChatHistoryResponse(session_id=session_id, messages=messages, total=len(messages))
