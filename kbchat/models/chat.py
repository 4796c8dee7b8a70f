"""
Chat API schemas.

Request/response schemas for the chat endpoint and history lookup.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import Field

from kbchat.models.common import CamelModel


class ChatRequest(CamelModel):
    """
    Request schema for chat messages.

    Required fields are declared optional so missing ones are reported
    with the standard error envelope instead of a schema error.
    """

    message: str | None = Field(default=None, description="End-user message")
    session_id: str | None = Field(default=None, description="Session to continue")
    tenant_id: str | None = Field(default=None, description="Tenant owning the widget")
    widget_id: str | None = Field(default=None, description="Widget the message was sent through")
    stream: bool = Field(default=True, description="Stream tokens instead of returning JSON")

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.message or not self.message.strip():
            missing.append("message")
        if not self.tenant_id:
            missing.append("tenantId")
        if not self.widget_id:
            missing.append("widgetId")
        return missing


class ChatSource(CamelModel):
    """Passage provenance returned with a non-streaming answer."""

    filename: str
    similarity_score: float


class ChatResponse(CamelModel):
    """Response schema for a non-streaming chat turn."""

    success: bool = True
    response: str
    session_id: str
    relevant_sources: list[ChatSource] = Field(default_factory=list)


class ChatMessageResponse(CamelModel):
    """Single chat message in history."""

    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")
    timestamp: str = Field(description="ISO 8601 creation time")


class ChatHistoryResponse(CamelModel):
    """Response schema for chat history."""

    success: bool = True
    session_id: str
    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")
