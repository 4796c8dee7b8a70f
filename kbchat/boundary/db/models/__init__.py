"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Knowledge-base documents
  - ChunkModel: Embedded document chunks (pgvector)
  - ChatSessionModel, ChatMessageModel: Conversations and their turns
  - WidgetConfigModel: Per-tenant widget configuration

Dependencies: sqlalchemy, pgvector, kbchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from kbchat.boundary.db.models.chat_session_model import ChatMessageModel, ChatSessionModel
from kbchat.boundary.db.models.chunk_model import ChunkModel
from kbchat.boundary.db.models.document_model import DocumentModel, DocumentStatus
from kbchat.boundary.db.models.widget_config_model import WidgetConfigModel

__all__ = [
    "ChatMessageModel",
    "ChatSessionModel",
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
    "WidgetConfigModel",
]
