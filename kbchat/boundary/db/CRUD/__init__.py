"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use. All operations are
stateless and take the session and tenant id explicitly.

Usage:
    from kbchat.boundary.db.CRUD import document_crud

    async with session_factory() as session:
        document = await document_crud.get_by_id(session, tenant_id, document_id)
"""

from kbchat.boundary.db.CRUD.base_crud import BaseCRUD
from kbchat.boundary.db.CRUD.chat_session_crud import (
    ChatMessageCRUD,
    ChatSessionCRUD,
    chat_message_crud,
    chat_session_crud,
)
from kbchat.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from kbchat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from kbchat.boundary.db.CRUD.widget_config_crud import WidgetConfigCRUD, widget_config_crud

__all__ = [
    "BaseCRUD",
    "ChatMessageCRUD",
    "chat_message_crud",
    "ChatSessionCRUD",
    "chat_session_crud",
    "ChunkCRUD",
    "chunk_crud",
    "DocumentCRUD",
    "document_crud",
    "WidgetConfigCRUD",
    "widget_config_crud",
]
