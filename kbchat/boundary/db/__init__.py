"""
Database boundary layer: ORM models, CRUD operations, stores and connection management.

Exports:
  - Base, UUIDMixin, TenantMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - SessionStore, WidgetConfigStore: Services-facing stores
  - ChatTurn, ChatSessionRecord, WidgetRecord: Store records

Dependencies: sqlalchemy, asyncpg, pgvector, kbchat.configs
System role: Database adapter providing persistent storage for documents,
chunks, conversations and widget configuration.
"""

from kbchat.boundary.db.base import Base, TenantMixin, TimestampMixin, UUIDMixin
from kbchat.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from kbchat.boundary.db.records import ChatSessionRecord, ChatTurn, WidgetRecord
from kbchat.boundary.db.session_store import SessionStore, SessionStoreError
from kbchat.boundary.db.widget_store import WidgetConfigStore

__all__ = [
    "Base",
    "TenantMixin",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ChatSessionRecord",
    "ChatTurn",
    "WidgetRecord",
    "SessionStore",
    "SessionStoreError",
    "WidgetConfigStore",
]
