"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite-backed stores, the in-memory vector store, the recording
fake provider and a fully wired service container.
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import asyncio
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from kbchat.application.container import ServiceContainer, build_container
from kbchat.boundary.db.connection import get_async_session_factory
from kbchat.boundary.db.create_tables import create_tables
from kbchat.boundary.db.session_store import SessionStore
from kbchat.boundary.db.widget_store import WidgetConfigStore
from kbchat.boundary.vdb.memory_store import InMemoryVectorStore
from tests.fakes import EMBEDDING_DIMENSION, FakeProvider, make_settings


def make_sqlite_engine(path: Path) -> AsyncEngine:
    """File-backed SQLite engine; NullPool keeps connections off any one event loop."""
    return create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provide recording fake provider."""
    return FakeProvider()


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    """Provide empty in-memory vector store."""
    return InMemoryVectorStore(embedding_dimension=EMBEDDING_DIMENSION)


@pytest.fixture
async def session_factory(tmp_path: Path):
    """
    Create SQLite async database for testing.

    Yields:
        async_sessionmaker: Session factory over a fresh schema
    """
    engine = make_sqlite_engine(tmp_path / "kbchat.db")
    await create_tables(engine)
    yield get_async_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def session_store(session_factory) -> SessionStore:
    return SessionStore(session_factory)


@pytest.fixture
def widget_store(session_factory) -> WidgetConfigStore:
    return WidgetConfigStore(session_factory)


@pytest.fixture
def sync_session_factory(tmp_path: Path):
    """
    Session factory for synchronous TestClient tests.

    Schema creation runs on its own loop; NullPool means the TestClient
    loop opens fresh connections.
    """
    engine = make_sqlite_engine(tmp_path / "kbchat_api.db")
    asyncio.run(create_tables(engine))
    yield get_async_session_factory(engine)
    asyncio.run(engine.dispose())


@pytest.fixture
def container(sync_session_factory, fake_provider: FakeProvider, memory_store: InMemoryVectorStore) -> ServiceContainer:
    """Fully wired services over SQLite, the fake provider and the in-memory store."""
    return build_container(
        make_settings(),
        session_factory=sync_session_factory,
        provider=fake_provider,
        vector_store=memory_store,
    )
