"""
Service container.

Builds every long-lived collaborator once at process start and wires
the services together. FastAPI keeps the container on ``app.state``;
tests build one with fakes.

Dependencies: kbchat.configs, kbchat.boundary, kbchat.application.services
System role: Composition root
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from kbchat.application.services.chat_service import ChatOrchestrator
from kbchat.application.services.document_service import DocumentService
from kbchat.application.services.ingestion_service import IngestionPipeline
from kbchat.application.services.retrieval_service import Retriever
from kbchat.application.services.widget_service import WidgetService
from kbchat.boundary.db.connection import get_async_engine, get_async_session_factory
from kbchat.boundary.db.session_store import SessionStore
from kbchat.boundary.db.widget_store import WidgetConfigStore
from kbchat.boundary.providers.base import LLMProvider
from kbchat.boundary.providers.provider_factory import build_provider
from kbchat.boundary.vdb.base import VectorStore
from kbchat.boundary.vdb.vector_store_factory import get_vector_store
from kbchat.configs.settings import Settings
from kbchat.core.document_processing.chunker import TextChunker
from kbchat.core.document_processing.extractor import TextExtractor

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Long-lived application collaborators."""

    settings: Settings
    session_factory: async_sessionmaker[AsyncSession]
    provider: LLMProvider
    vector_store: VectorStore
    session_store: SessionStore
    widget_store: WidgetConfigStore
    retriever: Retriever
    ingestion_pipeline: IngestionPipeline
    chat_orchestrator: ChatOrchestrator
    document_service: DocumentService
    widget_service: WidgetService
    engine: AsyncEngine | None = None

    async def aclose(self) -> None:
        """Release pooled database connections."""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info(f"{__name__}:aclose - Database engine disposed")


def build_container(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    provider: LLMProvider | None = None,
    vector_store: VectorStore | None = None,
) -> ServiceContainer:
    """
    Wire all services.

    Args:
        settings: Application settings
        session_factory: Pre-built session factory (an engine is created if None)
        provider: Pre-built provider (selected from settings if None)
        vector_store: Pre-built vector store (selected from settings if None)

    Returns:
        ServiceContainer
    """
    engine = None
    if session_factory is None:
        engine = get_async_engine(settings.database)
        session_factory = get_async_session_factory(engine)
    if provider is None:
        provider = build_provider(settings)
    if vector_store is None:
        vector_store = get_vector_store(settings.vector_store, session_factory)

    session_store = SessionStore(session_factory)
    widget_store = WidgetConfigStore(session_factory)
    retriever = Retriever(
        provider=provider,
        vector_store=vector_store,
        default_k=settings.vector_store.top_k,
        default_min_similarity=settings.vector_store.similarity_threshold,
    )
    ingestion_pipeline = IngestionPipeline(
        provider=provider,
        vector_store=vector_store,
        extractor=TextExtractor(settings.ingestion.allowed_media_types),
        chunker=TextChunker(settings.ingestion.chunk_size, settings.ingestion.chunk_overlap),
        max_file_size_bytes=settings.ingestion.max_file_size_bytes,
        embedding_batch_size=settings.providers.embedding_batch_size,
    )
    chat_orchestrator = ChatOrchestrator(
        provider=provider,
        retriever=retriever,
        session_store=session_store,
        widget_store=widget_store,
        history_window=settings.chat.history_window,
    )
    return ServiceContainer(
        settings=settings,
        session_factory=session_factory,
        provider=provider,
        vector_store=vector_store,
        session_store=session_store,
        widget_store=widget_store,
        retriever=retriever,
        ingestion_pipeline=ingestion_pipeline,
        chat_orchestrator=chat_orchestrator,
        document_service=DocumentService(vector_store=vector_store, retriever=retriever),
        widget_service=WidgetService(widget_store),
        engine=engine,
    )
