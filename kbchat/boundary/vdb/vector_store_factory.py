"""
Vector store factory for selecting between in-memory (dev) and pgvector (prod).

Depends on the VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: kbchat.boundary.vdb, kbchat.configs
System role: Vector store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kbchat.boundary.vdb.base import VectorStore
from kbchat.boundary.vdb.memory_store import InMemoryVectorStore
from kbchat.boundary.vdb.pgvector_store import PgVectorStore
from kbchat.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_store(
    settings: VectorStoreSettings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> VectorStore:
    """
    Build the vector store selected by configuration.

    Args:
        settings: Vector store settings
        session_factory: Required for the pgvector backend

    Returns:
        VectorStore: InMemoryVectorStore or PgVectorStore

    Raises:
        ValueError: If store_type is invalid or pgvector lacks a session factory
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_store - Creating in-memory vector store (local dev mode)")
        return InMemoryVectorStore(embedding_dimension=settings.embedding_dimension)

    if store_type == "pgvector":
        if session_factory is None:
            raise ValueError("pgvector store requires a database session factory")
        logger.info(f"{__name__}:get_vector_store - Creating pgvector store (production mode)")
        return PgVectorStore(
            session_factory=session_factory,
            embedding_dimension=settings.embedding_dimension,
        )

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'memory' (dev) or 'pgvector' (production)."
    )
