"""
Schema creation.

Creates the pgvector extension and all ORM tables. Intended for first
deployment and local development; the statements are idempotent.

Usage:
    python -m kbchat.boundary.db.create_tables

Dependencies: sqlalchemy, kbchat.boundary.db
System role: Database bootstrap
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from kbchat.boundary.db import models  # noqa: F401  (registers tables on Base.metadata)
from kbchat.boundary.db.base import Base
from kbchat.boundary.db.connection import get_async_engine
from kbchat.configs import get_settings
from kbchat.observability.logger import configure_logging

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create the vector extension (PostgreSQL only) and all tables.

    Args:
        engine: Async engine to run DDL on
    """
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_tables - Tables ready: {sorted(Base.metadata.tables)}")


async def _main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    engine = get_async_engine(settings.database)
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(_main())
