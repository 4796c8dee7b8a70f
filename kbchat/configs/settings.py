"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from kbchat.configs.base import BaseSettings
from kbchat.configs.chat import ChatSettings
from kbchat.configs.database import DatabaseSettings
from kbchat.configs.ingestion import IngestionSettings
from kbchat.configs.providers import ProviderSettings
from kbchat.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from kbchat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
