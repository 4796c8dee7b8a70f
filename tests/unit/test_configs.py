"""
Test suite for configuration loading.

System role: Verification of settings defaults and environment overrides
"""

import pytest
from pydantic import ValidationError

from kbchat.configs import Settings
from kbchat.configs.chat import ChatSettings
from kbchat.configs.database import DatabaseSettings
from kbchat.configs.ingestion import IngestionSettings
from kbchat.configs.providers import ProviderSettings
from kbchat.configs.vector_store import VectorStoreSettings


class TestDefaults:
    """Defaults that the rest of the system depends on."""

    def test_ingestion_defaults(self) -> None:
        settings = IngestionSettings()

        assert settings.max_file_size_bytes == 10 * 1024 * 1024
        assert settings.chunk_size == 1000
        assert settings.chunk_overlap == 200
        assert "image/png" not in settings.allowed_media_types

    def test_retrieval_defaults(self) -> None:
        settings = VectorStoreSettings()

        assert settings.top_k == 3
        assert settings.similarity_threshold == 0.7

    def test_provider_defaults(self) -> None:
        settings = ProviderSettings()

        assert settings.embedding_batch_size == 10
        assert settings.temperature == 0.7
        assert settings.max_tokens == 1000

    def test_chat_defaults(self) -> None:
        settings = ChatSettings()

        assert settings.history_window == 10
        assert settings.session_sentinel_prefix == "SESSION_ID:"

    def test_settings_should_aggregate_sections(self) -> None:
        settings = Settings()

        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.ingestion, IngestionSettings)


class TestEnvironmentOverrides:
    def test_prefixed_env_vars_should_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INGESTION_CHUNK_SIZE", "500")
        monkeypatch.setenv("INGESTION_CHUNK_OVERLAP", "50")
        monkeypatch.setenv("LLM_PROVIDER", "gemini")

        assert IngestionSettings().chunk_size == 500
        assert ProviderSettings().provider == "gemini"

    def test_overlap_not_below_size_should_be_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INGESTION_CHUNK_SIZE", "100")
        monkeypatch.setenv("INGESTION_CHUNK_OVERLAP", "100")

        with pytest.raises(ValidationError):
            IngestionSettings()


class TestDatabaseUrl:
    def test_should_build_asyncpg_url(self) -> None:
        settings = DatabaseSettings(host="db", port=5433, user="u", password="p", db="kb")

        assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5433/kb"

    def test_require_ssl_should_add_ssl_param(self) -> None:
        settings = DatabaseSettings(host="db", user="u", password="p", db="kb", sslmode="require")

        assert settings.async_database_url.endswith("?ssl=require")

    def test_url_override_should_take_precedence(self) -> None:
        settings = DatabaseSettings(url_override="sqlite+aiosqlite:///./kbchat.db")

        assert settings.async_database_url == "sqlite+aiosqlite:///./kbchat.db"
