"""
Model provider configuration settings.

Selects the embedding/chat provider and holds its credentials, model
names and request bounds.

Dependencies: pydantic, pydantic_settings
System role: Configuration for the embedding and chat completion client
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from kbchat.configs.base import BaseSettings


class ProviderSettings(BaseSettings):
    """Embedding and chat completion provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="openai",
        description="Provider implementation: 'openai' (or OpenAI-compatible) or 'gemini'",
    )

    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_base_url: str | None = Field(
        default=None,
        description="Base URL for OpenAI-compatible endpoints",
    )
    google_api_key: str | None = Field(default=None, description="Google AI Studio API key")

    chat_model: str = Field(default="gpt-4o-mini", description="Chat completion model")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model (Gemini: models/text-embedding-004)",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, description="Maximum tokens per completion")

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single provider call",
    )
    embedding_batch_size: int = Field(
        default=10,
        ge=1,
        description="Number of chunks embedded per provider request",
    )
