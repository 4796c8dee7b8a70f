"""
Vector store configuration settings.

Manages the chunk index backend and the retrieval defaults
(result count and similarity threshold).

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from kbchat.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (pgvector for prod, in-memory for dev and tests)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="pgvector",
        description="Vector store type: 'memory' for local dev, 'pgvector' for production",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension, must match the provider's output",
    )

    top_k: int = Field(default=3, ge=1, description="Number of top results to retrieve")
    similarity_threshold: float = Field(
        default=0.7,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity for retrieval",
    )
