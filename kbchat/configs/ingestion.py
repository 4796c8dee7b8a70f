"""
Ingestion pipeline configuration.

Defines upload limits, accepted media types and chunking parameters.

Dependencies: pydantic, pydantic_settings
System role: Configuration for the document ingestion pipeline
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from kbchat.configs.base import BaseSettings

PLAIN_TEXT = "text/plain"
PDF = "application/pdf"
LEGACY_WORD = "application/msword"
WORD = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class IngestionSettings(BaseSettings):
    """Document ingestion configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    max_file_size_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Maximum accepted upload size (10 MiB)",
    )
    allowed_media_types: list[str] = Field(
        default=[PLAIN_TEXT, PDF, LEGACY_WORD, WORD],
        description="Media types accepted for ingestion",
    )

    chunk_size: int = Field(default=1000, gt=0, description="Characters per chunk")
    chunk_overlap: int = Field(default=200, ge=0, description="Characters shared by consecutive chunks")

    @model_validator(mode="after")
    def _check_overlap(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
