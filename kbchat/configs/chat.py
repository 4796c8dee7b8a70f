"""
Chat configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Configuration for the chat orchestrator and streaming protocol
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from kbchat.configs.base import BaseSettings


class ChatSettings(BaseSettings):
    """Chat orchestration configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    history_window: int = Field(
        default=10,
        ge=0,
        description="Number of prior turns included in the prompt",
    )
    session_sentinel_prefix: str = Field(
        default="SESSION_ID:",
        description="Prefix of the first stream chunk announcing a new session id",
    )
