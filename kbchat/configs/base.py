"""
Base configuration settings.

Every settings group inherits the .env loading rules and the
process-wide options defined here.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Shared .env handling plus server, logging and CORS options."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Auto-reload the dev server")
    log_level: str = Field(default="INFO", description="Root log level name")
    server_host: str = Field(default="localhost", description="Dev server bind address")
    server_port: int = Field(default=8082, ge=1, le=65535, description="Dev server port")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API; the widget runs on tenant sites",
    )
