"""
OpenAI (and OpenAI-compatible) provider.

Dependencies: langchain_openai, openai
System role: Embedding and chat client backed by the OpenAI API
"""

import logging

import openai
from langchain_openai import ChatOpenAI, OpenAIEmbeddings

from kbchat.boundary.providers.base import LLMProvider
from kbchat.configs.providers import ProviderSettings

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """LLMProvider using ``langchain_openai`` clients with retries disabled."""

    name = "openai"

    @classmethod
    def from_settings(cls, settings: ProviderSettings, dimension: int) -> "OpenAIProvider":
        """
        Build the provider from configuration.

        Args:
            settings: Provider settings (key, base URL, models, bounds)
            dimension: Expected embedding dimension

        Returns:
            OpenAIProvider
        """
        embedding_options = {
            "model": settings.embedding_model,
            "api_key": settings.openai_api_key,
            "base_url": settings.openai_base_url,
            "max_retries": 0,
            "timeout": settings.request_timeout_seconds,
        }
        if settings.embedding_model.startswith("text-embedding-3"):
            embedding_options["dimensions"] = dimension

        embeddings = OpenAIEmbeddings(**embedding_options)
        chat_model = ChatOpenAI(
            model=settings.chat_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            max_retries=0,
            timeout=settings.request_timeout_seconds,
        )
        logger.info(
            f"{__name__}:from_settings - chat_model={settings.chat_model}, "
            f"embedding_model={settings.embedding_model}, dimension={dimension}"
        )
        return cls(
            embeddings=embeddings,
            chat_model=chat_model,
            dimension=dimension,
            timeout_seconds=settings.request_timeout_seconds,
        )

    def _is_rate_limited(self, error: BaseException) -> bool:
        if isinstance(error, openai.RateLimitError):
            return True
        return getattr(error, "status_code", None) == 429
