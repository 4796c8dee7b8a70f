"""
Provider factory.

Selects the provider implementation once at startup. Business logic
receives the resulting LLMProvider and never branches on its identity.

Dependencies: kbchat.boundary.providers, kbchat.configs
System role: Provider instantiation and selection
"""

import logging

from kbchat.boundary.providers.base import LLMProvider
from kbchat.boundary.providers.gemini_provider import GeminiProvider
from kbchat.boundary.providers.openai_provider import OpenAIProvider
from kbchat.configs.settings import Settings

logger = logging.getLogger(__name__)


def build_provider(settings: Settings) -> LLMProvider:
    """
    Build the configured provider.

    Args:
        settings: Application settings

    Returns:
        LLMProvider

    Raises:
        ValueError: If LLM_PROVIDER is not 'openai' or 'gemini'
    """
    provider = settings.providers.provider.lower()
    dimension = settings.vector_store.embedding_dimension

    if provider == "openai":
        logger.info(f"{__name__}:build_provider - Using OpenAI provider")
        return OpenAIProvider.from_settings(settings.providers, dimension)
    if provider == "gemini":
        logger.info(f"{__name__}:build_provider - Using Gemini provider")
        return GeminiProvider.from_settings(settings.providers, dimension)

    raise ValueError(f"Invalid LLM_PROVIDER: {provider}. Must be 'openai' or 'gemini'.")
