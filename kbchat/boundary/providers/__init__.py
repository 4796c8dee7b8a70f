"""
Model provider boundary layer.

- LLMProvider: Embedding and chat completion contract
- OpenAIProvider, GeminiProvider: Concrete implementations
- build_provider: Startup-time selection

Dependencies: langchain_core, langchain_openai, langchain_google_genai
System role: Embedding Client adapter
"""

from kbchat.boundary.providers.base import LLMProvider, content_to_text
from kbchat.boundary.providers.gemini_provider import GeminiProvider
from kbchat.boundary.providers.openai_provider import OpenAIProvider
from kbchat.boundary.providers.provider_factory import build_provider

__all__ = [
    "GeminiProvider",
    "LLMProvider",
    "OpenAIProvider",
    "build_provider",
    "content_to_text",
]
