"""
Google Gemini provider.

Dependencies: langchain_google_genai, google.genai
System role: Embedding and chat client backed by Google Generative AI
"""

import logging

from google.genai import errors as genai_errors
from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from kbchat.boundary.providers.base import LLMProvider
from kbchat.configs.providers import ProviderSettings

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """
    LLMProvider using ``langchain_google_genai`` clients.

    The embeddings client ignores output dimensionality passed to its
    constructor, so it is passed on every embed call instead.
    """

    name = "gemini"

    @classmethod
    def from_settings(cls, settings: ProviderSettings, dimension: int) -> "GeminiProvider":
        """
        Build the provider from configuration.

        Args:
            settings: Provider settings (key, models, bounds)
            dimension: Embedding output dimensionality

        Returns:
            GeminiProvider
        """
        embeddings = GoogleGenerativeAIEmbeddings(
            model=settings.embedding_model,
            google_api_key=settings.google_api_key,
        )
        chat_model = ChatGoogleGenerativeAI(
            model=settings.chat_model,
            google_api_key=settings.google_api_key,
            temperature=settings.temperature,
            max_output_tokens=settings.max_tokens,
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

    async def _aembed(self, texts: list[str]) -> list[list[float]]:
        return await self._embeddings.aembed_documents(
            texts,
            output_dimensionality=self.dimension,
        )

    async def _aembed_query(self, text: str) -> list[float]:
        return await self._embeddings.aembed_query(text, output_dimensionality=self.dimension)

    def _is_rate_limited(self, error: BaseException) -> bool:
        # langchain_google_genai re-raises SDK errors; the HTTP status stays on the cause chain
        current: BaseException | None = error
        while current is not None:
            if isinstance(current, genai_errors.APIError) and current.code == 429:
                return True
            current = current.__cause__
        return False
