"""
Model provider abstraction.

One object serves both embeddings and chat completions. Concrete
providers only construct the LangChain clients and say how to recognise
a rate-limit error; call bounding, error translation and streaming live
here so every provider behaves the same.

Dependencies: langchain_core
System role: Embedding Client used by ingestion, retrieval and chat
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Awaitable, Sequence, TypeVar

from langchain_core.embeddings import Embeddings
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

from kbchat.core.exceptions import ProviderError, ProviderTimeout, RateLimited

logger = logging.getLogger(__name__)

T = TypeVar("T")


def content_to_text(content: Any) -> str:
    """
    Flatten LangChain message content into plain text.

    Some models return a list of content parts instead of a string.

    Args:
        content: ``message.content`` or ``chunk.content``

    Returns:
        str: Concatenated text parts
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and item.get("type") == "text":
                parts.append(item.get("text", ""))
        return "".join(parts)
    return str(content) if content is not None else ""


class LLMProvider(ABC):
    """
    Embedding and chat completion client.

    Attributes:
        name: Provider identifier used in logs and error details
        dimension: Length of every embedding returned
        timeout_seconds: Upper bound applied to each provider call
    """

    name: str = "provider"

    def __init__(
        self,
        embeddings: Embeddings,
        chat_model: BaseChatModel,
        dimension: int,
        timeout_seconds: float,
    ) -> None:
        self._embeddings = embeddings
        self._chat_model = chat_model
        self.dimension = dimension
        self.timeout_seconds = timeout_seconds

    @abstractmethod
    def _is_rate_limited(self, error: BaseException) -> bool:
        """Whether ``error`` is the provider's rate-limit or quota rejection."""

    def _translate(self, error: BaseException, operation: str) -> ProviderError:
        if isinstance(error, ProviderError):
            return error
        if isinstance(error, asyncio.TimeoutError):
            return ProviderTimeout(
                f"{operation} timed out after {self.timeout_seconds}s",
                provider=self.name,
                details={"operation": operation},
            )
        if self._is_rate_limited(error):
            return RateLimited(
                f"{operation} rejected by rate limit",
                provider=self.name,
                details={"operation": operation},
            )
        return ProviderError(
            f"{operation} failed",
            provider=self.name,
            details={"operation": operation, "error_type": type(error).__name__},
        )

    async def _bounded(self, call: Awaitable[T], operation: str) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except StopAsyncIteration:
            raise
        except Exception as e:
            translated = self._translate(e, operation)
            logger.warning(
                f"{__name__}:{operation} - {type(translated).__name__}",
                extra={"provider": self.name, "error_type": type(e).__name__, "error_msg": str(e)[:300]},
            )
            raise translated from e

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            RateLimited, ProviderTimeout, ProviderError
        """
        vectors = await self.embed_batch([text])
        return vectors[0]

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed texts in one provider request.

        Output is aligned with input. A short or malformed response fails
        the whole batch.

        Args:
            texts: Texts to embed

        Returns:
            One vector per input text

        Raises:
            RateLimited, ProviderTimeout, ProviderError
        """
        if not texts:
            return []
        vectors = await self._bounded(self._aembed(list(texts)), "embed_batch")
        if len(vectors) != len(texts):
            raise ProviderError(
                "Embedding response does not match request size",
                provider=self.name,
                details={"expected": len(texts), "actual": len(vectors)},
            )
        for vector in vectors:
            self._check_dimension(vector)
        return [list(vector) for vector in vectors]

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a search query.

        Providers with separate query and document modes use the query mode
        here; the vector is comparable with ``embed_batch`` output.

        Raises:
            RateLimited, ProviderTimeout, ProviderError
        """
        vector = await self._bounded(self._aembed_query(text), "embed_query")
        self._check_dimension(vector)
        return list(vector)

    def _check_dimension(self, vector: Sequence[float]) -> None:
        if len(vector) != self.dimension:
            raise ProviderError(
                "Embedding has unexpected dimension",
                provider=self.name,
                details={"expected": self.dimension, "actual": len(vector)},
            )

    async def _aembed(self, texts: list[str]) -> list[list[float]]:
        return await self._embeddings.aembed_documents(texts)

    async def _aembed_query(self, text: str) -> list[float]:
        return await self._embeddings.aembed_query(text)

    async def chat_complete(self, messages: Sequence[BaseMessage]) -> str:
        """
        Produce a complete answer.

        Args:
            messages: Prompt messages, system first

        Returns:
            str: Answer text

        Raises:
            RateLimited, ProviderTimeout, ProviderError
        """
        response = await self._bounded(self._chat_model.ainvoke(list(messages)), "chat_complete")
        return content_to_text(response.content)

    async def chat_complete_stream(self, messages: Sequence[BaseMessage]) -> AsyncIterator[str]:
        """
        Stream answer text deltas as the model produces them.

        Each wait for the next delta is bounded by the timeout. Closing the
        returned iterator closes the upstream stream.

        Args:
            messages: Prompt messages, system first

        Yields:
            str: Non-empty text deltas

        Raises:
            RateLimited, ProviderTimeout, ProviderError
        """
        stream = self._chat_model.astream(list(messages))
        try:
            while True:
                try:
                    chunk = await self._bounded(stream.__anext__(), "chat_complete_stream")
                except StopAsyncIteration:
                    break
                text = content_to_text(chunk.content)
                if text:
                    yield text
        finally:
            await stream.aclose()
