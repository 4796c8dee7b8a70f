"""
Test doubles shared across the suite.

KeywordEmbeddings gives controllable similarity (one axis per topic word);
FakeProvider runs the real LLMProvider base over LangChain's fake chat
model and records every embedding batch, query and prompt.

Dependencies: langchain_core, kbchat.boundary.providers
System role: Deterministic stand-ins for the model provider
"""

from typing import Sequence

from langchain_core.embeddings import Embeddings
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import BaseMessage

from kbchat.boundary.providers.base import LLMProvider
from kbchat.configs import Settings

# Each topic word maps to one axis; text mentioning none of them lands on the last axis
TOPICS = ("refund", "shipping", "warranty", "password", "pricing", "hours", "privacy", "invoice")
EMBEDDING_DIMENSION = len(TOPICS) + 1

TENANT_A = "tenant-a"
TENANT_B = "tenant-b"


def make_settings() -> Settings:
    """Default settings sized for KeywordEmbeddings."""
    settings = Settings()
    settings.vector_store.embedding_dimension = EMBEDDING_DIMENSION
    return settings


class KeywordEmbeddings(Embeddings):
    """Deterministic embeddings with controllable similarity."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    def embed_query(self, text: str) -> list[float]:
        lowered = text.lower()
        vector = [float(lowered.count(topic)) for topic in TOPICS]
        vector.append(0.0 if any(vector) else 1.0)
        return vector


class FakeRateLimitError(Exception):
    """Stands in for a provider SDK's 429 error."""


class FailingEmbeddings(KeywordEmbeddings):
    """Succeeds for ``ok_calls`` requests, then raises a rate-limit error."""

    def __init__(self, ok_calls: int = 0) -> None:
        self.ok_calls = ok_calls
        self.calls = 0

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls += 1
        if self.calls > self.ok_calls:
            raise FakeRateLimitError("429 Too Many Requests")
        return super().embed_documents(texts)


class FakeProvider(LLMProvider):
    """LLMProvider over fake LangChain models that records every call."""

    name = "fake"

    def __init__(
        self,
        responses: Sequence[str] = ("Happy to help with that.",),
        embeddings: Embeddings | None = None,
        timeout_seconds: float = 5.0,
    ) -> None:
        super().__init__(
            embeddings=embeddings or KeywordEmbeddings(),
            chat_model=FakeListChatModel(responses=list(responses)),
            dimension=EMBEDDING_DIMENSION,
            timeout_seconds=timeout_seconds,
        )
        self.embedded_batches: list[list[str]] = []
        self.embedded_queries: list[str] = []
        self.prompts: list[list[BaseMessage]] = []

    def _is_rate_limited(self, error: BaseException) -> bool:
        return isinstance(error, FakeRateLimitError)

    async def _aembed(self, texts: list[str]) -> list[list[float]]:
        self.embedded_batches.append(list(texts))
        return await super()._aembed(texts)

    async def _aembed_query(self, text: str) -> list[float]:
        self.embedded_queries.append(text)
        return await super()._aembed_query(text)

    async def chat_complete(self, messages: Sequence[BaseMessage]) -> str:
        self.prompts.append(list(messages))
        return await super().chat_complete(messages)

    async def chat_complete_stream(self, messages: Sequence[BaseMessage]):
        self.prompts.append(list(messages))
        async for token in super().chat_complete_stream(messages):
            yield token

