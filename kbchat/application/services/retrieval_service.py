"""
Retriever.

Embeds a query and returns the tenant's best matching passages. Retrieval
is best effort: provider or store failures produce an empty result so the
chat turn can still proceed.

Dependencies: kbchat.boundary.providers, kbchat.boundary.vdb
System role: Context lookup for the chat orchestrator
"""

import logging

from kbchat.boundary.providers.base import LLMProvider
from kbchat.boundary.vdb.base import VectorStore
from kbchat.boundary.vdb.vector_schemas import SearchResult
from kbchat.core.exceptions import ProviderError, VectorStoreError

logger = logging.getLogger(__name__)

RetrievedPassage = SearchResult


class Retriever:
    """
    Query embedding plus tenant-scoped similarity search.

    Attributes:
        default_k: Result count when the caller does not pass one
        default_min_similarity: Threshold when the caller does not pass one
    """

    def __init__(
        self,
        provider: LLMProvider,
        vector_store: VectorStore,
        default_k: int = 3,
        default_min_similarity: float = 0.7,
    ) -> None:
        self.provider = provider
        self.vector_store = vector_store
        self.default_k = default_k
        self.default_min_similarity = default_min_similarity

    async def retrieve(
        self,
        tenant_id: str,
        query: str,
        k: int | None = None,
        min_similarity: float | None = None,
    ) -> list[RetrievedPassage]:
        """
        Find passages relevant to a query.

        Args:
            tenant_id: Tenant whose knowledge base is searched
            query: Query text
            k: Maximum passages (defaults to default_k)
            min_similarity: Inclusive threshold (defaults to default_min_similarity)

        Returns:
            Passages ordered by descending similarity, empty on any failure
        """
        if not query or not query.strip():
            return []

        k = self.default_k if k is None else k
        min_similarity = self.default_min_similarity if min_similarity is None else min_similarity

        try:
            query_vector = await self.provider.embed_query(query)
        except ProviderError as e:
            logger.warning(
                f"{__name__}:retrieve - Query embedding failed, continuing without context",
                extra={"tenant_id": tenant_id, "error_type": type(e).__name__},
            )
            return []

        try:
            results = await self.vector_store.similarity_search(
                tenant_id, query_vector, k, min_similarity
            )
        except VectorStoreError as e:
            logger.warning(
                f"{__name__}:retrieve - Similarity search failed, continuing without context",
                extra={"tenant_id": tenant_id, "error_type": type(e).__name__},
            )
            return []

        # Stores filter already, keep the threshold as a hard guarantee here too
        passages = [r for r in results if r.similarity_score >= min_similarity][:k]
        logger.info(
            f"{__name__}:retrieve - {len(passages)} passages (k={k}, min_similarity={min_similarity})",
            extra={"tenant_id": tenant_id},
        )
        return passages
