"""
Knowledge-base document service.

Lists, inspects, deletes and searches a tenant's documents. Upload goes
through IngestionPipeline; this service covers the rest of the document
lifecycle.

Dependencies: kbchat.boundary.vdb, kbchat.application.services.retrieval_service
System role: Document management orchestration
"""

import logging

from kbchat.application.services.retrieval_service import RetrievedPassage, Retriever
from kbchat.boundary.vdb.base import VectorStore
from kbchat.boundary.vdb.vector_schemas import DocumentRecord, KnowledgeBaseStats
from kbchat.core.exceptions import DocumentNotFound

logger = logging.getLogger(__name__)


class DocumentService:
    """Tenant-scoped document management."""

    def __init__(self, vector_store: VectorStore, retriever: Retriever) -> None:
        """
        Initialize document service.

        Args:
            vector_store: Document and chunk index
            retriever: Used for knowledge-base search previews
        """
        self.vector_store = vector_store
        self.retriever = retriever

    async def list_documents(self, tenant_id: str) -> list[DocumentRecord]:
        return await self.vector_store.list_documents(tenant_id)

    async def get_document(self, tenant_id: str, document_id: str) -> DocumentRecord:
        """
        Fetch one document.

        Raises:
            DocumentNotFound: If absent for this tenant
        """
        document = await self.vector_store.get_document(tenant_id, document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        return document

    async def delete_document(self, tenant_id: str, document_id: str) -> None:
        """
        Delete a document and all of its chunks.

        Raises:
            DocumentNotFound: If absent for this tenant
        """
        deleted = await self.vector_store.delete_document(tenant_id, document_id)
        if not deleted:
            raise DocumentNotFound(document_id)
        logger.info(
            f"{__name__}:delete_document - Deleted",
            extra={"tenant_id": tenant_id, "document_id": document_id},
        )

    async def get_stats(self, tenant_id: str) -> KnowledgeBaseStats:
        return await self.vector_store.get_stats(tenant_id)

    async def search(
        self,
        tenant_id: str,
        query: str,
        k: int | None = None,
        min_similarity: float | None = None,
    ) -> list[RetrievedPassage]:
        """Preview what the chat would retrieve for a query."""
        return await self.retriever.retrieve(tenant_id, query, k=k, min_similarity=min_similarity)
