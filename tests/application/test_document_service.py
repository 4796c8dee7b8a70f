"""
Test suite for DocumentService.

System role: Verification of knowledge-base document management
"""

import uuid

import pytest

from kbchat.application.services.document_service import DocumentService
from kbchat.application.services.ingestion_service import IngestionPipeline
from kbchat.application.services.retrieval_service import Retriever
from kbchat.boundary.vdb.memory_store import InMemoryVectorStore
from kbchat.core.document_processing.chunker import TextChunker
from kbchat.core.document_processing.extractor import TextExtractor
from kbchat.core.exceptions import DocumentNotFound
from tests.fakes import TENANT_A, TENANT_B, FakeProvider


@pytest.fixture
def service(fake_provider: FakeProvider, memory_store: InMemoryVectorStore) -> DocumentService:
    return DocumentService(memory_store, Retriever(fake_provider, memory_store))


@pytest.fixture
def pipeline(fake_provider: FakeProvider, memory_store: InMemoryVectorStore) -> IngestionPipeline:
    return IngestionPipeline(
        provider=fake_provider,
        vector_store=memory_store,
        extractor=TextExtractor(),
        chunker=TextChunker(),
        max_file_size_bytes=1024 * 1024,
    )


class TestDocumentService:
    @pytest.mark.asyncio
    async def test_uploaded_document_should_be_listed_and_searchable(
        self, service: DocumentService, pipeline: IngestionPipeline
    ) -> None:
        # Arrange
        result = await pipeline.ingest(TENANT_A, "shipping.txt", b"Shipping is free over $50.", "text/plain")

        # Act
        documents = await service.list_documents(TENANT_A)
        hits = await service.search(TENANT_A, "shipping cost")

        # Assert
        assert [d.id for d in documents] == [result.document.id]
        assert [h.document_id for h in hits] == [result.document.id]

    @pytest.mark.asyncio
    async def test_delete_should_remove_document_from_search(
        self, service: DocumentService, pipeline: IngestionPipeline
    ) -> None:
        result = await pipeline.ingest(TENANT_A, "shipping.txt", b"Shipping is free over $50.", "text/plain")

        await service.delete_document(TENANT_A, result.document.id)

        assert await service.search(TENANT_A, "shipping") == []
        assert (await service.get_stats(TENANT_A)).total_documents == 0

    @pytest.mark.asyncio
    async def test_other_tenant_cannot_read_or_delete(
        self, service: DocumentService, pipeline: IngestionPipeline
    ) -> None:
        result = await pipeline.ingest(TENANT_A, "shipping.txt", b"Shipping is free over $50.", "text/plain")

        with pytest.raises(DocumentNotFound):
            await service.get_document(TENANT_B, result.document.id)
        with pytest.raises(DocumentNotFound):
            await service.delete_document(TENANT_B, result.document.id)
        assert (await service.get_document(TENANT_A, result.document.id)).filename == "shipping.txt"

    @pytest.mark.asyncio
    async def test_missing_document_should_raise(self, service: DocumentService) -> None:
        with pytest.raises(DocumentNotFound):
            await service.get_document(TENANT_A, str(uuid.uuid4()))
