"""
End-to-end scenarios over the wired services.

Each scenario runs through the real container: SQLite for widgets and
sessions, the in-memory vector store and the recording fake provider.

System role: Cross-component behaviour checks
"""

import asyncio

import pytest

from kbchat.application.container import ServiceContainer, build_container
from kbchat.boundary.db.models.document_model import DocumentStatus
from kbchat.boundary.vdb.memory_store import InMemoryVectorStore
from kbchat.core.exceptions import EmptyContent, UnsupportedType
from kbchat.core.prompts.chat_prompt import NO_CONTEXT_MARKER
from tests.fakes import TENANT_A, TENANT_B, FakeProvider, make_settings


@pytest.fixture
def services(session_factory, fake_provider: FakeProvider, memory_store: InMemoryVectorStore) -> ServiceContainer:
    return build_container(
        make_settings(),
        session_factory=session_factory,
        provider=fake_provider,
        vector_store=memory_store,
    )


class TestIngestionScenarios:
    @pytest.mark.asyncio
    async def test_text_upload_of_2500_characters(self, services: ServiceContainer) -> None:
        result = await services.ingestion_pipeline.ingest(TENANT_A, "notes.txt", b"x" * 2500, "text/plain")

        assert result.document.status == DocumentStatus.COMPLETED
        assert result.document.chunk_count == 3

    @pytest.mark.asyncio
    async def test_empty_upload_leaves_nothing_searchable(self, services: ServiceContainer) -> None:
        with pytest.raises(EmptyContent):
            await services.ingestion_pipeline.ingest(TENANT_A, "empty.txt", b"", "text/plain")

        stats = await services.document_service.get_stats(TENANT_A)
        assert stats.completed_documents == 0
        assert stats.total_chunks == 0

    @pytest.mark.asyncio
    async def test_image_upload_is_rejected_before_any_provider_call(
        self, services: ServiceContainer, fake_provider: FakeProvider
    ) -> None:
        with pytest.raises(UnsupportedType):
            await services.ingestion_pipeline.ingest(TENANT_A, "photo.png", b"\x89PNG", "image/png")

        assert fake_provider.embedded_batches == []
        assert await services.document_service.list_documents(TENANT_A) == []

    @pytest.mark.asyncio
    async def test_concurrent_uploads_for_one_tenant_all_complete(self, services: ServiceContainer) -> None:
        # Arrange
        uploads = [
            ("refunds.txt", b"Refund requests are answered within two days."),
            ("shipping.txt", b"Shipping takes three to five days."),
            ("warranty.txt", b"The warranty lasts one year."),
        ]

        # Act
        results = await asyncio.gather(*(
            services.ingestion_pipeline.ingest(TENANT_A, name, data, "text/plain")
            for name, data in uploads
        ))

        # Assert
        assert len({r.document.id for r in results}) == 3
        stats = await services.document_service.get_stats(TENANT_A)
        assert stats.completed_documents == 3
        assert stats.total_chunks == 3
        for (name, _), result in zip(uploads, results):
            hits = await services.document_service.search(TENANT_A, name.split(".")[0].rstrip("s"))
            assert result.document.id in {h.document_id for h in hits}


class TestChatScenarios:
    @pytest.mark.asyncio
    async def test_chat_without_matching_context(
        self, services: ServiceContainer, fake_provider: FakeProvider
    ) -> None:
        widget = await services.widget_service.create_widget(TENANT_A, name="Support")

        result = await services.chat_orchestrator.respond(TENANT_A, widget.id, "Tell me a joke")

        assert result.sources == []
        assert NO_CONTEXT_MARKER in fake_provider.prompts[-1][0].content
        assert result.response == "Happy to help with that."

    @pytest.mark.asyncio
    async def test_tenants_never_see_each_others_documents(
        self, services: ServiceContainer, fake_provider: FakeProvider
    ) -> None:
        # Arrange
        await services.ingestion_pipeline.ingest(TENANT_B, "b-refunds.txt", b"Tenant B refund secret.", "text/plain")
        widget = await services.widget_service.create_widget(TENANT_A, name="Support")

        # Act
        result = await services.chat_orchestrator.respond(TENANT_A, widget.id, "What is the refund policy?")

        # Assert
        assert result.sources == []
        assert "Tenant B refund secret." not in fake_provider.prompts[-1][0].content
        assert await services.document_service.search(TENANT_A, "refund") == []
        assert len(await services.document_service.search(TENANT_B, "refund")) == 1

    @pytest.mark.asyncio
    async def test_grounded_answer_reports_sources(self, services: ServiceContainer) -> None:
        await services.ingestion_pipeline.ingest(TENANT_A, "pricing.txt", b"Pricing starts at $10.", "text/plain")
        widget = await services.widget_service.create_widget(TENANT_A, name="Support")

        result = await services.chat_orchestrator.respond(TENANT_A, widget.id, "What is your pricing?")

        assert [(s.filename, s.similarity_score) for s in result.sources] == [("pricing.txt", pytest.approx(1.0))]
