"""
Test suite for the exception hierarchy.

System role: Verification of error contracts used by routers
"""

import pytest

from kbchat.core.exceptions import (
    CompletionFailed,
    EmbeddingFailed,
    EmptyContent,
    ExtractionFailed,
    IngestionError,
    KBChatException,
    PayloadTooLarge,
    PersistenceFailed,
    ProviderError,
    ProviderTimeout,
    RateLimited,
    SessionNotFound,
    UnsupportedType,
    ValidationError,
    VectorStoreError,
    WidgetNotFound,
)


class TestKBChatException:
    def test_str_should_include_details(self) -> None:
        error = KBChatException("Something failed", {"key": "value"})

        assert str(error) == "Something failed | Details: {'key': 'value'}"
        assert error.message == "Something failed"

    def test_str_without_details_should_be_message(self) -> None:
        assert str(KBChatException("Plain")) == "Plain"

    def test_validation_error_should_record_field(self) -> None:
        assert ValidationError("Filename is required", field="filename").details == {"field": "filename"}


class TestIngestionErrors:
    """Status hints carried by each ingestion failure kind."""

    @pytest.mark.parametrize(
        "error,kind,status",
        [
            (UnsupportedType("image/png"), "unsupported_type", 415),
            (PayloadTooLarge(11, 10), "payload_too_large", 413),
            (ExtractionFailed("bad"), "extraction_failed", 422),
            (EmptyContent("empty"), "empty_content", 422),
            (EmbeddingFailed("down"), "embedding_failed", 502),
            (PersistenceFailed("db"), "persistence_failed", 500),
        ],
    )
    def test_kinds_should_carry_status_hints(self, error: IngestionError, kind: str, status: int) -> None:
        assert isinstance(error, IngestionError)
        assert error.kind == kind
        assert error.http_status_hint == status

    def test_document_id_should_be_kept(self) -> None:
        error = EmptyContent("empty", document_id="doc-1")

        assert error.document_id == "doc-1"
        assert error.details["document_id"] == "doc-1"

    def test_unsupported_type_should_name_media_type(self) -> None:
        error = UnsupportedType("image/png")

        assert "image/png" in error.message
        assert error.media_type == "image/png"

    def test_payload_too_large_should_report_limit(self) -> None:
        error = PayloadTooLarge(size_bytes=20, limit_bytes=10)

        assert "10 bytes" in error.message
        assert error.details == {"size_bytes": 20, "limit_bytes": 10}


class TestOtherErrors:
    def test_rate_limited_and_timeout_should_be_provider_errors(self) -> None:
        assert issubclass(RateLimited, ProviderError)
        assert issubclass(ProviderTimeout, ProviderError)
        assert ProviderError("failed", provider="openai").details == {"provider": "openai"}

    def test_lookup_errors_should_carry_ids(self) -> None:
        assert WidgetNotFound("w1").details == {"widget_id": "w1"}
        assert SessionNotFound("s1").details == {"session_id": "s1"}
        assert VectorStoreError("boom", operation="upsert").details == {"operation": "upsert"}

    def test_completion_failed_should_be_domain_error(self) -> None:
        assert isinstance(CompletionFailed("Sorry"), KBChatException)
