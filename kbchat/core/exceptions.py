"""
Exception hierarchy for the knowledge-base chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.
Ingestion errors additionally carry an HTTP status hint so the entry
point can translate them without inspecting the failure kind.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KBChatException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KBChatException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------


class IngestionError(KBChatException):
    """Base exception for document ingestion failures."""

    kind: str = "ingestion_failed"
    http_status_hint: int = 500

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: User-facing error message
            document_id: ID of the document record, when one was created
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(message, details)


class UnsupportedType(IngestionError):
    """Raised when the uploaded media type is not accepted."""

    kind = "unsupported_type"
    http_status_hint = 415

    def __init__(self, media_type: str | None, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["media_type"] = media_type
        self.media_type = media_type
        super().__init__(f"Unsupported file type: {media_type or 'unknown'}", details=details)


class PayloadTooLarge(IngestionError):
    """Raised when the upload exceeds the configured size limit."""

    kind = "payload_too_large"
    http_status_hint = 413

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(
            f"File too large, the maximum size is {limit_bytes} bytes",
            details={"size_bytes": size_bytes, "limit_bytes": limit_bytes},
        )


class ExtractionFailed(IngestionError):
    """Raised when text could not be extracted from the uploaded file."""

    kind = "extraction_failed"
    http_status_hint = 422


class EmptyContent(IngestionError):
    """Raised when the document yields no text or no chunks."""

    kind = "empty_content"
    http_status_hint = 422


class EmbeddingFailed(IngestionError):
    """Raised when chunk embeddings could not be generated."""

    kind = "embedding_failed"
    http_status_hint = 502


class PersistenceFailed(IngestionError):
    """Raised when chunks could not be written to the vector store."""

    kind = "persistence_failed"
    http_status_hint = 500


class ExtractionError(KBChatException):
    """Raised by the text extractor when a file cannot be parsed."""

    def __init__(
        self,
        message: str,
        media_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            media_type: Media type of the file that failed parsing
            details: Additional context
        """
        details = details or {}
        if media_type:
            details["media_type"] = media_type
        super().__init__(message, details)


# ---------------------------------------------------------------------------
# Model providers
# ---------------------------------------------------------------------------


class ProviderError(KBChatException):
    """Raised when an embedding or chat completion call fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class RateLimited(ProviderError):
    """Raised when the provider rejects a call due to rate or quota limits."""


class ProviderTimeout(ProviderError):
    """Raised when a provider call exceeds the configured timeout."""


class CompletionFailed(KBChatException):
    """Raised when the chat model could not produce an answer."""


# ---------------------------------------------------------------------------
# Storage and lookups
# ---------------------------------------------------------------------------


class VectorStoreError(KBChatException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class WidgetNotFound(KBChatException):
    """Raised when a widget does not exist, is inactive, or belongs to another tenant."""

    def __init__(self, widget_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["widget_id"] = widget_id
        super().__init__(f"Widget not found or inactive: {widget_id}", details)


class SessionNotFound(KBChatException):
    """Raised when a chat session cannot be found for the tenant and widget."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class DocumentNotFound(KBChatException):
    """Raised when a knowledge-base document cannot be found for the tenant."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)
