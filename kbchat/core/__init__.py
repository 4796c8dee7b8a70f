"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components
(text extraction, chunking, prompt construction). Nothing in this package
performs network or database I/O.
"""

from kbchat.core.exceptions import (
    CompletionFailed,
    DocumentNotFound,
    EmbeddingFailed,
    EmptyContent,
    ExtractionError,
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

__all__ = [
    "CompletionFailed",
    "DocumentNotFound",
    "EmbeddingFailed",
    "EmptyContent",
    "ExtractionError",
    "ExtractionFailed",
    "IngestionError",
    "KBChatException",
    "PayloadTooLarge",
    "PersistenceFailed",
    "ProviderError",
    "ProviderTimeout",
    "RateLimited",
    "SessionNotFound",
    "UnsupportedType",
    "ValidationError",
    "VectorStoreError",
    "WidgetNotFound",
]
