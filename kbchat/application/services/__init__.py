"""Service orchestrators."""

from .chat_service import ChatOrchestrator, ChatResult, ChatStream
from .document_service import DocumentService
from .ingestion_service import IngestionPipeline, IngestionResult, IngestionState
from .retrieval_service import RetrievedPassage, Retriever
from .widget_service import WidgetService, public_config

__all__ = [
    "ChatOrchestrator",
    "ChatResult",
    "ChatStream",
    "DocumentService",
    "IngestionPipeline",
    "IngestionResult",
    "IngestionState",
    "RetrievedPassage",
    "Retriever",
    "WidgetService",
    "public_config",
]
