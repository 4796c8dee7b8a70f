"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_orchestrator,
    get_container,
    get_document_service,
    get_ingestion_pipeline,
    get_settings_dependency,
    get_tenant_id,
    get_widget_service,
)

__all__ = [
    "get_chat_orchestrator",
    "get_container",
    "get_document_service",
    "get_ingestion_pipeline",
    "get_settings_dependency",
    "get_tenant_id",
    "get_widget_service",
]
