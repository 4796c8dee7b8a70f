"""
Dependency providers.

Factory functions for FastAPI dependencies. Services come from the
container built in the application lifespan; nothing is constructed
per request.

Dependencies: fastapi, kbchat.application.container
System role: DI adapters for route handlers
"""

from fastapi import Depends, Header, HTTPException, Request, status

from kbchat.application.container import ServiceContainer
from kbchat.application.services import (
    ChatOrchestrator,
    DocumentService,
    IngestionPipeline,
    WidgetService,
)
from kbchat.configs import Settings

TENANT_HEADER = "X-Tenant-ID"


def get_container(request: Request) -> ServiceContainer:
    """
    Get the service container created at startup.

    Raises:
        HTTPException: 503 if the application has not finished starting
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return container


def get_settings_dependency(container: ServiceContainer = Depends(get_container)) -> Settings:
    """Get the settings the container was built with."""
    return container.settings


def get_tenant_id(x_tenant_id: str | None = Header(default=None, alias=TENANT_HEADER)) -> str:
    """
    Tenant of the authenticated dashboard user.

    The identity provider in front of the API sets this header after
    authenticating the caller.

    Raises:
        HTTPException: 401 if the header is missing
    """
    if not x_tenant_id or not x_tenant_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing tenant identity",
        )
    return x_tenant_id.strip()


def get_chat_orchestrator(container: ServiceContainer = Depends(get_container)) -> ChatOrchestrator:
    return container.chat_orchestrator


def get_ingestion_pipeline(container: ServiceContainer = Depends(get_container)) -> IngestionPipeline:
    return container.ingestion_pipeline


def get_document_service(container: ServiceContainer = Depends(get_container)) -> DocumentService:
    return container.document_service


def get_widget_service(container: ServiceContainer = Depends(get_container)) -> WidgetService:
    return container.widget_service
