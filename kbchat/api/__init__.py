"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    chat_router,
    health_router,
    knowledge_base_router,
    widget_router,
    widgets_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(chat_router)
api_router.include_router(knowledge_base_router)
api_router.include_router(widget_router)
api_router.include_router(widgets_router)

__all__ = ["api_router"]
