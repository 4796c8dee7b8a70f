"""API routers."""

from .chat import router as chat_router
from .health import router as health_router
from .knowledge_base import router as knowledge_base_router
from .widget import router as widget_router
from .widgets import router as widgets_router

__all__ = [
    "chat_router",
    "health_router",
    "knowledge_base_router",
    "widget_router",
    "widgets_router",
]
