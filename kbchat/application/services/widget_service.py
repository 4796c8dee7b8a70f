"""
Widget configuration service.

Tenant-scoped management of chat widgets and the public, non-sensitive
view served to the embedded widget script.

Dependencies: kbchat.boundary.db.widget_store
System role: Widget management orchestration
"""

import logging
from typing import Any

from kbchat.boundary.db.records import WidgetRecord
from kbchat.boundary.db.widget_store import WidgetConfigStore
from kbchat.core.exceptions import WidgetNotFound

logger = logging.getLogger(__name__)


def public_config(widget: WidgetRecord) -> dict[str, Any]:
    """
    Render the unauthenticated view of a widget.

    Excludes the system prompt, the active flag and timestamps.

    Args:
        widget: Full widget record

    Returns:
        dict: camelCase fields for the widget script
    """
    return {
        "widgetId": widget.id,
        "tenantId": widget.tenant_id,
        "title": widget.name,
        "primaryColor": widget.primary_color,
        "position": widget.position,
        "welcomeMessage": widget.welcome_message,
    }


class WidgetService:
    """Widget CRUD plus public lookup."""

    def __init__(self, store: WidgetConfigStore) -> None:
        self.store = store

    async def get_public(self, tenant_id: str, widget_id: str) -> dict[str, Any]:
        """
        Public configuration for an active widget.

        Raises:
            WidgetNotFound: Widget missing, inactive or owned by another tenant
        """
        widget = await self.store.get_active(tenant_id, widget_id)
        if widget is None:
            raise WidgetNotFound(widget_id)
        return public_config(widget)

    async def list_widgets(self, tenant_id: str) -> list[WidgetRecord]:
        return await self.store.list(tenant_id)

    async def get_widget(self, tenant_id: str, widget_id: str) -> WidgetRecord:
        widget = await self.store.get(tenant_id, widget_id)
        if widget is None:
            raise WidgetNotFound(widget_id)
        return widget

    async def create_widget(self, tenant_id: str, **fields: Any) -> WidgetRecord:
        return await self.store.create(tenant_id, **fields)

    async def update_widget(self, tenant_id: str, widget_id: str, **fields: Any) -> WidgetRecord:
        widget = await self.store.update(tenant_id, widget_id, **fields)
        if widget is None:
            raise WidgetNotFound(widget_id)
        logger.info(
            f"{__name__}:update_widget - Updated {sorted(fields)}",
            extra={"tenant_id": tenant_id, "widget_id": widget_id},
        )
        return widget

    async def set_active(self, tenant_id: str, widget_id: str, is_active: bool) -> WidgetRecord:
        return await self.update_widget(tenant_id, widget_id, is_active=is_active)

    async def delete_widget(self, tenant_id: str, widget_id: str) -> None:
        if not await self.store.delete(tenant_id, widget_id):
            raise WidgetNotFound(widget_id)
