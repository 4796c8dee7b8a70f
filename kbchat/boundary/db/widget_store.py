"""
Widget configuration store.

Dependencies: sqlalchemy, kbchat.boundary.db.CRUD
System role: Widget lookup for chat and management endpoints
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kbchat.boundary.db.base import parse_uuid
from kbchat.boundary.db.CRUD import widget_config_crud
from kbchat.boundary.db.records import WidgetRecord

logger = logging.getLogger(__name__)


class WidgetConfigStore:
    """Tenant-scoped access to widget configurations."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_active(self, tenant_id: str, widget_id: str) -> WidgetRecord | None:
        """
        Return the widget if it exists for the tenant and is active.

        Args:
            tenant_id: Owning tenant
            widget_id: Widget UUID string

        Returns:
            WidgetRecord or None
        """
        widget_uuid = parse_uuid(widget_id)
        if widget_uuid is None:
            return None
        async with self._session_factory() as session:
            model = await widget_config_crud.get_active(session, tenant_id, widget_uuid)
        return WidgetRecord.from_model(model) if model else None

    async def get(self, tenant_id: str, widget_id: str) -> WidgetRecord | None:
        widget_uuid = parse_uuid(widget_id)
        if widget_uuid is None:
            return None
        async with self._session_factory() as session:
            model = await widget_config_crud.get_by_id(session, tenant_id, widget_uuid)
        return WidgetRecord.from_model(model) if model else None

    async def list(self, tenant_id: str) -> list[WidgetRecord]:
        async with self._session_factory() as session:
            models = await widget_config_crud.get_all(session, tenant_id)
        return [WidgetRecord.from_model(m) for m in models]

    async def create(self, tenant_id: str, **fields: Any) -> WidgetRecord:
        async with self._session_factory() as session, session.begin():
            model = await widget_config_crud.create(session, tenant_id, **fields)
            record = WidgetRecord.from_model(model)
        logger.info(
            f"{__name__}:create - Created widget",
            extra={"tenant_id": tenant_id, "widget_id": record.id},
        )
        return record

    async def update(self, tenant_id: str, widget_id: str, **fields: Any) -> WidgetRecord | None:
        widget_uuid = parse_uuid(widget_id)
        if widget_uuid is None:
            return None
        if not fields:
            return await self.get(tenant_id, widget_id)
        async with self._session_factory() as session, session.begin():
            model = await widget_config_crud.update_by_id(session, tenant_id, widget_uuid, **fields)
            record = WidgetRecord.from_model(model) if model else None
        return record

    async def delete(self, tenant_id: str, widget_id: str) -> bool:
        widget_uuid = parse_uuid(widget_id)
        if widget_uuid is None:
            return False
        async with self._session_factory() as session, session.begin():
            return await widget_config_crud.delete_by_id(session, tenant_id, widget_uuid)
