"""
Widget configuration CRUD operations.

Dependencies: sqlalchemy, kbchat.boundary.db.models.widget_config_model
System role: Widget configuration persistence operations
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kbchat.boundary.db.CRUD.base_crud import BaseCRUD
from kbchat.boundary.db.models.widget_config_model import WidgetConfigModel


class WidgetConfigCRUD(BaseCRUD[WidgetConfigModel]):
    """CRUD operations for WidgetConfigModel."""

    def __init__(self) -> None:
        """Initialize WidgetConfigCRUD with WidgetConfigModel."""
        super().__init__(WidgetConfigModel)

    async def get_active(
        self,
        session: AsyncSession,
        tenant_id: str,
        widget_id: UUID,
    ) -> WidgetConfigModel | None:
        """
        Retrieve a widget only if it belongs to the tenant and is active.

        Args:
            session: Async database session
            tenant_id: Owning tenant
            widget_id: Widget UUID

        Returns:
            WidgetConfigModel or None
        """
        stmt = select(WidgetConfigModel).where(
            WidgetConfigModel.id == widget_id,
            WidgetConfigModel.tenant_id == tenant_id,
            WidgetConfigModel.is_active.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


widget_config_crud = WidgetConfigCRUD()
