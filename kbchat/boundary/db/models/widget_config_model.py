"""
Widget configuration ORM model.

Dependencies: sqlalchemy, kbchat.boundary.db.base
System role: Per-tenant chat widget settings
"""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kbchat.boundary.db.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class WidgetConfigModel(Base, UUIDMixin, TenantMixin, TimestampMixin):
    """
    Chat widget configuration.

    system_prompt is operator-only and never exposed through the public
    widget endpoint.
    """

    __tablename__ = "widget_configs"

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="Default Widget")
    primary_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#3B82F6")
    position: Mapped[str] = mapped_column(String(32), nullable=False, default="bottom-right")
    welcome_message: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="Hi! How can I help you today?",
    )
    system_prompt: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
