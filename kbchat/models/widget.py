"""
Widget API schemas.

Dependencies: pydantic
System role: Widget management and public config API contracts
"""

from typing import Literal

from pydantic import Field

from kbchat.models.common import CamelModel

HEX_COLOR_PATTERN = r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"

WidgetPosition = Literal["bottom-right", "bottom-left", "top-right", "top-left"]


class WidgetCreate(CamelModel):
    """Create a widget."""

    name: str = Field(default="Default Widget", min_length=1, max_length=255)
    primary_color: str = Field(default="#3B82F6", pattern=HEX_COLOR_PATTERN)
    position: WidgetPosition = "bottom-right"
    welcome_message: str = Field(default="Hi! How can I help you today?", min_length=1)
    system_prompt: str | None = None
    is_active: bool = True


class WidgetUpdate(CamelModel):
    """Partial widget update; omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    primary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    position: WidgetPosition | None = None
    welcome_message: str | None = Field(default=None, min_length=1)
    system_prompt: str | None = None


class WidgetActiveUpdate(CamelModel):
    is_active: bool


class WidgetResponse(CamelModel):
    """Full widget configuration for the owning tenant."""

    id: str
    name: str
    primary_color: str
    position: str
    welcome_message: str
    system_prompt: str | None = None
    is_active: bool


class PublicWidgetConfig(CamelModel):
    """Non-sensitive fields needed to render the widget."""

    widget_id: str
    tenant_id: str
    title: str
    primary_color: str
    position: str
    welcome_message: str
