"""
Plain records returned by the database-backed stores.

Services receive these instead of ORM instances so nothing outside the
boundary layer depends on an open database session.

Dependencies: pydantic
System role: Boundary data transfer objects
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_serializer

Role = Literal["user", "assistant"]


class ChatTurn(BaseModel):
    """One message in a conversation."""

    model_config = ConfigDict(from_attributes=True)

    role: Role
    content: str
    created_at: datetime


class ChatSessionRecord(BaseModel):
    """A conversation between one end user and one widget."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    widget_id: str
    created_at: datetime

    @classmethod
    def from_model(cls, model) -> "ChatSessionRecord":
        return cls(
            id=str(model.id),
            tenant_id=model.tenant_id,
            widget_id=str(model.widget_id),
            created_at=model.created_at,
        )


class WidgetRecord(BaseModel):
    """Full widget configuration, including operator-only fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    name: str
    primary_color: str
    position: str
    welcome_message: str
    system_prompt: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("created_at", "updated_at")
    def _serialize_dt(self, value: datetime | None) -> str | None:
        return value.isoformat() if value else None

    @classmethod
    def from_model(cls, model) -> "WidgetRecord":
        return cls(
            id=str(model.id),
            tenant_id=model.tenant_id,
            name=model.name,
            primary_color=model.primary_color,
            position=model.position,
            welcome_message=model.welcome_message,
            system_prompt=model.system_prompt,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
