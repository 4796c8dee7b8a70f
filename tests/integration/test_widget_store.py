"""
Integration tests for WidgetConfigStore against SQLite.

System role: Verification of widget configuration persistence
"""

import uuid

import pytest

from kbchat.boundary.db.widget_store import WidgetConfigStore
from tests.fakes import TENANT_A, TENANT_B


class TestWidgetConfigStore:
    @pytest.mark.asyncio
    async def test_create_should_apply_defaults(self, widget_store: WidgetConfigStore) -> None:
        widget = await widget_store.create(TENANT_A, name="Support")

        assert widget.name == "Support"
        assert widget.primary_color == "#3B82F6"
        assert widget.position == "bottom-right"
        assert widget.is_active is True
        assert widget.system_prompt is None

    @pytest.mark.asyncio
    async def test_get_active_should_hide_inactive_widgets(self, widget_store: WidgetConfigStore) -> None:
        widget = await widget_store.create(TENANT_A, name="Support", is_active=False)

        assert await widget_store.get_active(TENANT_A, widget.id) is None
        assert (await widget_store.get(TENANT_A, widget.id)).id == widget.id

    @pytest.mark.asyncio
    async def test_widgets_should_be_tenant_scoped(self, widget_store: WidgetConfigStore) -> None:
        widget = await widget_store.create(TENANT_A, name="Support")

        assert await widget_store.get_active(TENANT_B, widget.id) is None
        assert await widget_store.list(TENANT_B) == []
        assert await widget_store.update(TENANT_B, widget.id, name="Hijacked") is None
        assert await widget_store.delete(TENANT_B, widget.id) is False

    @pytest.mark.asyncio
    async def test_update_should_change_only_given_fields(self, widget_store: WidgetConfigStore) -> None:
        widget = await widget_store.create(TENANT_A, name="Support", welcome_message="Hello!")

        updated = await widget_store.update(TENANT_A, widget.id, name="Sales")

        assert updated.name == "Sales"
        assert updated.welcome_message == "Hello!"

    @pytest.mark.asyncio
    async def test_delete_should_remove_widget(self, widget_store: WidgetConfigStore) -> None:
        widget = await widget_store.create(TENANT_A, name="Support")

        assert await widget_store.delete(TENANT_A, widget.id) is True
        assert await widget_store.get(TENANT_A, widget.id) is None

    @pytest.mark.asyncio
    async def test_unknown_or_invalid_ids_should_return_none(self, widget_store: WidgetConfigStore) -> None:
        assert await widget_store.get_active(TENANT_A, str(uuid.uuid4())) is None
        assert await widget_store.get_active(TENANT_A, "not-a-uuid") is None
