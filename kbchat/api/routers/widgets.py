"""
Widget management endpoints.

Routes: GET /widgets, POST /widgets, GET /widgets/{id}, PUT /widgets/{id},
    PATCH /widgets/{id}/active, DELETE /widgets/{id}

Dependencies: kbchat.application.services.widget_service, kbchat.models.widget
System role: Tenant widget management HTTP API
"""

from fastapi import APIRouter, Depends

from kbchat.api.deps import get_tenant_id, get_widget_service
from kbchat.api.routers.router_utils import error_response
from kbchat.application.services.widget_service import WidgetService
from kbchat.boundary.db.records import WidgetRecord
from kbchat.core.exceptions import WidgetNotFound
from kbchat.models.widget import WidgetActiveUpdate, WidgetCreate, WidgetResponse, WidgetUpdate

router = APIRouter(prefix="/widgets", tags=["widgets"])

WIDGET_NOT_FOUND = "Widget not found"


def _to_response(widget: WidgetRecord) -> dict:
    return WidgetResponse.model_validate(widget.model_dump()).model_dump(by_alias=True)


@router.get("")
async def list_widgets(
    tenant_id: str = Depends(get_tenant_id),
    service: WidgetService = Depends(get_widget_service),
):
    widgets = await service.list_widgets(tenant_id)
    return {"success": True, "widgets": [_to_response(w) for w in widgets]}


@router.post("", status_code=201)
async def create_widget(
    request: WidgetCreate,
    tenant_id: str = Depends(get_tenant_id),
    service: WidgetService = Depends(get_widget_service),
):
    """
    Create a widget for the tenant.

    Returns:
        dict: {"success": true, "widget": WidgetResponse}
    """
    widget = await service.create_widget(tenant_id, **request.model_dump())
    return {"success": True, "widget": _to_response(widget)}


@router.get("/{widget_id}")
async def get_widget(
    widget_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: WidgetService = Depends(get_widget_service),
):
    try:
        widget = await service.get_widget(tenant_id, widget_id)
    except WidgetNotFound:
        return error_response(404, WIDGET_NOT_FOUND)
    return {"success": True, "widget": _to_response(widget)}


@router.put("/{widget_id}")
async def update_widget(
    widget_id: str,
    request: WidgetUpdate,
    tenant_id: str = Depends(get_tenant_id),
    service: WidgetService = Depends(get_widget_service),
):
    """Update the supplied fields; omitted fields are unchanged."""
    # system_prompt is the only field that may be cleared with null
    fields = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key == "system_prompt"
    }
    try:
        widget = await service.update_widget(tenant_id, widget_id, **fields)
    except WidgetNotFound:
        return error_response(404, WIDGET_NOT_FOUND)
    return {"success": True, "widget": _to_response(widget)}


@router.patch("/{widget_id}/active")
async def set_widget_active(
    widget_id: str,
    request: WidgetActiveUpdate,
    tenant_id: str = Depends(get_tenant_id),
    service: WidgetService = Depends(get_widget_service),
):
    try:
        widget = await service.set_active(tenant_id, widget_id, request.is_active)
    except WidgetNotFound:
        return error_response(404, WIDGET_NOT_FOUND)
    return {"success": True, "widget": _to_response(widget)}


@router.delete("/{widget_id}")
async def delete_widget(
    widget_id: str,
    tenant_id: str = Depends(get_tenant_id),
    service: WidgetService = Depends(get_widget_service),
):
    try:
        await service.delete_widget(tenant_id, widget_id)
    except WidgetNotFound:
        return error_response(404, WIDGET_NOT_FOUND)
    return {"success": True}
