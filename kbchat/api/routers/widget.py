"""
Public widget configuration endpoint.

Routes: GET /widget/{widget_id}

Unauthenticated; called by the embed script on page load. Only active
widgets are served and only non-sensitive fields are returned.

Dependencies: kbchat.application.services.widget_service
System role: Public widget HTTP API
"""

from fastapi import APIRouter, Depends, Query

from kbchat.api.deps import get_widget_service
from kbchat.api.routers.router_utils import error_response
from kbchat.application.services.widget_service import WidgetService
from kbchat.core.exceptions import WidgetNotFound
from kbchat.models.widget import PublicWidgetConfig

router = APIRouter(prefix="/widget", tags=["widget"])


@router.get("/{widget_id}")
async def get_public_widget(
    widget_id: str,
    tenant_id: str = Query(alias="tenantId", min_length=1),
    service: WidgetService = Depends(get_widget_service),
):
    """
    Get the public configuration of an active widget.

    Returns:
        dict: {"success": true, "config": PublicWidgetConfig}
    """
    try:
        config = await service.get_public(tenant_id, widget_id)
    except WidgetNotFound:
        return error_response(404, "Widget not found or inactive")
    return {
        "success": True,
        "config": PublicWidgetConfig.model_validate(config).model_dump(by_alias=True),
    }
