"""
Test suite for the widget endpoints.

Covers tenant widget management and the public configuration lookup.

System role: Verification of the widget HTTP contract
"""

import uuid

from fastapi.testclient import TestClient

from tests.fakes import TENANT_A, TENANT_B

WIDGETS_URL = "/api/v1/widgets"
HEADERS_A = {"X-Tenant-ID": TENANT_A}


class TestPublicWidget:
    def test_public_config_should_omit_operator_fields(self, client: TestClient, widget_id: str) -> None:
        response = client.get(f"/api/v1/widget/{widget_id}", params={"tenantId": TENANT_A})

        assert response.status_code == 200
        config = response.json()["config"]
        assert config == {
            "widgetId": widget_id,
            "tenantId": TENANT_A,
            "title": "Support",
            "primaryColor": "#3B82F6",
            "position": "bottom-right",
            "welcomeMessage": "Hi! How can I help you today?",
        }
        assert "systemPrompt" not in config

    def test_inactive_widget_should_return_404(self, client: TestClient, widget_id: str) -> None:
        client.patch(f"{WIDGETS_URL}/{widget_id}/active", json={"isActive": False}, headers=HEADERS_A)

        response = client.get(f"/api/v1/widget/{widget_id}", params={"tenantId": TENANT_A})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Widget not found or inactive"}

    def test_wrong_tenant_should_return_404(self, client: TestClient, widget_id: str) -> None:
        response = client.get(f"/api/v1/widget/{widget_id}", params={"tenantId": TENANT_B})

        assert response.status_code == 404

    def test_missing_tenant_should_return_400(self, client: TestClient, widget_id: str) -> None:
        response = client.get(f"/api/v1/widget/{widget_id}")

        assert response.status_code == 400


class TestWidgetManagement:
    def test_owner_should_see_system_prompt(self, client: TestClient, widget_id: str) -> None:
        response = client.get(f"{WIDGETS_URL}/{widget_id}", headers=HEADERS_A)

        widget = response.json()["widget"]
        assert widget["systemPrompt"] == "Only discuss our products."
        assert widget["isActive"] is True

    def test_list_should_be_tenant_scoped(self, client: TestClient, widget_id: str) -> None:
        own = client.get(WIDGETS_URL, headers=HEADERS_A).json()["widgets"]
        other = client.get(WIDGETS_URL, headers={"X-Tenant-ID": TENANT_B}).json()["widgets"]

        assert [w["id"] for w in own] == [widget_id]
        assert other == []

    def test_update_should_change_given_fields_only(self, client: TestClient, widget_id: str) -> None:
        response = client.put(f"{WIDGETS_URL}/{widget_id}", json={"primaryColor": "#111111"}, headers=HEADERS_A)

        widget = response.json()["widget"]
        assert widget["primaryColor"] == "#111111"
        assert widget["systemPrompt"] == "Only discuss our products."

    def test_update_can_clear_system_prompt(self, client: TestClient, widget_id: str) -> None:
        response = client.put(f"{WIDGETS_URL}/{widget_id}", json={"systemPrompt": None}, headers=HEADERS_A)

        assert response.json()["widget"]["systemPrompt"] is None

    def test_invalid_color_should_return_400(self, client: TestClient) -> None:
        response = client.post(WIDGETS_URL, json={"primaryColor": "blue"}, headers=HEADERS_A)

        assert response.status_code == 400

    def test_delete_should_remove_widget(self, client: TestClient, widget_id: str) -> None:
        assert client.delete(f"{WIDGETS_URL}/{widget_id}", headers={"X-Tenant-ID": TENANT_B}).status_code == 404

        assert client.delete(f"{WIDGETS_URL}/{widget_id}", headers=HEADERS_A).json() == {"success": True}
        assert client.get(f"{WIDGETS_URL}/{widget_id}", headers=HEADERS_A).status_code == 404

    def test_unknown_widget_should_return_404(self, client: TestClient) -> None:
        response = client.get(f"{WIDGETS_URL}/{uuid.uuid4()}", headers=HEADERS_A)

        assert response.status_code == 404

    def test_requests_without_tenant_should_return_401(self, client: TestClient) -> None:
        assert client.get(WIDGETS_URL).status_code == 401
