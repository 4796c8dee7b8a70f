"""
API test fixtures.

Provides a TestClient over the app built with the test container.
Dependencies: fastapi.testclient
System role: HTTP-level test infrastructure
"""

import pytest
from fastapi.testclient import TestClient

from kbchat.application.container import ServiceContainer
from kbchat.main import create_app
from tests.fakes import TENANT_A


@pytest.fixture
def client(container: ServiceContainer):
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


@pytest.fixture
def widget_id(client: TestClient) -> str:
    """Active widget owned by TENANT_A."""
    response = client.post(
        "/api/v1/widgets",
        json={"name": "Support", "systemPrompt": "Only discuss our products."},
        headers={"X-Tenant-ID": TENANT_A},
    )
    assert response.status_code == 201
    return response.json()["widget"]["id"]
