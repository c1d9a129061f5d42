"""Tests for the HTTP side-car."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_order_repository
from api.main import app


class StubRepository:
    def __init__(self, healthy: bool):
        self.healthy = healthy

    async def ping(self) -> bool:
        return self.healthy


@pytest.fixture
def client():
    # No context manager: lifespan (Redis, database) is not started
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


def test_health_ok(client):
    app.dependency_overrides[get_order_repository] = lambda: StubRepository(healthy=True)

    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["checks"] == {"database": "ok"}


def test_health_database_down(client):
    app.dependency_overrides[get_order_repository] = lambda: StubRepository(healthy=False)

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"
    assert response.json()["service"] == "orders-service"
