# tests/test_health.py
from fastapi.testclient import TestClient


def test_health_check(client: TestClient) -> None:
    """The health endpoint answers without touching the database."""
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_root_lists_entry_points(client: TestClient) -> None:
    """The root endpoint points at both API surfaces."""
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["rest"] == "/api/posts"
    assert data["graphql"] == "/graphql"
