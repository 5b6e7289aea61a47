"""Smoke tests for health and app wiring."""

from httpx import AsyncClient

from app.infrastructure.persistence import database


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_ready_returns_503_without_database(client: AsyncClient, monkeypatch) -> None:
    """GET /api/v1/health/ready returns 503 when no engine is configured."""
    monkeypatch.setattr(database, "_ensure_engine", lambda: None)
    monkeypatch.setattr(database, "engine", None)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert "not configured" in response.json().get("message", "")


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    """X-Request-ID sent by the client comes back on the response."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers.get("X-Request-ID") == "req-123"
