"""Tests for health check endpoints."""

import pytest

from app.core.config import get_settings


@pytest.mark.asyncio
async def test_health_check_returns_ok(client):
    """Liveness answers without checking any dependency."""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_health_check_includes_request_id_header(client):
    """Health endpoint should include X-Request-ID in response."""
    response = await client.get("/health")

    assert "X-Request-ID" in response.headers
    assert len(response.headers["X-Request-ID"]) > 0


@pytest.mark.asyncio
async def test_readiness_check_reports_dependencies(client):
    """Database, photo storage and payments are all reported."""
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "database": "connected",
        "object_storage": "configured",
        "payments": "configured",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("env_name", "field"),
    [("STRIPE_KEY", "payments"), ("CLOUD_API_SECRET", "object_storage")],
)
async def test_readiness_degraded_without_credentials(client, monkeypatch, env_name, field):
    """A missing credential degrades readiness but keeps the database check."""
    monkeypatch.setenv(env_name, "")
    get_settings.cache_clear()

    response = await client.get("/health/ready")

    data = response.json()
    assert response.status_code == 200
    assert data["status"] == "degraded"
    assert data["database"] == "connected"
    assert data[field] == "missing"
