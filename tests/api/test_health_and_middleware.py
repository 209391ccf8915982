from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from grid_inventory.main import create_app


@pytest.mark.asyncio
async def test_healthz_ok(app_client):
    resp = await app_client.get("/healthz")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


@pytest.mark.asyncio
async def test_readyz_ok(app_client):
    resp = await app_client.get("/readyz")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


@pytest.mark.asyncio
async def test_readyz_returns_503_before_migrations(app_client, monkeypatch):
    monkeypatch.setattr("grid_inventory.api.routers.readyz.is_migration_completed", lambda: False)

    resp = await app_client.get("/readyz")

    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "migrations_pending"


@pytest.mark.asyncio
async def test_request_id_echoes_back(app_client):
    resp = await app_client.get("/healthz", headers={"X-Request-ID": "test-123"})

    assert resp.headers.get("X-Request-ID") == "test-123"


@pytest.mark.asyncio
async def test_request_id_generated_when_missing(app_client):
    resp = await app_client.get("/healthz")

    assert resp.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_security_headers_present(app_client):
    resp = await app_client.get("/equipment")

    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(app_client):
    resp = await app_client.get("/does-not-exist")

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not Found"}


@pytest.mark.asyncio
async def test_cors_allowed_origin(monkeypatch):
    monkeypatch.setenv("ALLOW_ORIGINS", "http://localhost:5173")
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        allowed = await ac.get("/healthz", headers={"Origin": "http://localhost:5173"})
        denied = await ac.get("/healthz", headers={"Origin": "http://evil.example"})

    assert allowed.headers.get("access-control-allow-origin") == "http://localhost:5173"
    assert denied.headers.get("access-control-allow-origin") is None


@pytest.mark.asyncio
async def test_write_rate_limit(app_client, monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "1")

    for _ in range(30):
        resp = await app_client.post("/equipment-types", json={})
        assert resp.status_code == 400
    resp = await app_client.post("/equipment-types", json={})

    assert resp.status_code == 429
    assert resp.json()["detail"] == "Too Many Requests"
