"""Tests for health endpoints."""


async def test_root_health_check(async_client):
    response = await async_client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


async def test_api_health_check(async_client):
    response = await async_client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "uptime_seconds" in data
    assert response.headers["X-Request-ID"]


async def test_unknown_route_has_standard_error_body(async_client):
    response = await async_client.get("/api/nope")
    assert response.status_code == 404
    data = response.json()
    assert data["error_code"] == "NOT_FOUND"
    assert data["path"] == "/api/nope"
