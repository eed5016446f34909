"""Welcome text, liveness and readiness checks."""

from campspot.infrastructure.database import Database


async def test_root_returns_welcome_text(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert "Welcome" in res.text


async def test_liveness(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_returns_503_when_database_unreachable(client, monkeypatch):
    async def _unhealthy(self):
        return False

    monkeypatch.setattr(Database, "health_check", _unhealthy)
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_cors_allows_configured_origin_only(client):
    allowed = await client.options("/api/camping-spots", headers={
        "Origin": "http://localhost:8080",
        "Access-Control-Request-Method": "GET",
    })
    assert allowed.headers["access-control-allow-origin"] == "http://localhost:8080"

    denied = await client.options("/api/camping-spots", headers={
        "Origin": "http://evil.example",
        "Access-Control-Request-Method": "GET",
    })
    assert "access-control-allow-origin" not in denied.headers
