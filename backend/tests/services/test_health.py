"""Health probes — liveness always 200, readiness follows the database."""

import app.infrastructure.database as db_module
from app.config import Settings, get_settings
from app.main import app


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["service"] == "cashbus-api"


async def test_readiness_with_database(client):
    app.dependency_overrides[get_settings] = lambda: Settings(siri_proxy_url=None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {
        "database": "healthy", "siri_proxy": "not_configured",
    }


async def test_readiness_reports_configured_proxy(client):
    app.dependency_overrides[get_settings] = lambda: Settings(
        siri_proxy_url="http://static-ip-proxy.test:3128",
    )
    res = await client.get("/api/v1/health/ready")
    assert res.json()["checks"]["siri_proxy"] == "configured"


async def test_readiness_without_database(client):
    db_module.db_manager = None
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"
