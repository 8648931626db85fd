"""
Integration tests for health and service endpoints.
"""

import pytest

pytestmark = pytest.mark.integration


class TestHealthRoutes:
    """Integration tests for probes and service metadata."""

    async def test_liveness(self, client):
        response = await client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_readiness(self, client):
        response = await client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "checks": {"database": True}}

    async def test_readiness_without_database(self, client, test_db):
        await test_db.disconnect()

        response = await client.get("/api/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    async def test_root(self, client, settings):
        body = (await client.get("/")).json()

        assert body["service"] == "Splyt"
        assert body["version"] == settings.APP_VERSION

    async def test_health_reports_registry(self, client):
        body = (await client.get("/health")).json()

        assert body["status"] == "healthy"
        assert body["components"]["blockchain"] == {
            "enabled": False,
            "registry": "PlaceholderSplitRegistry",
        }

    async def test_request_id_echoed(self, client):
        response = await client.get(
            "/api/health/live", headers={"X-Request-ID": "req-123"}
        )

        assert response.headers["X-Request-ID"] == "req-123"

    async def test_metrics(self, client):
        await client.get("/api/health/live")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "splyt_http_requests_total" in response.text
