"""
Tests for health check endpoints and the HTTP middlewares.
"""


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "cafe-api"
        assert data["environment"] == "test"

    def test_detailed_health_without_publishing(self, client):
        response = client.get("/api/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"] == {"database": "healthy", "redis": "disabled"}
        assert data["event_circuit_breaker"]["state"] == "closed"


class TestMiddlewares:

    def test_security_headers(self, client):
        response = client.get("/api/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]
        assert "Strict-Transport-Security" not in response.headers

    def test_request_id_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_generated(self, client):
        response = client.get("/api/health")

        assert len(response.headers["X-Request-ID"]) == 36

    def test_non_json_body_rejected(self, client):
        response = client.post(
            "/api/auth/login",
            content="email=a@test.com",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 415

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/orders",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
