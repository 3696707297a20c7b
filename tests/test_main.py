"""
Unit tests for main application endpoints.
"""


class TestHealthCheck:
    """Tests for health check endpoint."""

    def test_health_check(self, client):
        """Test the health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestApplicationSetup:
    """Tests for application configuration."""

    def test_app_title(self, client):
        """Test that the app has correct title."""
        response = client.get("/openapi.json")
        assert response.status_code == 200
        assert "StayHub" in response.json()["info"]["title"]

    def test_routes_mounted_under_api(self, client):
        """Test that business routes live under /api."""
        paths = client.get("/openapi.json").json()["paths"]
        for path in (
            "/api/hotels",
            "/api/bookings",
            "/api/booking-requests",
            "/api/admin/bookings",
            "/api/provider-applications",
            "/api/profile",
        ):
            assert path in paths

    def test_docs_endpoint_exists(self, client):
        """Test that API documentation endpoint is accessible."""
        response = client.get("/docs")
        assert response.status_code == 200
