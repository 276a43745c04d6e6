"""
Health check endpoint tests.

Validates the basic test infrastructure and the shared error envelope.
"""

from httpx import AsyncClient

from bio_optimizer.errors import ValidationError


class TestHealthCheck:
    """Tests for GET /api/v1/health."""

    async def test_health_returns_200(self, async_client: AsyncClient):
        """Health check endpoint returns 200 OK."""
        response = await async_client.get("/api/v1/health")
        assert response.status_code == 200

    async def test_health_returns_healthy_status(self, async_client: AsyncClient):
        """Health check returns status: healthy."""
        response = await async_client.get("/api/v1/health")
        data = response.json()
        assert data["status"] == "healthy"

    async def test_health_does_not_require_auth(self, async_client: AsyncClient):
        """Health check works without authentication."""
        response = await async_client.get("/api/v1/health")
        assert response.status_code == 200

    async def test_response_has_request_id_header(self, async_client: AsyncClient):
        """Every response carries an X-Request-ID."""
        response = await async_client.get("/api/v1/health")
        assert response.headers.get("X-Request-ID")


class TestErrorEnvelope:
    """Errors share one JSON shape."""

    async def test_unauthorized_error_shape(self, async_client: AsyncClient):
        """Service errors render code, message and request_id."""
        response = await async_client.get("/api/v1/profile-sessions")
        assert response.status_code == 401

        error = response.json()["error"]
        assert error["code"] == "UNAUTHORIZED"
        assert error["message"] == "You must be signed in to perform this action."
        assert error["request_id"] == response.headers["X-Request-ID"]

    async def test_request_validation_error_shape(
        self, async_client: AsyncClient, test_user: dict, auth_headers
    ):
        """Malformed path parameters are reported as VALIDATION_ERROR."""
        response = await async_client.get(
            "/api/v1/profile-sessions/not-a-uuid/variants",
            headers=auth_headers(test_user["api_key"]),
        )
        assert response.status_code == 422

        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["message"].startswith("path.session_id")
        assert isinstance(error["details"], list)

    def test_service_validation_error_status(self):
        """Service-level validation failures map to 422 VALIDATION_ERROR."""
        error = ValidationError("About text cannot be empty")
        assert error.status_code == 422
        assert error.code == "VALIDATION_ERROR"
        assert error.message == "About text cannot be empty"
