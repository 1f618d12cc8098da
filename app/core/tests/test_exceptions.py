"""Tests for the exception hierarchy and the JSON error envelope."""

import pytest

from app.core.exceptions import (
    BadRequestError,
    ConfigurationMissingError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    StorefrontError,
    UnauthorizedError,
    UpstreamFailureError,
    ValidationMissingError,
)


class TestExceptionHierarchy:
    """Each error kind carries its status code and machine code."""

    @pytest.mark.parametrize(
        ("exc_class", "status_code", "code"),
        [
            (NotFoundError, 404, "NOT_FOUND"),
            (ValidationMissingError, 400, "VALIDATION_MISSING"),
            (BadRequestError, 400, "BAD_REQUEST"),
            (UnauthorizedError, 401, "UNAUTHORIZED"),
            (ConflictError, 409, "CONFLICT"),
            (ConfigurationMissingError, 500, "CONFIGURATION_MISSING"),
            (UpstreamFailureError, 500, "UPSTREAM_FAILURE"),
            (DatabaseError, 500, "DATABASE_ERROR"),
        ],
    )
    def test_status_and_code(self, exc_class, status_code, code):
        """Status codes match the published error table."""
        exc = exc_class()

        assert isinstance(exc, StorefrontError)
        assert exc.status_code == status_code
        assert exc.code == code

    def test_message_and_details(self):
        """Message is kept verbatim and details default to an empty dict."""
        exc = NotFoundError("Product Not Found")

        assert exc.message == "Product Not Found"
        assert str(exc) == "Product Not Found"
        assert exc.details == {}


@pytest.mark.integration
class TestErrorEnvelope:
    """Handlers answer with {success: false, message, code, requestId}."""

    async def test_storefront_error_envelope(self, client):
        """Application errors keep their message and status."""
        response = await client.get(
            "/api/v1/product/does-not-exist",
            headers={"X-Request-ID": "req-42"},
        )

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Product Not Found",
            "code": "NOT_FOUND",
            "requestId": "req-42",
        }

    async def test_validation_error_is_400(self, client):
        """Malformed bodies are reported as a missing/invalid field."""
        response = await client.post("/api/v1/product/review/new/p1?id=u1", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "VALIDATION_MISSING"
        assert "rating" in body["message"]

    async def test_unknown_route_uses_envelope(self, client):
        """Framework 404s are wrapped in the same envelope."""
        response = await client.get("/api/v1/nowhere")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "NOT_FOUND"
