"""Tests for correlation ID middleware and health endpoints.

Verifies:
- X-Request-ID header in responses
- Custom correlation ID echoing and truncation
- Debug ID in error responses without internal details
- Readiness check reports database state
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from goalboard.main import app
from goalboard.middleware.correlation import (
    MAX_REQUEST_ID_LENGTH,
    is_usable_request_id,
    normalize_request_id,
)

pytestmark = pytest.mark.integration


def test_response_includes_correlation_id_header():
    """Every API response should include X-Request-ID header with valid UUID."""
    client = TestClient(app)

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "x-request-id" in response.headers
    uuid.UUID(response.headers["x-request-id"])


def test_custom_correlation_id_echoed():
    client = TestClient(app)
    custom_id = "custom-id-123"

    response = client.get("/api/health", headers={"X-Request-ID": custom_id})

    assert response.headers["x-request-id"] == custom_id


def test_long_client_id_is_truncated():
    client = TestClient(app)

    response = client.get("/api/health", headers={"X-Request-ID": "a" * 200})

    assert response.headers["x-request-id"] == "a" * MAX_REQUEST_ID_LENGTH


@pytest.mark.unit
def test_request_id_normalization():
    assert normalize_request_id("  abc  ") == "abc"
    assert not is_usable_request_id("   ")
    assert is_usable_request_id("abc")


def test_different_requests_get_different_ids():
    client = TestClient(app)

    response1 = client.get("/api/health")
    response2 = client.get("/api/health")

    assert response1.headers["x-request-id"] != response2.headers["x-request-id"]


def test_not_found_includes_debug_id(api_client: TestClient):
    response = api_client.get(f"/api/macro-goals/{uuid.uuid4()}")

    assert response.status_code == 404
    body = response.json()
    uuid.UUID(body["debug_id"])
    assert "traceback" not in response.text.lower()


def test_ready_with_database(api_client: TestClient):
    response = api_client.get("/api/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"database": True}}
