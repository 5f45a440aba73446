"""
Integration tests for health and readiness endpoints.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from hotelhub.main import app

client = TestClient(app)


@pytest.mark.integration
def test_health_endpoint_returns_ok():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.integration
def test_readiness_endpoint_returns_ready_when_db_accessible():
    response = client.get("/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "ok"
    assert set(data["checks"]) == {"database", "payments", "voice_agent"}


@pytest.mark.integration
def test_readiness_endpoint_returns_503_when_db_not_accessible():
    with patch("hotelhub.routes.health.check_engine_health") as mock_health:
        mock_health.return_value = False

        response = client.get("/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not ready"
        assert data["checks"]["database"] == "failed"


@pytest.mark.integration
@patch("hotelhub.routes.health.config.STRIPE_SECRET_KEY", None)
def test_readiness_ignores_missing_payment_config():
    """Bookings work without Stripe, so readiness only depends on the database."""
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["payments"] == "not configured"
