from __future__ import annotations

import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import foh.api.routes.health as health_route
from foh.api.main import app


def test_live_health_endpoint() -> None:
    client = TestClient(app)
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_health_endpoint_healthy_with_mocks(monkeypatch) -> None:
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    monkeypatch.setattr(health_route, "ping_store", lambda: True)
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: True)

    client = TestClient(app)
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_ignores_redis_when_not_configured(monkeypatch) -> None:
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.setattr(health_route, "ping_store", lambda: True)

    def unexpected(timeout_seconds=1.0):
        raise AssertionError("redis should not be pinged")

    monkeypatch.setattr(health_route, "ping_redis", unexpected)

    response = TestClient(app).get("/health/ready")
    assert response.status_code == 200


def test_ready_reports_failed_checks(monkeypatch) -> None:
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    monkeypatch.setattr(health_route, "ping_store", lambda: False)
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: True)

    response = TestClient(app).get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {
        "status": "unavailable",
        "checks": {"store": False, "redis": True},
    }


def test_metrics_endpoint_exposes_action_counter() -> None:
    response = TestClient(app).get("/metrics")
    assert response.status_code == 200
    assert "foh_actions_total" in response.text
