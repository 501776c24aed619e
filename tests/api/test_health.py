from __future__ import annotations

from fastapi.testclient import TestClient


def test_health_returns_ok(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    # No DATABASE_URL in tests
    assert data["checks"]["database"] == "not_configured"


def test_health_includes_slo_status(client: TestClient) -> None:
    data = client.get("/health").json()
    for slo_name in ("availability", "latency_p95", "ranking_compute"):
        slo = data["slos"][slo_name]
        assert "current" in slo
        assert "target" in slo
        assert "healthy" in slo


def test_ready_returns_200(client: TestClient) -> None:
    resp = client.get("/ready")
    assert resp.status_code == 200
