"""Health and readiness endpoints.

  /health — liveness plus dependency status and SLO compliance. Always
            200; the ``status`` field says "ok" or "degraded".
  /ready  — 503 when a configured database cannot be reached, so the load
            balancer stops routing here without restarting the process.

SLO values come from this process's Prometheus registry, so with several
replicas each one reports only its own share of traffic.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status
from prometheus_client import REGISTRY
from sqlalchemy import text

from tracker.core.slo import (
    evaluate_availability,
    evaluate_latency,
    evaluate_ranking_compute,
)
from tracker.db.engine import engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _sum_samples(sample_name: str, label_filter: dict | None = None) -> float:
    """Sum a metric's samples across every label combination matching the filter."""
    total = 0.0
    for metric in REGISTRY.collect():
        for sample in metric.samples:
            if sample.name != sample_name:
                continue
            if label_filter and not all(
                sample.labels.get(k) == v for k, v in label_filter.items()
            ):
                continue
            total += sample.value
    return total


async def _check_database() -> str:
    if engine is None:
        return "not_configured"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database health check failed")
        return "degraded"
    return "ok"


@router.get("/health")
async def health() -> dict:
    checks = {"database": await _check_database()}
    overall = "degraded" if "degraded" in checks.values() else "ok"

    total_all = _sum_samples("http_requests_total")
    total_5xx = sum(
        _sum_samples("http_requests_total", {"status_code": str(code)})
        for code in range(500, 512)
    )
    availability_status = evaluate_availability(int(total_all), int(total_5xx))

    # p95 approximated as twice the mean; the client library only exposes
    # histogram sum and count in-process.
    duration_sum = _sum_samples("http_request_duration_seconds_sum")
    duration_count = _sum_samples("http_request_duration_seconds_count")
    if duration_count > 0:
        p95_estimate_ms = (duration_sum / duration_count) * 1000 * 2.0
    else:
        p95_estimate_ms = 0.0
    latency_status = evaluate_latency(p95_estimate_ms)

    ranking_status = evaluate_ranking_compute(
        total_rankings=int(_sum_samples("tracker_rankings_computed_total")),
        slow_rankings=int(_sum_samples("tracker_slow_rankings_total")),
    )

    slos = {}
    for s in [availability_status, latency_status, ranking_status]:
        slos[s.slo.name] = {
            "current": s.current,
            "target": s.slo.target,
            "healthy": s.healthy,
        }

    return {
        "status": overall,
        "checks": checks,
        "slos": slos,
    }


@router.get("/ready")
async def ready() -> Response:
    if await _check_database() == "degraded":
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(status_code=status.HTTP_200_OK)
