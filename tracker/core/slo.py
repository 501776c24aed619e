"""SLO (Service Level Objective) definitions for unit-tracker.

Three objectives are tracked:

  availability   — 99.5% of requests return a non-5xx status
  latency_p95    — 95% of requests finish in under 500ms
  ranking_compute — 99% of ranking computations finish in under 100ms

The evaluation functions are pure: they take counts or latencies and return
an SLOStatus. The /health endpoint feeds them from the in-process Prometheus
registry.
"""

from __future__ import annotations

from dataclasses import dataclass

# Ranking computations slower than this count against ranking_compute.
RANKING_SLOW_THRESHOLD_SECONDS = 0.1


@dataclass(frozen=True, slots=True)
class SLODefinition:
    """A single SLO target.

    name:        identifier reported on /health
    description: what the SLO measures
    target:      target percentage (99.5 means 99.5%)
    window:      rolling evaluation window (e.g. "30d")
    """

    name: str
    description: str
    target: float
    window: str


@dataclass(frozen=True, slots=True)
class SLOStatus:
    slo: SLODefinition
    current: float
    budget_remaining: float
    healthy: bool


AVAILABILITY_SLO = SLODefinition(
    name="availability",
    description="Percentage of non-5xx responses (successful requests)",
    target=99.5,
    window="30d",
)

LATENCY_SLO = SLODefinition(
    name="latency_p95",
    description="95th percentile response time under 500ms",
    target=95.0,
    window="30d",
)

RANKING_COMPUTE_SLO = SLODefinition(
    name="ranking_compute",
    description="99% of ranking computations complete within 100ms",
    target=99.0,
    window="7d",
)

ALL_SLOS = [AVAILABILITY_SLO, LATENCY_SLO, RANKING_COMPUTE_SLO]


def _ratio_status(slo: SLODefinition, total: int, bad: int) -> SLOStatus:
    # No data yet counts as fully compliant.
    current = 100.0 if total == 0 else ((total - bad) / total) * 100
    budget_remaining = current - slo.target
    return SLOStatus(
        slo=slo,
        current=round(current, 3),
        budget_remaining=round(budget_remaining, 3),
        healthy=current >= slo.target,
    )


def evaluate_availability(total_requests: int, error_requests: int) -> SLOStatus:
    """availability = (total - errors) / total × 100

    10,000 total, 10 errors  → 99.9% → healthy
    10,000 total, 100 errors → 99.0% → breached
    """
    return _ratio_status(AVAILABILITY_SLO, total_requests, error_requests)


def evaluate_latency(p95_ms: float) -> SLOStatus:
    """Approximate the share of requests under 500ms from a p95 estimate.

    A p95 at or under the threshold means at least 95% of requests were
    fast enough; above it, the estimate falls off linearly.
    """
    threshold_ms = 500.0
    if p95_ms <= threshold_ms:
        current = 95.0 + (threshold_ms - p95_ms) / threshold_ms * 5.0
        current = min(current, 100.0)
    else:
        current = max(0.0, 95.0 - (p95_ms - threshold_ms) / threshold_ms * 95.0)

    budget_remaining = current - LATENCY_SLO.target
    return SLOStatus(
        slo=LATENCY_SLO,
        current=round(current, 3),
        budget_remaining=round(budget_remaining, 3),
        healthy=current >= LATENCY_SLO.target,
    )


def evaluate_ranking_compute(total_rankings: int, slow_rankings: int) -> SLOStatus:
    """Share of ranking computations under RANKING_SLOW_THRESHOLD_SECONDS."""
    return _ratio_status(RANKING_COMPUTE_SLO, total_rankings, slow_rankings)
