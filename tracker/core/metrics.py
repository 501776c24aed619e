"""Prometheus metric inventory for unit-tracker.

All metrics are declared here and imported by the modules that own the
behaviour being measured, so the full list lives in one place.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Ranking / notification engine
# ---------------------------------------------------------------------------

RANKINGS_COMPUTED = Counter(
    "tracker_rankings_computed_total",
    "Ranking computations by scope",
    ["scope"],  # "unit" or "overall"
)

RANKING_DURATION = Histogram(
    "tracker_ranking_duration_seconds",
    "Time spent aggregating and ranking a snapshot (excludes snapshot I/O)",
    ["scope"],
    # Target scale is tens of units and low hundreds of users, so anything
    # past 100ms means the snapshot has outgrown the in-memory approach.
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0],
)

SLOW_RANKINGS = Counter(
    "tracker_slow_rankings_total",
    "Ranking computations slower than the ranking SLO threshold",
    ["scope"],
)

COMPLETIONS_SKIPPED = Counter(
    "tracker_completions_skipped_total",
    "Completion events dropped during aggregation",
    ["reason"],  # missing_assignment|unknown_student|negative_elapsed
)

NOTIFICATION_COUNTS = Counter(
    "tracker_notification_counts_total",
    "Per-unit notification count computations",
)
