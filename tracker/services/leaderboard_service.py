"""Snapshot-in, view-out entry points for the API layer.

Each call reads a fresh snapshot from the repo and recomputes from
scratch. Nothing is cached between calls, so two requests racing a new
completion may briefly disagree; the next read converges.
"""

from __future__ import annotations

import datetime
import logging
import time

from tracker.core.metrics import RANKING_DURATION, RANKINGS_COMPUTED, SLOW_RANKINGS
from tracker.core.slo import RANKING_SLOW_THRESHOLD_SECONDS
from tracker.models.dashboard import ActivityItem, DashboardStats, DeadlineItem
from tracker.models.notifications import UnitNotificationCount
from tracker.models.ranking import RankedEntry
from tracker.models.snapshot import UnitSnapshot
from tracker.repos.snapshot_repo import SnapshotRepo
from tracker.services.completion_aggregator import aggregate_completions
from tracker.services.dashboard import (
    build_dashboard_stats,
    recent_activity,
    upcoming_deadlines,
)
from tracker.services.notification_counter import count_unit_notifications
from tracker.services.rank_calculator import rank_students

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(datetime.datetime.now(datetime.UTC).timestamp() * 1000)


def _rank(snapshot: UnitSnapshot, scope: str, unit_code: str | None) -> list[RankedEntry]:
    start = time.monotonic()
    ranking = rank_students(aggregate_completions(snapshot, unit_code))
    duration = time.monotonic() - start

    RANKINGS_COMPUTED.labels(scope=scope).inc()
    RANKING_DURATION.labels(scope=scope).observe(duration)
    if duration > RANKING_SLOW_THRESHOLD_SECONDS:
        SLOW_RANKINGS.labels(scope=scope).inc()
        logger.warning(
            "Slow ranking scope=%s assignments=%d completions=%d took=%.1fms",
            scope,
            len(snapshot.assignments),
            len(snapshot.completions),
            duration * 1000,
            extra={"unit_code": unit_code},
        )
    return ranking


class LeaderboardService:
    def __init__(self, repo: SnapshotRepo, *, clock=_now_ms) -> None:
        self._repo = repo
        self._clock = clock

    async def compute_unit_ranking(self, unit_code: str) -> list[RankedEntry]:
        """Full leaderboard for one unit, fastest average completion first.

        Returns an empty list when the unit has no assignments.
        """
        snapshot = await self._repo.unit_snapshot(unit_code)
        if not snapshot.assignments:
            return []
        ranking = _rank(snapshot, "unit", unit_code)
        logger.debug(
            "Ranked unit=%s students=%d",
            unit_code,
            len(ranking),
            extra={"unit_code": unit_code},
        )
        return ranking

    async def compute_overall_ranking(self) -> list[RankedEntry]:
        """Leaderboard across every unit's assignments."""
        snapshot = await self._repo.overall_snapshot()
        if not snapshot.assignments:
            return []
        return _rank(snapshot, "overall", None)

    async def compute_unit_notification_counts(
        self, user_id: int
    ) -> dict[str, UnitNotificationCount]:
        catalog = await self._repo.catalog_snapshot(user_id)
        return count_unit_notifications(user_id, catalog)

    async def dashboard_stats(self, user_id: int) -> DashboardStats:
        catalog = await self._repo.catalog_snapshot(user_id)
        overall = await self.compute_overall_ranking()
        return build_dashboard_stats(user_id, catalog, overall, self._clock())

    async def recent_activity(self, user_id: int) -> list[ActivityItem]:
        catalog = await self._repo.catalog_snapshot(user_id)
        return recent_activity(user_id, catalog)

    async def upcoming_deadlines(self, user_id: int) -> list[DeadlineItem]:
        catalog = await self._repo.catalog_snapshot(user_id)
        return upcoming_deadlines(user_id, catalog, self._clock())
