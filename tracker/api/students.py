"""Per-student views: unit badges, dashboard summary, activity, deadlines."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from tracker.api.dependencies import get_leaderboard_service, require_student
from tracker.api.schemas import (
    ActivityOut,
    DashboardOut,
    DeadlineOut,
    UnitNotificationOut,
)
from tracker.models.student import Student
from tracker.services.leaderboard_service import LeaderboardService

router = APIRouter(prefix="/v1/students", tags=["students"])


@router.get("/{user_id}/notifications", response_model=list[UnitNotificationOut])
async def get_unit_notifications(
    student: Annotated[Student, Depends(require_student)],
    service: Annotated[LeaderboardService, Depends(get_leaderboard_service)],
) -> list[UnitNotificationOut]:
    counts = await service.compute_unit_notification_counts(student.id)
    return [UnitNotificationOut.from_count(c) for c in counts.values()]


@router.get("/{user_id}/dashboard", response_model=DashboardOut)
async def get_dashboard(
    student: Annotated[Student, Depends(require_student)],
    service: Annotated[LeaderboardService, Depends(get_leaderboard_service)],
) -> DashboardOut:
    return DashboardOut.from_stats(await service.dashboard_stats(student.id))


@router.get("/{user_id}/activity", response_model=list[ActivityOut])
async def get_activity(
    student: Annotated[Student, Depends(require_student)],
    service: Annotated[LeaderboardService, Depends(get_leaderboard_service)],
) -> list[ActivityOut]:
    items = await service.recent_activity(student.id)
    return [ActivityOut.from_item(i) for i in items]


@router.get("/{user_id}/deadlines", response_model=list[DeadlineOut])
async def get_deadlines(
    student: Annotated[Student, Depends(require_student)],
    service: Annotated[LeaderboardService, Depends(get_leaderboard_service)],
) -> list[DeadlineOut]:
    items = await service.upcoming_deadlines(student.id)
    return [DeadlineOut.from_item(i) for i in items]
