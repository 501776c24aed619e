"""Pydantic response models for the read-only HTTP surface."""

from __future__ import annotations

from pydantic import BaseModel

from tracker.models.dashboard import ActivityItem, DashboardStats, DeadlineItem
from tracker.models.notifications import UnitNotificationCount
from tracker.models.ranking import CompletionDetail, RankedEntry
from tracker.services.durations import format_duration


class CompletionOut(BaseModel):
    assignment_id: int
    title: str
    created_at: int
    completed_at: int
    elapsed_ms: int
    completion_time: str

    @classmethod
    def from_detail(cls, detail: CompletionDetail) -> CompletionOut:
        return cls(
            assignment_id=detail.assignment_id,
            title=detail.title,
            created_at=detail.created_at,
            completed_at=detail.completed_at,
            elapsed_ms=detail.elapsed_ms,
            completion_time=format_duration(detail.elapsed_ms),
        )


class RankedEntryOut(BaseModel):
    position: int
    user_id: int
    name: str
    profile_image_url: str | None
    completed_count: int
    average_elapsed_ms: float
    average_completion_time: str
    recent_completions: list[CompletionOut]

    @classmethod
    def from_entry(cls, entry: RankedEntry) -> RankedEntryOut:
        return cls(
            position=entry.position,
            user_id=entry.user_id,
            name=entry.name,
            profile_image_url=entry.profile_image_url,
            completed_count=entry.completed_count,
            average_elapsed_ms=entry.average_elapsed_ms,
            average_completion_time=format_duration(entry.average_elapsed_ms),
            recent_completions=[
                CompletionOut.from_detail(c) for c in entry.recent_completions
            ],
        )


class UnitNotificationOut(BaseModel):
    unit_code: str
    unread_notes: int
    pending_assignments: int
    unread_past_papers: int
    total: int

    @classmethod
    def from_count(cls, count: UnitNotificationCount) -> UnitNotificationOut:
        return cls(
            unit_code=count.unit_code,
            unread_notes=count.unread_notes,
            pending_assignments=count.pending_assignments,
            unread_past_papers=count.unread_past_papers,
            total=count.total,
        )


class DashboardOut(BaseModel):
    unread_notes: int
    pending_assignments: int
    unread_past_papers: int
    overdue: int
    upcoming: int
    rank: int | None

    @classmethod
    def from_stats(cls, stats: DashboardStats) -> DashboardOut:
        return cls(
            unread_notes=stats.unread_notes,
            pending_assignments=stats.pending_assignments,
            unread_past_papers=stats.unread_past_papers,
            overdue=stats.overdue,
            upcoming=stats.upcoming,
            rank=stats.rank,
        )


class ActivityOut(BaseModel):
    kind: str
    title: str
    unit_code: str
    timestamp: int

    @classmethod
    def from_item(cls, item: ActivityItem) -> ActivityOut:
        return cls(
            kind=item.kind,
            title=item.title,
            unit_code=item.unit_code,
            timestamp=item.timestamp,
        )


class DeadlineOut(BaseModel):
    assignment_id: int
    title: str
    unit_code: str
    deadline: int
    completed: bool
    completed_at: int | None

    @classmethod
    def from_item(cls, item: DeadlineItem) -> DeadlineOut:
        return cls(
            assignment_id=item.assignment_id,
            title=item.title,
            unit_code=item.unit_code,
            deadline=item.deadline,
            completed=item.completed,
            completed_at=item.completed_at,
        )
