from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DashboardStats:
    unread_notes: int
    pending_assignments: int
    unread_past_papers: int
    overdue: int  # pending with deadline already passed
    upcoming: int  # pending with deadline still ahead
    rank: int | None  # overall leaderboard position, None if unranked


@dataclass(frozen=True, slots=True)
class ActivityItem:
    kind: str  # assignment|note|past_paper
    title: str
    unit_code: str
    timestamp: int


@dataclass(frozen=True, slots=True)
class DeadlineItem:
    assignment_id: int
    title: str
    unit_code: str
    deadline: int
    completed: bool
    completed_at: int | None = None
