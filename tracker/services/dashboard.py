"""Per-student dashboard summaries built from a catalog snapshot."""

from __future__ import annotations

from tracker.models.dashboard import ActivityItem, DashboardStats, DeadlineItem
from tracker.models.ranking import RankedEntry
from tracker.models.snapshot import CatalogSnapshot
from tracker.services.notification_counter import count_unit_notifications
from tracker.services.rank_calculator import position_of

ACTIVITY_LIMIT = 10
DEADLINE_LIMIT = 5


def build_dashboard_stats(
    user_id: int,
    catalog: CatalogSnapshot,
    overall_ranking: list[RankedEntry],
    now_ms: int,
) -> DashboardStats:
    counts = count_unit_notifications(user_id, catalog).values()

    completed = {e.assignment_id for e in catalog.completions if e.user_id == user_id}
    known_units = {u.unit_code for u in catalog.units}
    pending = [
        a
        for a in catalog.assignments
        if a.unit_code in known_units and a.id not in completed
    ]
    overdue = sum(1 for a in pending if a.deadline < now_ms)

    return DashboardStats(
        unread_notes=sum(c.unread_notes for c in counts),
        pending_assignments=sum(c.pending_assignments for c in counts),
        unread_past_papers=sum(c.unread_past_papers for c in counts),
        overdue=overdue,
        upcoming=len(pending) - overdue,
        rank=position_of(overall_ranking, user_id),
    )


def recent_activity(
    user_id: int,
    catalog: CatalogSnapshot,
    limit: int = ACTIVITY_LIMIT,
) -> list[ActivityItem]:
    """Completions and views by the student, newest first.

    Events whose assignment, note or paper no longer exists are left out.
    """
    assignments = {a.id: a for a in catalog.assignments}
    notes = {n.id: n for n in catalog.notes}
    papers = {p.id: p for p in catalog.past_papers}

    items: list[ActivityItem] = []

    for completion in catalog.completions:
        assignment = assignments.get(completion.assignment_id)
        if completion.user_id != user_id or assignment is None:
            continue
        items.append(
            ActivityItem(
                kind="assignment",
                title=f"Completed Assignment: {assignment.title}",
                unit_code=assignment.unit_code,
                timestamp=completion.completed_at,
            )
        )

    for view in catalog.note_views:
        note = notes.get(view.resource_id)
        if view.user_id != user_id or note is None:
            continue
        items.append(
            ActivityItem(
                kind="note",
                title=f"Viewed Note: {note.title}",
                unit_code=note.unit_code,
                timestamp=view.viewed_at,
            )
        )

    for view in catalog.paper_views:
        paper = papers.get(view.resource_id)
        if view.user_id != user_id or paper is None:
            continue
        items.append(
            ActivityItem(
                kind="past_paper",
                title=f"Downloaded: {paper.title}",
                unit_code=paper.unit_code,
                timestamp=view.viewed_at,
            )
        )

    # sorted() is stable, so equal timestamps keep assignment/note/paper order
    items = sorted(items, key=lambda i: i.timestamp, reverse=True)
    return items[:limit]


def upcoming_deadlines(
    user_id: int,
    catalog: CatalogSnapshot,
    now_ms: int,
    limit: int = DEADLINE_LIMIT,
) -> list[DeadlineItem]:
    completed_at = {
        e.assignment_id: e.completed_at
        for e in catalog.completions
        if e.user_id == user_id
    }
    known_units = {u.unit_code for u in catalog.units}
    ahead = sorted(
        (
            a
            for a in catalog.assignments
            if a.unit_code in known_units and a.deadline >= now_ms
        ),
        key=lambda a: (a.deadline, a.id),
    )
    return [
        DeadlineItem(
            assignment_id=a.id,
            title=a.title,
            unit_code=a.unit_code,
            deadline=a.deadline,
            completed=a.id in completed_at,
            completed_at=completed_at.get(a.id),
        )
        for a in ahead[:limit]
    ]
