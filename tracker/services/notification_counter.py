"""Per-unit badge counts for one student.

For every unit in the catalog:

  unread_notes        = notes the student has not viewed
  unread_past_papers  = past papers the student has not viewed
  pending_assignments = assignments the student has not completed

Recomputed from the full catalog on every call, O(units + resources).
"""

from __future__ import annotations

from collections.abc import Iterable

from tracker.core.metrics import NOTIFICATION_COUNTS
from tracker.models.events import CompletionEvent, ViewEvent
from tracker.models.notifications import UnitNotificationCount
from tracker.models.snapshot import CatalogSnapshot


def _viewed_by(events: Iterable[ViewEvent], user_id: int) -> set[int]:
    return {e.resource_id for e in events if e.user_id == user_id}


def _completed_by(events: Iterable[CompletionEvent], user_id: int) -> set[int]:
    return {e.assignment_id for e in events if e.user_id == user_id}


def count_unit_notifications(
    user_id: int, catalog: CatalogSnapshot
) -> dict[str, UnitNotificationCount]:
    """Return ``{unit_code: UnitNotificationCount}`` in catalog unit order.

    Units with nothing outstanding still appear with zero counts. Resources
    whose unit is not in the catalog are ignored.
    """
    viewed_notes = _viewed_by(catalog.note_views, user_id)
    viewed_papers = _viewed_by(catalog.paper_views, user_id)
    completed = _completed_by(catalog.completions, user_id)

    counts: dict[str, dict[str, int]] = {
        unit.unit_code: {"notes": 0, "assignments": 0, "papers": 0}
        for unit in catalog.units
    }

    for note in catalog.notes:
        if note.unit_code in counts and note.id not in viewed_notes:
            counts[note.unit_code]["notes"] += 1

    for paper in catalog.past_papers:
        if paper.unit_code in counts and paper.id not in viewed_papers:
            counts[paper.unit_code]["papers"] += 1

    for assignment in catalog.assignments:
        if assignment.unit_code in counts and assignment.id not in completed:
            counts[assignment.unit_code]["assignments"] += 1

    NOTIFICATION_COUNTS.inc()

    return {
        unit_code: UnitNotificationCount(
            unit_code=unit_code,
            unread_notes=c["notes"],
            pending_assignments=c["assignments"],
            unread_past_papers=c["papers"],
        )
        for unit_code, c in counts.items()
    }
