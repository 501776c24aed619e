"""Group completion events by student and measure completion latency.

For every completion the aggregator finds the assignment it refers to and
records how long the student took: ``completed_at - assignment.created_at``.

Bad rows are dropped one at a time rather than failing the whole unit:

  missing_assignment — the assignment was deleted (or belongs to another
                       unit) after the completion was recorded
  unknown_student    — the completing user is not in the snapshot
  negative_elapsed   — completed before it was created (clock skew or a
                       backdated record); rejected, never clamped to zero

Each drop is counted in tracker_completions_skipped_total{reason}.
"""

from __future__ import annotations

import logging

from tracker.core.metrics import COMPLETIONS_SKIPPED
from tracker.models.ranking import CompletionDetail, StudentAggregate
from tracker.models.snapshot import UnitSnapshot

logger = logging.getLogger(__name__)


def aggregate_completions(
    snapshot: UnitSnapshot,
    unit_code: str | None = None,
) -> dict[int, StudentAggregate]:
    """Return ``{user_id: StudentAggregate}`` for the snapshot.

    When ``unit_code`` is given, only assignments in that unit count; a
    completion pointing at an assignment from another unit is treated the
    same as one pointing at a deleted assignment. ``None`` aggregates across
    every assignment in the snapshot.

    Completions keep their input order inside each aggregate.
    """
    assignments = {
        a.id: a
        for a in snapshot.assignments
        if unit_code is None or a.unit_code == unit_code
    }
    students = {s.id: s for s in snapshot.students}

    aggregates: dict[int, StudentAggregate] = {}

    for event in snapshot.completions:
        assignment = assignments.get(event.assignment_id)
        if assignment is None:
            COMPLETIONS_SKIPPED.labels(reason="missing_assignment").inc()
            logger.debug(
                "Skipping completion: assignment=%d not found user=%d",
                event.assignment_id,
                event.user_id,
            )
            continue

        student = students.get(event.user_id)
        if student is None:
            COMPLETIONS_SKIPPED.labels(reason="unknown_student").inc()
            logger.debug(
                "Skipping completion: user=%d not found assignment=%d",
                event.user_id,
                event.assignment_id,
            )
            continue

        elapsed_ms = event.completed_at - assignment.created_at
        if elapsed_ms < 0:
            COMPLETIONS_SKIPPED.labels(reason="negative_elapsed").inc()
            logger.warning(
                "Rejecting completion with negative elapsed time "
                "user=%d assignment=%d elapsed_ms=%d",
                event.user_id,
                event.assignment_id,
                elapsed_ms,
                extra={"unit_code": assignment.unit_code, "user_id": event.user_id},
            )
            continue

        aggregate = aggregates.get(student.id)
        if aggregate is None:
            aggregate = StudentAggregate(
                user_id=student.id,
                name=student.name,
                profile_image_url=student.profile_image_url,
            )
            aggregates[student.id] = aggregate

        aggregate.completions.append(
            CompletionDetail(
                assignment_id=assignment.id,
                title=assignment.title,
                created_at=assignment.created_at,
                completed_at=event.completed_at,
                elapsed_ms=elapsed_ms,
            )
        )

    return aggregates
