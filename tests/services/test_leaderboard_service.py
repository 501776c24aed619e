"""Service-level tests: snapshot read from the repo, then computed."""

from __future__ import annotations

import asyncio

import pytest

from tests.conftest import DAY, HOUR, add_assignment, add_student, add_unit, complete
from tracker.models.events import CompletionEvent, ViewEvent
from tracker.models.unit import Note
from tracker.repos.snapshot_repo import InMemorySnapshotRepo
from tracker.services.leaderboard_service import LeaderboardService

NOW = 10 * DAY


@pytest.fixture
def service_repo() -> InMemorySnapshotRepo:
    repo = InMemorySnapshotRepo()
    add_unit(repo, "MAT2101")
    add_unit(repo, "STA2101")
    for user_id in (1, 2, 3):
        add_student(repo, user_id)
    return repo


def _service(repo: InMemorySnapshotRepo) -> LeaderboardService:
    return LeaderboardService(repo, clock=lambda: NOW)


def test_unit_ranking_only_counts_that_unit(service_repo: InMemorySnapshotRepo) -> None:
    add_assignment(service_repo, 1, "MAT2101")
    add_assignment(service_repo, 2, "STA2101")
    complete(service_repo, 1, 1, 5 * HOUR)
    complete(service_repo, 2, 2, 1 * HOUR)

    ranking = asyncio.run(_service(service_repo).compute_unit_ranking("MAT2101"))
    assert [e.user_id for e in ranking] == [1]
    assert ranking[0].position == 1


def test_unit_without_assignments_ranks_nobody(
    service_repo: InMemorySnapshotRepo,
) -> None:
    assert asyncio.run(_service(service_repo).compute_unit_ranking("STA2101")) == []


def test_deleted_assignment_drops_only_its_completion(
    service_repo: InMemorySnapshotRepo,
) -> None:
    add_assignment(service_repo, 1)
    add_assignment(service_repo, 2)
    complete(service_repo, 1, 1, 2 * HOUR)
    complete(service_repo, 2, 1, 4 * HOUR)
    complete(service_repo, 2, 2, 1 * HOUR)
    service_repo.remove_assignment(2)

    ranking = asyncio.run(_service(service_repo).compute_unit_ranking("MAT2101"))
    assert [(e.user_id, e.completed_count) for e in ranking] == [(1, 1)]


def test_overall_ranking_spans_units(service_repo: InMemorySnapshotRepo) -> None:
    add_assignment(service_repo, 1, "MAT2101")
    add_assignment(service_repo, 2, "STA2101")
    complete(service_repo, 1, 1, 10 * HOUR)
    complete(service_repo, 2, 1, 2 * HOUR)  # avg 6h
    complete(service_repo, 2, 3, 8 * HOUR)

    ranking = asyncio.run(_service(service_repo).compute_overall_ranking())
    assert [(e.user_id, e.average_elapsed_ms) for e in ranking] == [
        (1, 6 * HOUR),
        (3, 8 * HOUR),
    ]


def test_unit_ranking_is_idempotent(service_repo: InMemorySnapshotRepo) -> None:
    add_assignment(service_repo, 1)
    complete(service_repo, 1, 1, HOUR)
    complete(service_repo, 1, 2, HOUR)
    service = _service(service_repo)

    first = asyncio.run(service.compute_unit_ranking("MAT2101"))
    second = asyncio.run(service.compute_unit_ranking("MAT2101"))
    assert first == second


def test_new_completion_is_seen_on_next_call(
    service_repo: InMemorySnapshotRepo,
) -> None:
    add_assignment(service_repo, 1)
    service = _service(service_repo)
    assert asyncio.run(service.compute_unit_ranking("MAT2101")) == []

    complete(service_repo, 1, 2, HOUR)
    ranking = asyncio.run(service.compute_unit_ranking("MAT2101"))
    assert [e.user_id for e in ranking] == [2]


def test_notification_counts(service_repo: InMemorySnapshotRepo) -> None:
    add_assignment(service_repo, 1, "MAT2101")
    add_assignment(service_repo, 2, "MAT2101")
    for note_id in (1, 2, 3):
        service_repo.add_note(Note(id=note_id, unit_code="MAT2101", title="n"))
    service_repo.record_note_view(ViewEvent(resource_id=1, user_id=1, viewed_at=0))

    counts = asyncio.run(_service(service_repo).compute_unit_notification_counts(1))
    assert counts["MAT2101"].total == 4
    assert counts["STA2101"].total == 0


def test_dashboard_uses_clock_and_overall_rank(
    service_repo: InMemorySnapshotRepo,
) -> None:
    add_assignment(service_repo, 1, deadline=NOW - DAY)
    add_assignment(service_repo, 2, deadline=NOW + DAY)
    add_assignment(service_repo, 3, deadline=NOW + 2 * DAY)
    complete(service_repo, 3, 2, HOUR)
    complete(service_repo, 3, 1, 2 * HOUR)

    stats = asyncio.run(_service(service_repo).dashboard_stats(1))
    assert stats.overdue == 1
    assert stats.upcoming == 1
    assert stats.rank == 2


def test_deadlines_and_activity(service_repo: InMemorySnapshotRepo) -> None:
    add_assignment(service_repo, 1, deadline=NOW + DAY)
    complete(service_repo, 1, 1, HOUR)
    service = _service(service_repo)

    deadlines = asyncio.run(service.upcoming_deadlines(1))
    assert [(d.assignment_id, d.completed) for d in deadlines] == [(1, True)]

    activity = asyncio.run(service.recent_activity(1))
    assert [a.kind for a in activity] == ["assignment"]


def test_duplicate_completion_rejected_by_event_source(
    service_repo: InMemorySnapshotRepo,
) -> None:
    add_assignment(service_repo, 1)
    service_repo.record_completion(CompletionEvent(1, 1, HOUR))
    with pytest.raises(ValueError, match="already completed"):
        service_repo.record_completion(CompletionEvent(1, 1, 2 * HOUR))
