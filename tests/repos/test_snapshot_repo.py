from __future__ import annotations

import asyncio

import pytest

from tests.conftest import add_assignment, add_student, add_unit, complete
from tracker.api.dependencies import seed_sample_data
from tracker.models.events import ViewEvent
from tracker.repos.snapshot_repo import InMemorySnapshotRepo
from tracker.services.leaderboard_service import LeaderboardService


def test_unit_snapshot_scopes_to_unit() -> None:
    repo = InMemorySnapshotRepo()
    add_student(repo, 1)
    add_student(repo, 2)
    add_assignment(repo, 1, "MAT2101")
    add_assignment(repo, 2, "STA2101")
    complete(repo, 1, 1, 10)
    complete(repo, 2, 2, 10)

    snapshot = asyncio.run(repo.unit_snapshot("MAT2101"))
    assert [a.id for a in snapshot.assignments] == [1]
    assert [(c.assignment_id, c.user_id) for c in snapshot.completions] == [(1, 1)]
    assert [s.id for s in snapshot.students] == [1]


def test_catalog_snapshot_scopes_events_to_user() -> None:
    repo = InMemorySnapshotRepo()
    add_unit(repo)
    add_assignment(repo, 1)
    complete(repo, 1, 1, 10)
    complete(repo, 1, 2, 10)
    repo.record_note_view(ViewEvent(resource_id=1, user_id=2, viewed_at=1))

    catalog = asyncio.run(repo.catalog_snapshot(1))
    assert [c.user_id for c in catalog.completions] == [1]
    assert catalog.note_views == ()
    assert [u.unit_code for u in catalog.units] == ["MAT2101"]


def test_repeat_view_keeps_first_timestamp() -> None:
    repo = InMemorySnapshotRepo()
    repo.record_paper_view(ViewEvent(resource_id=1, user_id=1, viewed_at=5))
    repo.record_paper_view(ViewEvent(resource_id=1, user_id=1, viewed_at=9))

    catalog = asyncio.run(repo.catalog_snapshot(1))
    assert [v.viewed_at for v in catalog.paper_views] == [5]


def test_duplicate_unit_rejected() -> None:
    repo = InMemorySnapshotRepo()
    add_unit(repo)
    with pytest.raises(ValueError, match="unit code already exists"):
        add_unit(repo)


def test_lookups_return_none_when_missing() -> None:
    repo = InMemorySnapshotRepo()
    assert asyncio.run(repo.get_unit("NOPE")) is None
    assert asyncio.run(repo.get_student(1)) is None


def test_sample_data_produces_a_unit_leaderboard() -> None:
    repo = InMemorySnapshotRepo()
    seed_sample_data(repo)

    ranking = asyncio.run(LeaderboardService(repo).compute_unit_ranking("MAT2101"))
    # Amina: 5h and 30h (avg 17.5h); Brian: 48h
    assert [(e.name, e.position) for e in ranking] == [
        ("Amina Otieno", 1),
        ("Brian Kamau", 2),
    ]
