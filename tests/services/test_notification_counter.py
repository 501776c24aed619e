"""Tests for per-unit unread/pending badge counts."""

from __future__ import annotations

from tracker.models.events import CompletionEvent, ViewEvent
from tracker.models.snapshot import CatalogSnapshot
from tracker.models.unit import AssignmentRecord, Note, PastPaper, Unit
from tracker.services.notification_counter import count_unit_notifications

MAT = Unit(unit_code="MAT2101", name="Linear Algebra")
STA = Unit(unit_code="STA2101", name="Statistics")


def _assignment(assignment_id: int, unit_code: str = "MAT2101") -> AssignmentRecord:
    return AssignmentRecord(
        id=assignment_id,
        unit_code=unit_code,
        title=f"A{assignment_id}",
        created_at=0,
        deadline=10,
    )


def test_unread_and_pending_counts() -> None:
    """3 notes with 1 viewed, 2 assignments none done, no past papers."""
    catalog = CatalogSnapshot(
        units=(MAT,),
        assignments=(_assignment(1), _assignment(2)),
        notes=tuple(Note(id=i, unit_code="MAT2101", title=f"N{i}") for i in (1, 2, 3)),
        note_views=(ViewEvent(resource_id=2, user_id=7, viewed_at=5),),
    )
    counts = count_unit_notifications(7, catalog)

    mat = counts["MAT2101"]
    assert mat.unread_notes == 2
    assert mat.pending_assignments == 2
    assert mat.unread_past_papers == 0
    assert mat.total == 4


def test_completed_and_viewed_resources_are_not_counted() -> None:
    catalog = CatalogSnapshot(
        units=(MAT,),
        assignments=(_assignment(1), _assignment(2)),
        past_papers=(
            PastPaper(id=1, unit_code="MAT2101", title="2023"),
            PastPaper(id=2, unit_code="MAT2101", title="2024"),
        ),
        completions=(CompletionEvent(assignment_id=1, user_id=7, completed_at=3),),
        paper_views=(ViewEvent(resource_id=1, user_id=7, viewed_at=4),),
    )
    mat = count_unit_notifications(7, catalog)["MAT2101"]
    assert mat.pending_assignments == 1
    assert mat.unread_past_papers == 1
    assert mat.total == 2


def test_other_students_events_are_ignored() -> None:
    catalog = CatalogSnapshot(
        units=(MAT,),
        assignments=(_assignment(1),),
        notes=(Note(id=1, unit_code="MAT2101", title="N1"),),
        completions=(CompletionEvent(assignment_id=1, user_id=8, completed_at=3),),
        note_views=(ViewEvent(resource_id=1, user_id=8, viewed_at=4),),
    )
    mat = count_unit_notifications(7, catalog)["MAT2101"]
    assert (mat.unread_notes, mat.pending_assignments) == (1, 1)


def test_note_and_paper_views_are_kept_apart() -> None:
    """A paper view with the same id as a note does not mark the note read."""
    catalog = CatalogSnapshot(
        units=(MAT,),
        notes=(Note(id=1, unit_code="MAT2101", title="N1"),),
        past_papers=(PastPaper(id=1, unit_code="MAT2101", title="P1"),),
        paper_views=(ViewEvent(resource_id=1, user_id=7, viewed_at=4),),
    )
    mat = count_unit_notifications(7, catalog)["MAT2101"]
    assert mat.unread_notes == 1
    assert mat.unread_past_papers == 0


def test_every_unit_present_in_catalog_order() -> None:
    catalog = CatalogSnapshot(
        units=(STA, MAT),
        assignments=(_assignment(1, "MAT2101"),),
    )
    counts = count_unit_notifications(7, catalog)
    assert list(counts) == ["STA2101", "MAT2101"]
    assert counts["STA2101"].total == 0
    assert counts["MAT2101"].total == 1


def test_resources_of_unknown_unit_are_ignored() -> None:
    catalog = CatalogSnapshot(
        units=(MAT,),
        assignments=(_assignment(1, "PHY1001"),),
        notes=(Note(id=1, unit_code="PHY1001", title="N1"),),
    )
    counts = count_unit_notifications(7, catalog)
    assert list(counts) == ["MAT2101"]
    assert counts["MAT2101"].total == 0


def test_total_is_sum_of_parts_for_every_unit() -> None:
    catalog = CatalogSnapshot(
        units=(MAT, STA),
        assignments=(_assignment(1), _assignment(2, "STA2101"), _assignment(3)),
        notes=(
            Note(id=1, unit_code="MAT2101", title="N1"),
            Note(id=2, unit_code="STA2101", title="N2"),
        ),
        past_papers=(PastPaper(id=1, unit_code="STA2101", title="P1"),),
        completions=(CompletionEvent(assignment_id=3, user_id=7, completed_at=1),),
    )
    for count in count_unit_notifications(7, catalog).values():
        assert count.total == (
            count.unread_notes + count.unread_past_papers + count.pending_assignments
        )


def test_empty_catalog_gives_empty_mapping() -> None:
    assert count_unit_notifications(7, CatalogSnapshot()) == {}


def test_repeated_calls_return_identical_counts() -> None:
    catalog = CatalogSnapshot(units=(MAT,), assignments=(_assignment(1),))
    assert count_unit_notifications(7, catalog) == count_unit_notifications(7, catalog)
