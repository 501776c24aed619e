from __future__ import annotations

from typing import Protocol

from tracker.models.events import CompletionEvent, ViewEvent
from tracker.models.snapshot import CatalogSnapshot, UnitSnapshot
from tracker.models.student import Student
from tracker.models.unit import AssignmentRecord, Note, PastPaper, Unit


class SnapshotRepo(Protocol):
    async def get_unit(self, unit_code: str) -> Unit | None: ...
    async def get_student(self, user_id: int) -> Student | None: ...
    async def unit_snapshot(self, unit_code: str) -> UnitSnapshot: ...
    async def overall_snapshot(self) -> UnitSnapshot: ...
    async def catalog_snapshot(self, user_id: int) -> CatalogSnapshot: ...


class InMemorySnapshotRepo:
    """Dict-backed event source for dev and tests.

    The ``add_*`` / ``record_*`` methods stand in for the write side of the
    application, which lives outside this service.
    """

    def __init__(self) -> None:
        self._units: dict[str, Unit] = {}
        self._students: dict[int, Student] = {}
        self._assignments: dict[int, AssignmentRecord] = {}
        self._notes: dict[int, Note] = {}
        self._papers: dict[int, PastPaper] = {}
        self._completions: dict[tuple[int, int], CompletionEvent] = {}
        self._note_views: dict[tuple[int, int], ViewEvent] = {}
        self._paper_views: dict[tuple[int, int], ViewEvent] = {}

    def clear(self) -> None:
        self._units.clear()
        self._students.clear()
        self._assignments.clear()
        self._notes.clear()
        self._papers.clear()
        self._completions.clear()
        self._note_views.clear()
        self._paper_views.clear()

    # --- write side (seed/test helpers) ---

    def add_unit(self, unit: Unit) -> None:
        if unit.unit_code in self._units:
            raise ValueError("unit code already exists")
        self._units[unit.unit_code] = unit

    def add_student(self, student: Student) -> None:
        if student.id in self._students:
            raise ValueError("student already exists")
        self._students[student.id] = student

    def add_assignment(self, assignment: AssignmentRecord) -> None:
        self._assignments[assignment.id] = assignment

    def remove_assignment(self, assignment_id: int) -> None:
        # Completions are left behind on purpose to mirror a delete that
        # races a completion.
        self._assignments.pop(assignment_id, None)

    def add_note(self, note: Note) -> None:
        self._notes[note.id] = note

    def add_past_paper(self, paper: PastPaper) -> None:
        self._papers[paper.id] = paper

    def record_completion(self, event: CompletionEvent) -> None:
        key = (event.assignment_id, event.user_id)
        if key in self._completions:
            raise ValueError("assignment already completed by this user")
        self._completions[key] = event

    def record_note_view(self, event: ViewEvent) -> None:
        # Repeat views keep the first timestamp.
        self._note_views.setdefault((event.resource_id, event.user_id), event)

    def record_paper_view(self, event: ViewEvent) -> None:
        self._paper_views.setdefault((event.resource_id, event.user_id), event)

    # --- read side ---

    async def get_unit(self, unit_code: str) -> Unit | None:
        return self._units.get(unit_code)

    async def get_student(self, user_id: int) -> Student | None:
        return self._students.get(user_id)

    async def unit_snapshot(self, unit_code: str) -> UnitSnapshot:
        assignment_ids = {
            a.id for a in self._assignments.values() if a.unit_code == unit_code
        }
        completions = tuple(
            c for c in self._completions.values() if c.assignment_id in assignment_ids
        )
        return UnitSnapshot(
            assignments=tuple(
                a for a in self._assignments.values() if a.id in assignment_ids
            ),
            completions=completions,
            students=self._students_for(completions),
        )

    async def overall_snapshot(self) -> UnitSnapshot:
        completions = tuple(self._completions.values())
        return UnitSnapshot(
            assignments=tuple(self._assignments.values()),
            completions=completions,
            students=self._students_for(completions),
        )

    async def catalog_snapshot(self, user_id: int) -> CatalogSnapshot:
        return CatalogSnapshot(
            units=tuple(self._units.values()),
            assignments=tuple(self._assignments.values()),
            notes=tuple(self._notes.values()),
            past_papers=tuple(self._papers.values()),
            completions=tuple(
                c for c in self._completions.values() if c.user_id == user_id
            ),
            note_views=tuple(
                v for v in self._note_views.values() if v.user_id == user_id
            ),
            paper_views=tuple(
                v for v in self._paper_views.values() if v.user_id == user_id
            ),
        )

    def _students_for(
        self, completions: tuple[CompletionEvent, ...]
    ) -> tuple[Student, ...]:
        user_ids = {c.user_id for c in completions}
        return tuple(s for s in self._students.values() if s.id in user_ids)
