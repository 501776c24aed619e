"""Read-only snapshots handed to the aggregation engine.

A snapshot is whatever the repo read for one request. The engine never
writes back to it and never keeps it between calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from tracker.models.events import CompletionEvent, ViewEvent
from tracker.models.student import Student
from tracker.models.unit import AssignmentRecord, Note, PastPaper, Unit


@dataclass(frozen=True, slots=True)
class UnitSnapshot:
    """Assignments, completions and the students who made them.

    Scoped to one unit for a unit leaderboard, or to every unit for the
    overall ranking.
    """

    assignments: tuple[AssignmentRecord, ...] = ()
    completions: tuple[CompletionEvent, ...] = ()
    students: tuple[Student, ...] = ()


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """The full unit catalog plus one student's completion and view events."""

    units: tuple[Unit, ...] = ()
    assignments: tuple[AssignmentRecord, ...] = ()
    notes: tuple[Note, ...] = ()
    past_papers: tuple[PastPaper, ...] = ()
    completions: tuple[CompletionEvent, ...] = ()
    note_views: tuple[ViewEvent, ...] = ()
    paper_views: tuple[ViewEvent, ...] = ()
