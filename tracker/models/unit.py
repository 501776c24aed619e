from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Unit:
    unit_code: str  # e.g. "MAT2101"
    name: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class AssignmentRecord:
    """An assignment within a unit.

    ``created_at`` is the clock start for completion-time measurement.
    All timestamps are epoch milliseconds.
    """

    id: int
    unit_code: str
    title: str
    created_at: int
    deadline: int


@dataclass(frozen=True, slots=True)
class Note:
    id: int
    unit_code: str
    title: str
    created_at: int = 0


@dataclass(frozen=True, slots=True)
class PastPaper:
    id: int
    unit_code: str
    title: str
    year: str | None = None
    created_at: int = 0
