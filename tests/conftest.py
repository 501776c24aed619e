from __future__ import annotations

import os
import sys
from pathlib import Path

# Keep the in-memory repo empty at import; tests seed what they need.
os.environ.setdefault("APP_ENV", "test")

# Ensure repo root is on sys.path so `import tracker` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tracker.api.dependencies import snapshot_repo  # noqa: E402
from tracker.main import app  # noqa: E402
from tracker.models.events import CompletionEvent  # noqa: E402
from tracker.models.student import Student  # noqa: E402
from tracker.models.unit import AssignmentRecord, Unit  # noqa: E402
from tracker.repos.snapshot_repo import InMemorySnapshotRepo  # noqa: E402

HOUR = 60 * 60 * 1000
DAY = 24 * HOUR


@pytest.fixture(autouse=True)
def reset_snapshot_repo() -> None:
    """Clear the in-memory event source between tests."""
    snapshot_repo.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def repo() -> InMemorySnapshotRepo:
    """The same repo instance the API reads from."""
    return snapshot_repo


# ---------------------------------------------------------------------------
# Seeding helpers
# ---------------------------------------------------------------------------


def add_unit(repo: InMemorySnapshotRepo, unit_code: str = "MAT2101") -> Unit:
    unit = Unit(unit_code=unit_code, name=unit_code.title())
    repo.add_unit(unit)
    return unit


def add_student(repo: InMemorySnapshotRepo, user_id: int, name: str = "") -> Student:
    student = Student(id=user_id, name=name or f"student-{user_id}")
    repo.add_student(student)
    return student


def add_assignment(
    repo: InMemorySnapshotRepo,
    assignment_id: int,
    unit_code: str = "MAT2101",
    created_at: int = 0,
    deadline: int = 7 * DAY,
) -> AssignmentRecord:
    assignment = AssignmentRecord(
        id=assignment_id,
        unit_code=unit_code,
        title=f"assignment-{assignment_id}",
        created_at=created_at,
        deadline=deadline,
    )
    repo.add_assignment(assignment)
    return assignment


def complete(
    repo: InMemorySnapshotRepo, assignment_id: int, user_id: int, completed_at: int
) -> CompletionEvent:
    event = CompletionEvent(
        assignment_id=assignment_id, user_id=user_id, completed_at=completed_at
    )
    repo.record_completion(event)
    return event
