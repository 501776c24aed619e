from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, status

from tracker.core.config import SETTINGS
from tracker.db.engine import async_session_factory
from tracker.models.events import CompletionEvent, ViewEvent
from tracker.models.student import Student
from tracker.models.unit import AssignmentRecord, Note, PastPaper, Unit
from tracker.repos.pg_snapshot_repo import PgSnapshotRepo
from tracker.repos.snapshot_repo import InMemorySnapshotRepo, SnapshotRepo
from tracker.services.leaderboard_service import LeaderboardService

logger = logging.getLogger(__name__)

# In-memory event source used whenever DATABASE_URL is not configured.
snapshot_repo = InMemorySnapshotRepo()


def seed_sample_data(repo: InMemorySnapshotRepo) -> None:
    """Seed two units and a handful of students for local development."""
    hour = 60 * 60 * 1000
    day = 24 * hour
    base = 1_735_689_600_000  # 2025-01-01T00:00:00Z

    repo.add_unit(Unit(unit_code="MAT2101", name="Linear Algebra"))
    repo.add_unit(Unit(unit_code="STA2101", name="Probability and Statistics"))

    for student in (
        Student(id=1, name="Amina Otieno"),
        Student(id=2, name="Brian Kamau"),
        Student(id=3, name="Cheryl Wanjiru"),
    ):
        repo.add_student(student)

    repo.add_assignment(
        AssignmentRecord(
            id=1,
            unit_code="MAT2101",
            title="Matrix operations",
            created_at=base,
            deadline=base + 7 * day,
        )
    )
    repo.add_assignment(
        AssignmentRecord(
            id=2,
            unit_code="MAT2101",
            title="Eigenvalues",
            created_at=base + 7 * day,
            deadline=base + 14 * day,
        )
    )
    repo.add_assignment(
        AssignmentRecord(
            id=3,
            unit_code="STA2101",
            title="Discrete distributions",
            created_at=base,
            deadline=base + 10 * day,
        )
    )
    repo.add_note(Note(id=1, unit_code="MAT2101", title="Vectors", created_at=base))
    repo.add_note(Note(id=2, unit_code="STA2101", title="Bayes", created_at=base))
    repo.add_past_paper(
        PastPaper(id=1, unit_code="MAT2101", title="Final exam", year="2024")
    )

    repo.record_completion(CompletionEvent(1, 1, base + 5 * hour))
    repo.record_completion(CompletionEvent(2, 1, base + 7 * day + 30 * hour))
    repo.record_completion(CompletionEvent(1, 2, base + 2 * day))
    repo.record_completion(CompletionEvent(3, 3, base + 3 * hour))
    repo.record_note_view(ViewEvent(1, 1, base + hour))


if async_session_factory is None and SETTINGS.seed_sample_data:
    seed_sample_data(snapshot_repo)
    logger.info("Seeded in-memory snapshot repo with sample units")


async def get_snapshot_repo() -> AsyncGenerator[SnapshotRepo, None]:
    """Yield the request's event source.

    With a database configured, every request reads through its own
    session so one snapshot is never mixed with another request's reads.
    Rolls back on exception; reads only, so nothing is committed.
    """
    if async_session_factory is None:
        yield snapshot_repo
        return
    async with async_session_factory() as session:
        try:
            yield PgSnapshotRepo(session)
        except Exception:
            await session.rollback()
            raise


def get_leaderboard_service(
    repo: Annotated[SnapshotRepo, Depends(get_snapshot_repo)],
) -> LeaderboardService:
    return LeaderboardService(repo)


async def require_student(
    user_id: int,
    repo: Annotated[SnapshotRepo, Depends(get_snapshot_repo)],
) -> Student:
    student = await repo.get_student(user_id)
    if student is None:
        logger.warning("Unknown student requested user=%d", user_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="student not found"
        )
    return student


async def require_unit(
    unit_code: str,
    repo: Annotated[SnapshotRepo, Depends(get_snapshot_repo)],
) -> Unit:
    unit = await repo.get_unit(unit_code)
    if unit is None:
        logger.warning("Unknown unit requested unit=%s", unit_code)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="unit not found"
        )
    return unit
