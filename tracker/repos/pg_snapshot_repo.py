"""PostgreSQL implementation of SnapshotRepo."""

from __future__ import annotations

import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.db.tables import (
    AssignmentRow,
    CompletedAssignmentRow,
    NoteRow,
    PastPaperRow,
    UnitRow,
    UserNoteViewRow,
    UserPaperViewRow,
    UserRow,
)
from tracker.models.events import CompletionEvent, ViewEvent
from tracker.models.snapshot import CatalogSnapshot, UnitSnapshot
from tracker.models.student import Student
from tracker.models.unit import AssignmentRecord, Note, PastPaper, Unit


class PgSnapshotRepo:
    """Satisfies the SnapshotRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_unit(self, unit_code: str) -> Unit | None:
        stmt = select(UnitRow).where(UnitRow.unit_code == unit_code)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_unit(row)

    async def get_student(self, user_id: int) -> Student | None:
        stmt = select(UserRow).where(UserRow.id == user_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_student(row)

    async def unit_snapshot(self, unit_code: str) -> UnitSnapshot:
        assignment_rows = await self._scalars(
            select(AssignmentRow)
            .where(AssignmentRow.unit_code == unit_code)
            .order_by(AssignmentRow.id)
        )
        completion_rows = await self._scalars(
            select(CompletedAssignmentRow)
            .join(AssignmentRow, CompletedAssignmentRow.assignment_id == AssignmentRow.id)
            .where(AssignmentRow.unit_code == unit_code)
            .order_by(CompletedAssignmentRow.id)
        )
        return await self._unit_snapshot(assignment_rows, completion_rows)

    async def overall_snapshot(self) -> UnitSnapshot:
        assignment_rows = await self._scalars(
            select(AssignmentRow).order_by(AssignmentRow.id)
        )
        completion_rows = await self._scalars(
            select(CompletedAssignmentRow).order_by(CompletedAssignmentRow.id)
        )
        return await self._unit_snapshot(assignment_rows, completion_rows)

    async def catalog_snapshot(self, user_id: int) -> CatalogSnapshot:
        units = await self._scalars(select(UnitRow).order_by(UnitRow.id))
        assignments = await self._scalars(
            select(AssignmentRow).order_by(AssignmentRow.id)
        )
        notes = await self._scalars(select(NoteRow).order_by(NoteRow.id))
        papers = await self._scalars(select(PastPaperRow).order_by(PastPaperRow.id))
        completions = await self._scalars(
            select(CompletedAssignmentRow)
            .where(CompletedAssignmentRow.user_id == user_id)
            .order_by(CompletedAssignmentRow.id)
        )
        note_views = await self._scalars(
            select(UserNoteViewRow)
            .where(UserNoteViewRow.user_id == user_id)
            .order_by(UserNoteViewRow.id)
        )
        paper_views = await self._scalars(
            select(UserPaperViewRow)
            .where(UserPaperViewRow.user_id == user_id)
            .order_by(UserPaperViewRow.id)
        )
        return CatalogSnapshot(
            units=tuple(_row_to_unit(r) for r in units),
            assignments=tuple(_row_to_assignment(r) for r in assignments),
            notes=tuple(
                Note(
                    id=r.id,
                    unit_code=r.unit_code,
                    title=r.title,
                    created_at=_to_ms(r.created_at),
                )
                for r in notes
            ),
            past_papers=tuple(
                PastPaper(
                    id=r.id,
                    unit_code=r.unit_code,
                    title=r.title,
                    year=r.year,
                    created_at=_to_ms(r.created_at),
                )
                for r in papers
            ),
            completions=tuple(_row_to_completion(r) for r in completions),
            note_views=tuple(
                ViewEvent(
                    resource_id=r.note_id,
                    user_id=r.user_id,
                    viewed_at=_to_ms(r.viewed_at),
                )
                for r in note_views
            ),
            paper_views=tuple(
                ViewEvent(
                    resource_id=r.paper_id,
                    user_id=r.user_id,
                    viewed_at=_to_ms(r.viewed_at),
                )
                for r in paper_views
            ),
        )

    async def _scalars(self, stmt) -> list:
        return list((await self._session.execute(stmt)).scalars().all())

    async def _unit_snapshot(
        self,
        assignment_rows: list[AssignmentRow],
        completion_rows: list[CompletedAssignmentRow],
    ) -> UnitSnapshot:
        user_ids = {r.user_id for r in completion_rows}
        student_rows: list[UserRow] = []
        if user_ids:
            student_rows = await self._scalars(
                select(UserRow).where(UserRow.id.in_(user_ids)).order_by(UserRow.id)
            )
        return UnitSnapshot(
            assignments=tuple(_row_to_assignment(r) for r in assignment_rows),
            completions=tuple(_row_to_completion(r) for r in completion_rows),
            students=tuple(_row_to_student(r) for r in student_rows),
        )


def _to_ms(value: datetime.datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.UTC)
    return int(value.timestamp() * 1000)


def _row_to_unit(row: UnitRow) -> Unit:
    return Unit(unit_code=row.unit_code, name=row.name, description=row.description)


def _row_to_student(row: UserRow) -> Student:
    return Student(id=row.id, name=row.name, profile_image_url=row.profile_image_url)


def _row_to_assignment(row: AssignmentRow) -> AssignmentRecord:
    return AssignmentRecord(
        id=row.id,
        unit_code=row.unit_code,
        title=row.title,
        created_at=_to_ms(row.created_at),
        deadline=_to_ms(row.deadline),
    )


def _row_to_completion(row: CompletedAssignmentRow) -> CompletionEvent:
    return CompletionEvent(
        assignment_id=row.assignment_id,
        user_id=row.user_id,
        completed_at=_to_ms(row.completed_at),
    )
