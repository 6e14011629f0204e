from typing import List, Optional, Tuple

from fastapi import status
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.api.v1.rankings.service import is_week_finalized
from meritboard.app_logger import get_logger
from meritboard.auth.session import AuthSession
from meritboard.core.config import settings
from meritboard.core.enums import RuleType
from meritboard.core.exceptions import ServiceError
from meritboard.core.models import Record, Rule, SchoolClass, Student
from meritboard.core.weeks import AcademicWeek, academic_week, to_org_date

from .schemas import RecordCreate, RecordResponse

logger = get_logger("records")


def record_to_response(r: Record) -> RecordResponse:
    return RecordResponse(
        id=r.id,
        rule_code=r.rule_code,
        rule_type=RuleType(r.rule_type),
        points_applied=r.points_applied,
        quantity=r.quantity,
        student_id=r.student_id,
        class_id=r.class_id,
        record_date=r.record_date,
        week=r.week,
        created_by=r.created_by,
        created_at=r.created_at,
        reverses_id=r.reverses_id,
    )


def counter_deltas(rule_type: str, points_applied: int) -> Tuple[int, int]:
    """(merit delta, demerit delta) for the running counters; demerit counters stay positive."""
    if rule_type == RuleType.MERIT.value:
        return points_applied, 0
    return 0, -points_applied


async def _apply_counters(db: AsyncSession, student_id: str, class_id: str, rule_type: str, points: int) -> None:
    merit_delta, demerit_delta = counter_deltas(rule_type, points)
    # SQL-side increments so concurrent writers do not overwrite each other
    await db.execute(
        update(Student)
        .where(Student.id == student_id)
        .values(
            total_merit_points=Student.total_merit_points + merit_delta,
            total_demerit_points=Student.total_demerit_points + demerit_delta,
        )
    )
    await db.execute(
        update(SchoolClass)
        .where(SchoolClass.id == class_id)
        .values(
            total_merit_points=SchoolClass.total_merit_points + merit_delta,
            total_demerit_points=SchoolClass.total_demerit_points + demerit_delta,
        )
    )


async def _ensure_week_open(db: AsyncSession, week: AcademicWeek) -> None:
    if await is_week_finalized(db, week.week_id):
        raise ServiceError(
            f"Week {week.number} ({week.week_id}) is finalized and can no longer change",
            status.HTTP_409_CONFLICT,
        )


async def _occurrence_in_week(db: AsyncSession, student_id: str, rule_code: str, week: AcademicWeek) -> int:
    """1-based position of a new entry among the student's entries for this rule and week."""
    result = await db.execute(
        select(func.count(Record.id)).where(
            Record.student_id == student_id,
            Record.rule_code == rule_code,
            Record.record_date >= week.start,
            Record.record_date <= week.end,
            Record.reverses_id.is_(None),
        )
    )
    return int(result.scalar_one() or 0) + 1


async def _stage_record(db: AsyncSession, session: AuthSession, payload: RecordCreate) -> Record:
    """Validate and add one record plus its counter updates to the open transaction."""
    rule = await db.get(Rule, payload.rule_code)
    if not rule:
        raise ServiceError(f"Rule {payload.rule_code} not found", status.HTTP_404_NOT_FOUND)
    if not rule.is_active:
        raise ServiceError(f"Rule {payload.rule_code} is inactive", status.HTTP_400_BAD_REQUEST)

    student = await db.get(Student, payload.student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    if not session.can_access_class(student.class_id):
        raise ServiceError("Class is outside your assignment", status.HTTP_403_FORBIDDEN)

    day = to_org_date(payload.record_date)
    week = academic_week(day)
    await _ensure_week_open(db, week)

    points = payload.quantity * rule.points
    if settings.progressive_demerits and rule.type == RuleType.DEMERIT.value:
        points *= await _occurrence_in_week(db, student.id, rule.code, week)

    record = Record(
        rule_code=rule.code,
        rule_type=rule.type,
        points_applied=points,
        quantity=payload.quantity,
        student_id=student.id,
        class_id=student.class_id,
        record_date=day,
        week=week.number,
        created_by=session.user_id,
    )
    db.add(record)
    await db.flush()
    await _apply_counters(db, student.id, student.class_id, rule.type, points)
    return record


async def create_record(db: AsyncSession, session: AuthSession, payload: RecordCreate) -> RecordResponse:
    try:
        record = await _stage_record(db, session, payload)
        await db.commit()
    except ServiceError:
        await db.rollback()
        raise
    await db.refresh(record)
    logger.info(
        "Record %s: %s %+d for student %s (%s) week %s by %s",
        record.id, record.rule_code, record.points_applied, record.student_id,
        record.class_id, record.week, session.user_id,
    )
    return record_to_response(record)


async def create_records_batch(
    db: AsyncSession,
    session: AuthSession,
    items: List[RecordCreate],
) -> List[RecordResponse]:
    """All-or-nothing: any invalid item rolls back the whole batch."""
    created: List[Record] = []
    try:
        for item in items:
            created.append(await _stage_record(db, session, item))
        await db.commit()
    except ServiceError:
        await db.rollback()
        raise
    for record in created:
        await db.refresh(record)
    logger.info("Batch of %d records written by %s", len(created), session.user_id)
    return [record_to_response(r) for r in created]


async def get_record(db: AsyncSession, record_id: str) -> Optional[Record]:
    return await db.get(Record, record_id)


async def reverse_record(db: AsyncSession, session: AuthSession, record_id: str) -> RecordResponse:
    """Write the offsetting entry for a record; the original row is left untouched."""
    original = await db.get(Record, record_id)
    if not original:
        raise ServiceError("Record not found", status.HTTP_404_NOT_FOUND)
    if not session.can_access_class(original.class_id):
        raise ServiceError("Class is outside your assignment", status.HTTP_403_FORBIDDEN)
    if original.reverses_id is not None:
        raise ServiceError("An offsetting record cannot be reversed", status.HTTP_409_CONFLICT)
    existing = await db.execute(select(Record.id).where(Record.reverses_id == original.id))
    if existing.scalar_one_or_none() is not None:
        raise ServiceError("Record has already been reversed", status.HTTP_409_CONFLICT)

    await _ensure_week_open(db, academic_week(original.record_date))

    offset = Record(
        rule_code=original.rule_code,
        rule_type=original.rule_type,
        points_applied=-original.points_applied,
        quantity=original.quantity,
        student_id=original.student_id,
        class_id=original.class_id,
        record_date=original.record_date,
        week=original.week,
        created_by=session.user_id,
        reverses_id=original.id,
    )
    try:
        db.add(offset)
        await db.flush()
        await _apply_counters(db, offset.student_id, offset.class_id, offset.rule_type, offset.points_applied)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError("Record has already been reversed", status.HTTP_409_CONFLICT)
    await db.refresh(offset)
    logger.info("Record %s reversed by %s (offset %s)", original.id, session.user_id, offset.id)
    return record_to_response(offset)


async def list_records(
    db: AsyncSession,
    week: Optional[AcademicWeek] = None,
    class_id: Optional[str] = None,
    class_ids: Optional[List[str]] = None,
    student_id: Optional[str] = None,
    rule_type: Optional[RuleType] = None,
    limit: int = 100,
    offset: int = 0,
) -> List[RecordResponse]:
    stmt = select(Record)
    if week is not None:
        stmt = stmt.where(Record.record_date >= week.start, Record.record_date <= week.end)
    if class_id:
        stmt = stmt.where(Record.class_id == class_id)
    if class_ids is not None:
        stmt = stmt.where(Record.class_id.in_(class_ids))
    if student_id:
        stmt = stmt.where(Record.student_id == student_id)
    if rule_type is not None:
        stmt = stmt.where(Record.rule_type == rule_type.value)
    stmt = stmt.order_by(Record.created_at.desc(), Record.id.desc()).offset(offset).limit(limit)
    result = await db.execute(stmt)
    return [record_to_response(r) for r in result.scalars().all()]
