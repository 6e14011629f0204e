from typing import List, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.core.exceptions import ServiceError
from meritboard.core.models import Record, SchoolClass, Student

from .schemas import (
    StudentCreate,
    StudentDetailResponse,
    StudentRecordItem,
    StudentResponse,
    StudentUpdate,
)


def _student_to_response(s: Student) -> StudentResponse:
    return StudentResponse(
        id=s.id,
        school_id=s.school_id,
        full_name=s.full_name,
        class_id=s.class_id,
        total_merit_points=s.total_merit_points or 0,
        total_demerit_points=s.total_demerit_points or 0,
        created_at=s.created_at,
        updated_at=s.updated_at,
    )


async def _ensure_class_exists(db: AsyncSession, class_id: str) -> None:
    if await db.get(SchoolClass, class_id) is None:
        raise ServiceError("Class not found", status.HTTP_404_NOT_FOUND)


async def create_student(db: AsyncSession, payload: StudentCreate) -> StudentResponse:
    await _ensure_class_exists(db, payload.class_id)
    try:
        obj = Student(
            full_name=payload.full_name.strip(),
            school_id=payload.school_id.strip(),
            class_id=payload.class_id,
            total_merit_points=0,
            total_demerit_points=0,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
        return _student_to_response(obj)
    except IntegrityError:
        await db.rollback()
        raise ServiceError("School id already exists", status.HTTP_409_CONFLICT)


async def list_students(
    db: AsyncSession,
    class_id: Optional[str] = None,
    class_ids: Optional[List[str]] = None,
    search: Optional[str] = None,
) -> List[StudentResponse]:
    stmt = select(Student)
    if class_id:
        stmt = stmt.where(Student.class_id == class_id)
    if class_ids is not None:
        stmt = stmt.where(Student.class_id.in_(class_ids))
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(Student.full_name.ilike(pattern) | Student.school_id.ilike(pattern))
    stmt = stmt.order_by(Student.class_id, Student.full_name)
    result = await db.execute(stmt)
    return [_student_to_response(s) for s in result.scalars().all()]


async def get_student(db: AsyncSession, student_id: str) -> Optional[Student]:
    return await db.get(Student, student_id)


async def get_student_detail(db: AsyncSession, student: Student) -> StudentDetailResponse:
    """Student with full record history, newest first."""
    result = await db.execute(
        select(Record)
        .where(Record.student_id == student.id)
        .order_by(Record.record_date.desc(), Record.id.desc())
    )
    records = [
        StudentRecordItem(
            id=r.id,
            rule_code=r.rule_code,
            rule_type=r.rule_type,
            points_applied=r.points_applied,
            quantity=r.quantity,
            class_id=r.class_id,
            record_date=r.record_date,
            week=r.week,
            created_by=r.created_by,
            reverses_id=r.reverses_id,
        )
        for r in result.scalars().all()
    ]
    return StudentDetailResponse(**_student_to_response(student).model_dump(), records=records)


async def update_student(db: AsyncSession, student: Student, payload: StudentUpdate) -> StudentResponse:
    if payload.class_id is not None and payload.class_id != student.class_id:
        # Existing records keep the class they were written against
        await _ensure_class_exists(db, payload.class_id)
        student.class_id = payload.class_id
    if payload.full_name is not None:
        student.full_name = payload.full_name.strip()
    if payload.school_id is not None:
        student.school_id = payload.school_id.strip()
    try:
        await db.commit()
        await db.refresh(student)
        return _student_to_response(student)
    except IntegrityError:
        await db.rollback()
        raise ServiceError("School id already exists", status.HTTP_409_CONFLICT)
