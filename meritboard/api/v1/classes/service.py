from typing import List, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.core.exceptions import ServiceError
from meritboard.core.ids import class_id_from_name, natural_sort_key
from meritboard.core.models import SchoolClass, Student

from .schemas import ClassCreate, ClassResponse, ClassUpdate


def _class_to_response(c: SchoolClass) -> ClassResponse:
    return ClassResponse(
        id=c.id,
        grade=c.grade,
        class_name=c.class_name,
        total_merit_points=c.total_merit_points or 0,
        total_demerit_points=c.total_demerit_points or 0,
        created_at=c.created_at,
        updated_at=c.updated_at,
    )


async def create_class(db: AsyncSession, payload: ClassCreate) -> ClassResponse:
    try:
        obj = SchoolClass(
            id=class_id_from_name(payload.class_name),
            grade=payload.grade,
            class_name=payload.class_name,
            total_merit_points=0,
            total_demerit_points=0,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
        return _class_to_response(obj)
    except IntegrityError:
        await db.rollback()
        raise ServiceError("Class already exists", status.HTTP_409_CONFLICT)


async def create_classes_bulk(db: AsyncSession, payload: List[ClassCreate]) -> List[ClassResponse]:
    """Create multiple classes in one request. All-or-nothing: rollback on first duplicate."""
    if not payload:
        return []
    try:
        created = []
        for item in payload:
            obj = SchoolClass(
                id=class_id_from_name(item.class_name),
                grade=item.grade,
                class_name=item.class_name,
                total_merit_points=0,
                total_demerit_points=0,
            )
            db.add(obj)
            await db.flush()
            created.append(obj)
        await db.commit()
        for obj in created:
            await db.refresh(obj)
        return [_class_to_response(c) for c in created]
    except IntegrityError:
        await db.rollback()
        raise ServiceError("One or more classes already exist", status.HTTP_409_CONFLICT)


async def list_class_models(
    db: AsyncSession,
    grade: Optional[int] = None,
    class_ids: Optional[List[str]] = None,
) -> List[SchoolClass]:
    stmt = select(SchoolClass)
    if grade is not None:
        stmt = stmt.where(SchoolClass.grade == grade)
    if class_ids is not None:
        stmt = stmt.where(SchoolClass.id.in_(class_ids))
    result = await db.execute(stmt)
    return sorted(result.scalars().all(), key=lambda c: (c.grade, natural_sort_key(c.class_name)))


async def list_classes(
    db: AsyncSession,
    grade: Optional[int] = None,
    class_ids: Optional[List[str]] = None,
) -> List[ClassResponse]:
    rows = await list_class_models(db, grade=grade, class_ids=class_ids)
    return [_class_to_response(c) for c in rows]


async def get_class(db: AsyncSession, class_id: str) -> Optional[ClassResponse]:
    obj = await db.get(SchoolClass, class_id)
    return _class_to_response(obj) if obj else None


async def update_class(
    db: AsyncSession,
    class_id: str,
    payload: ClassUpdate,
) -> Optional[ClassResponse]:
    obj = await db.get(SchoolClass, class_id)
    if not obj:
        return None
    if payload.class_name is not None:
        obj.class_name = payload.class_name.strip()
    try:
        await db.commit()
        await db.refresh(obj)
        return _class_to_response(obj)
    except IntegrityError:
        await db.rollback()
        raise ServiceError("Class name already exists", status.HTTP_409_CONFLICT)


async def delete_class(db: AsyncSession, class_id: str) -> bool:
    obj = await db.get(SchoolClass, class_id)
    if not obj:
        return False
    used = await db.execute(
        select(Student.id).where(Student.class_id == class_id).limit(1)
    )
    if used.scalar_one_or_none() is not None:
        raise ServiceError("Cannot delete class: it is used by students", status.HTTP_400_BAD_REQUEST)
    await db.delete(obj)
    await db.commit()
    return True
