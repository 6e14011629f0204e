from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import ensure_class_access, require_capability
from meritboard.auth.session import AuthSession
from meritboard.core.exceptions import ServiceError
from meritboard.db.session import get_db

from .schemas import StudentCreate, StudentDetailResponse, StudentResponse, StudentUpdate
from . import service

router = APIRouter(prefix="/api/v1/students", tags=["students"])


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_student(
    payload: StudentCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.STUDENTS_MANAGE)),
) -> StudentResponse:
    try:
        return await service.create_student(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[StudentResponse])
async def list_students(
    class_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Match on name or school id"),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.STUDENTS_READ)),
) -> List[StudentResponse]:
    if class_id:
        ensure_class_access(session, class_id)
    return await service.list_students(
        db,
        class_id=class_id,
        class_ids=session.visible_class_ids(),
        search=search,
    )


@router.get("/{student_id}", response_model=StudentDetailResponse)
async def get_student(
    student_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.STUDENTS_READ)),
) -> StudentDetailResponse:
    student = await service.get_student(db, student_id)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    ensure_class_access(session, student.class_id)
    return await service.get_student_detail(db, student)


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: str,
    payload: StudentUpdate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.STUDENTS_MANAGE)),
) -> StudentResponse:
    student = await service.get_student(db, student_id)
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    try:
        return await service.update_student(db, student, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
