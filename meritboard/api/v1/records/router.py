from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import ensure_class_access, require_capability
from meritboard.auth.session import AuthSession
from meritboard.core.enums import RuleType
from meritboard.core.exceptions import ServiceError
from meritboard.core.weeks import resolve_week
from meritboard.db.session import get_db

from .schemas import RecordBatchCreate, RecordCreate, RecordResponse
from . import service

router = APIRouter(prefix="/api/v1/records", tags=["records"])


@router.post(
    "",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_record(
    payload: RecordCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RECORDS_CREATE)),
) -> RecordResponse:
    try:
        return await service.create_record(db, session, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/batch",
    response_model=List[RecordResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_records_batch(
    payload: RecordBatchCreate,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RECORDS_CREATE)),
) -> List[RecordResponse]:
    """Several records (e.g. one rule applied to a group of students) written in one transaction."""
    try:
        return await service.create_records_batch(db, session, payload.items)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[RecordResponse])
async def list_records(
    week: Optional[int] = Query(None, ge=1),
    term_year: Optional[int] = Query(None, ge=2000),
    class_id: Optional[str] = Query(None),
    student_id: Optional[str] = Query(None),
    rule_type: Optional[RuleType] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RECORDS_READ)),
) -> List[RecordResponse]:
    if class_id:
        ensure_class_access(session, class_id)
    academic = None
    if week is not None:
        try:
            academic = resolve_week(week, term_year)
        except ServiceError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)
    return await service.list_records(
        db,
        week=academic,
        class_id=class_id,
        class_ids=session.visible_class_ids(),
        student_id=student_id,
        rule_type=rule_type,
        limit=limit,
        offset=offset,
    )


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RECORDS_READ)),
) -> RecordResponse:
    record = await service.get_record(db, record_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found")
    ensure_class_access(session, record.class_id)
    return service.record_to_response(record)


@router.post(
    "/{record_id}/reverse",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def reverse_record(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RECORDS_REVERSE)),
) -> RecordResponse:
    """Cancel a record by writing its offsetting entry."""
    try:
        return await service.reverse_record(db, session, record_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
