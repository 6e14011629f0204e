from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.api.v1.records.service import record_to_response
from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import ensure_class_access, require_capability
from meritboard.auth.session import AuthSession
from meritboard.core.exceptions import ServiceError
from meritboard.core.weeks import resolve_week
from meritboard.db.session import get_db

from .schemas import ClassWeekSummaryResponse, FinalizeRequest, FinalizeResponse, RankingResponse
from . import service

router = APIRouter(prefix="/api/v1/rankings", tags=["rankings"])


@router.get("", response_model=RankingResponse)
async def get_ranking(
    week: Optional[int] = Query(None, ge=1, description="Academic week; defaults to the current week"),
    term_year: Optional[int] = Query(None, ge=2000),
    grade: Optional[int] = Query(None, ge=1),
    include_manual: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RANKINGS_READ)),
) -> RankingResponse:
    try:
        academic = resolve_week(week, term_year)
        return await service.get_ranking(db, academic, grade=grade, include_manual=include_manual)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/classes/{class_id}", response_model=ClassWeekSummaryResponse)
async def get_class_week_summary(
    class_id: str,
    week: Optional[int] = Query(None, ge=1),
    term_year: Optional[int] = Query(None, ge=2000),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RANKINGS_READ)),
) -> ClassWeekSummaryResponse:
    """One class's merit/demerit for a week with the records behind it."""
    ensure_class_access(session, class_id)
    try:
        academic = resolve_week(week, term_year)
        standing, records = await service.class_week_summary(db, class_id, academic)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return ClassWeekSummaryResponse(
        **service.week_info(academic),
        class_id=standing.class_id,
        grade=standing.grade,
        class_name=standing.class_name,
        merit=standing.merit,
        demerit=standing.demerit,
        total=standing.total,
        records=[record_to_response(r) for r in records],
    )


@router.post(
    "/finalize",
    response_model=FinalizeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def finalize_week(
    payload: FinalizeRequest,
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RANKINGS_FINALIZE)),
) -> FinalizeResponse:
    try:
        academic = resolve_week(payload.week, payload.term_year)
        return await service.finalize_week(db, session, academic)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
