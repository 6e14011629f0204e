from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import ensure_class_access, require_capability
from meritboard.auth.session import AuthSession
from meritboard.core.exceptions import ServiceError
from meritboard.core.weeks import resolve_week
from meritboard.db.session import get_db

from .schemas import WeeklyScoreResponse, WeeklyScoreUpdate
from . import service

router = APIRouter(prefix="/api/v1/weekly-scores", tags=["weekly-scores"])


@router.get("", response_model=List[WeeklyScoreResponse])
async def list_weekly_scores(
    week: Optional[int] = Query(None, ge=1),
    term_year: Optional[int] = Query(None, ge=2000),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.RANKINGS_READ)),
) -> List[WeeklyScoreResponse]:
    try:
        academic = resolve_week(week, term_year)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return await service.list_weekly_scores(db, academic, class_ids=session.visible_class_ids())


@router.put("/{week}/{class_id}", response_model=WeeklyScoreResponse)
async def upsert_weekly_score(
    week: int,
    class_id: str,
    payload: WeeklyScoreUpdate,
    term_year: Optional[int] = Query(None, ge=2000),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.WEEKLY_SCORES_EDIT)),
) -> WeeklyScoreResponse:
    """Set study/discipline/hygiene scores and comment for a class; omitted fields keep their value."""
    ensure_class_access(session, class_id)
    try:
        academic = resolve_week(week, term_year)
        return await service.upsert_weekly_score(db, session, academic, class_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
