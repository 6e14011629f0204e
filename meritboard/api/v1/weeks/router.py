from typing import Optional

from fastapi import APIRouter, Depends, Query

from meritboard.auth.dependencies import get_current_session
from meritboard.auth.session import AuthSession
from meritboard.core.weeks import AcademicWeek, current_academic_week, list_academic_weeks

from .schemas import WeekListResponse, WeekResponse

router = APIRouter(prefix="/api/v1/weeks", tags=["weeks"])


def _week_to_response(w: AcademicWeek) -> WeekResponse:
    return WeekResponse(week=w.number, week_id=w.week_id, label=w.label, start=w.start, end=w.end)


@router.get("", response_model=WeekListResponse)
async def list_weeks(
    term_year: Optional[int] = Query(None, ge=2000),
    session: AuthSession = Depends(get_current_session),
) -> WeekListResponse:
    """All academic weeks of a term with date ranges, and the week containing today."""
    current = current_academic_week()
    year = term_year if term_year is not None else current.term_year
    return WeekListResponse(
        term_year=year,
        current=_week_to_response(current),
        weeks=[_week_to_response(w) for w in list_academic_weeks(year)],
    )
