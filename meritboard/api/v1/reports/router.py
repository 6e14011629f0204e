from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.capabilities import Capability
from meritboard.auth.rbac import require_capability
from meritboard.auth.session import AuthSession
from meritboard.core.exceptions import ServiceError
from meritboard.core.weeks import current_term_year
from meritboard.db.session import get_db

from .schemas import WeeklyReportResponse
from . import service

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("/weekly", response_model=WeeklyReportResponse)
async def get_weekly_report(
    term_year: Optional[int] = Query(None, ge=2000),
    grade: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.REPORTS_READ)),
) -> WeeklyReportResponse:
    """Week x class matrix of competition totals for one academic year."""
    return await service.build_weekly_report(db, term_year or current_term_year(), grade=grade)


@router.get("/weekly.xlsx")
async def download_weekly_report(
    term_year: Optional[int] = Query(None, ge=2000),
    grade: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
    session: AuthSession = Depends(require_capability(Capability.REPORTS_READ)),
) -> Response:
    year = term_year or current_term_year()
    try:
        report = await service.build_weekly_report(db, year, grade=grade)
        content = service.export_weekly_report(report)
        return Response(
            content=content,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f"attachment; filename=weekly_report_{year}.xlsx"},
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
