from typing import List, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.auth.session import AuthSession
from meritboard.core.exceptions import ServiceError
from meritboard.core.models import SchoolClass, WeeklyScore
from meritboard.core.weeks import AcademicWeek

from .schemas import WeeklyScoreResponse, WeeklyScoreUpdate


def _score_to_response(s: WeeklyScore) -> WeeklyScoreResponse:
    return WeeklyScoreResponse.model_validate(s)


async def list_weekly_scores(
    db: AsyncSession,
    week: AcademicWeek,
    class_ids: Optional[List[str]] = None,
) -> List[WeeklyScoreResponse]:
    stmt = select(WeeklyScore).where(WeeklyScore.week_id == week.week_id)
    if class_ids is not None:
        stmt = stmt.where(WeeklyScore.class_id.in_(class_ids))
    result = await db.execute(stmt.order_by(WeeklyScore.class_id))
    return [_score_to_response(s) for s in result.scalars().all()]


async def upsert_weekly_score(
    db: AsyncSession,
    session: AuthSession,
    week: AcademicWeek,
    class_id: str,
    payload: WeeklyScoreUpdate,
) -> WeeklyScoreResponse:
    if await db.get(SchoolClass, class_id) is None:
        raise ServiceError("Class not found", status.HTTP_404_NOT_FOUND)

    score_id = f"{week.week_id}_{class_id}"
    obj = await db.get(WeeklyScore, score_id)
    if obj is None:
        obj = WeeklyScore(
            id=score_id,
            week_id=week.week_id,
            term_year=week.term_year,
            week=week.number,
            class_id=class_id,
        )
        db.add(obj)

    for field_name, value in payload.model_dump(exclude_unset=True).items():
        setattr(obj, field_name, value)
    obj.updated_by = session.user_id
    await db.commit()
    await db.refresh(obj)
    return _score_to_response(obj)
