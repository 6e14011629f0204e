from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.api.v1.classes.service import list_class_models
from meritboard.app_logger import get_logger
from meritboard.auth.session import AuthSession
from meritboard.core.exceptions import ServiceError
from meritboard.core.ids import class_name_from_id, natural_sort_key
from meritboard.core.models import Record, SchoolClass, WeeklyRanking, WeeklyScore
from meritboard.core.ranking import (
    ClassStanding,
    GradeRanking,
    ManualScore,
    assign_ranks,
    rank_by_grade,
    tally_week,
)
from meritboard.core.weeks import AcademicWeek

from .schemas import (
    FinalizeResponse,
    GradeRankingResponse,
    RankingResponse,
    StandingResponse,
    WeekInfo,
)

logger = get_logger("rankings")


def week_info(week: AcademicWeek) -> dict:
    return WeekInfo(
        term_year=week.term_year,
        week=week.number,
        week_id=week.week_id,
        label=week.label,
        start=week.start,
        end=week.end,
    ).model_dump()


def _standing_to_response(s: ClassStanding, include_manual: bool) -> StandingResponse:
    return StandingResponse(
        class_id=s.class_id,
        grade=s.grade,
        class_name=s.class_name,
        merit=s.merit,
        demerit=s.demerit,
        total=s.total,
        rank=s.rank,
        record_count=s.record_count,
        manual_total=s.manual_total if include_manual else None,
        grand_total=s.grand_total if include_manual else None,
    )


async def is_week_finalized(db: AsyncSession, week_id: str) -> bool:
    result = await db.execute(
        select(WeeklyRanking.id).where(WeeklyRanking.week_id == week_id).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def load_week_records(
    db: AsyncSession,
    week: AcademicWeek,
    class_ids: Optional[List[str]] = None,
) -> List[Record]:
    """Every record dated inside the week, offsetting entries included."""
    stmt = select(Record).where(Record.record_date >= week.start, Record.record_date <= week.end)
    if class_ids is not None:
        stmt = stmt.where(Record.class_id.in_(class_ids))
    result = await db.execute(stmt.order_by(Record.record_date, Record.created_at))
    return list(result.scalars().all())


async def load_manual_scores(db: AsyncSession, week_id: str) -> Dict[str, ManualScore]:
    result = await db.execute(select(WeeklyScore).where(WeeklyScore.week_id == week_id))
    return {
        row.class_id: ManualScore(
            study=row.study,
            discipline=row.discipline,
            hygiene=row.hygiene,
            comment=row.comment,
        )
        for row in result.scalars().all()
    }


async def compute_week_ranking(
    db: AsyncSession,
    week: AcademicWeek,
    grade: Optional[int] = None,
    include_manual: bool = False,
) -> List[GradeRanking]:
    classes = await list_class_models(db, grade=grade)
    records = await load_week_records(db, week, class_ids=[c.id for c in classes])
    manual = await load_manual_scores(db, week.week_id) if include_manual else None
    return rank_by_grade(records, classes, manual_scores=manual, include_manual=include_manual)


async def _snapshot_ranking(
    db: AsyncSession,
    week: AcademicWeek,
    grade: Optional[int],
    include_manual: bool,
) -> Tuple[List[GradeRanking], Optional[datetime]]:
    stmt = select(WeeklyRanking).where(WeeklyRanking.week_id == week.week_id)
    if grade is not None:
        stmt = stmt.where(WeeklyRanking.grade == grade)
    rows = (await db.execute(stmt)).scalars().all()
    if not rows:
        return [], None

    names = {
        c.id: c.class_name
        for c in (await db.execute(select(SchoolClass))).scalars().all()
    }
    manual = await load_manual_scores(db, week.week_id) if include_manual else {}
    by_grade: Dict[int, List[ClassStanding]] = {}
    for row in rows:
        by_grade.setdefault(row.grade, []).append(
            ClassStanding(
                class_id=row.class_id,
                grade=row.grade,
                # class may have been renamed or removed since the lock
                class_name=names.get(row.class_id) or class_name_from_id(row.class_id),
                merit=row.merit,
                demerit=row.demerit,
                manual=manual.get(row.class_id),
                rank=row.rank,
            )
        )

    grades = []
    for g in sorted(by_grade):
        standings = by_grade[g]
        if include_manual:
            standings = assign_ranks(standings, include_manual=True)
        else:
            standings.sort(key=lambda s: (s.rank, natural_sort_key(s.class_name), s.class_id))
        grades.append(GradeRanking(grade=g, standings=standings))
    return grades, max(row.locked_at for row in rows)


async def get_ranking(
    db: AsyncSession,
    week: AcademicWeek,
    grade: Optional[int] = None,
    include_manual: bool = False,
) -> RankingResponse:
    """Stored snapshot for a finalized week, live computation otherwise."""
    finalized = await is_week_finalized(db, week.week_id)
    locked_at = None
    if finalized:
        grades, locked_at = await _snapshot_ranking(db, week, grade, include_manual)
    else:
        grades = await compute_week_ranking(db, week, grade=grade, include_manual=include_manual)
    return RankingResponse(
        **week_info(week),
        finalized=finalized,
        locked_at=locked_at,
        include_manual=include_manual,
        grades=[
            GradeRankingResponse(
                grade=g.grade,
                standings=[_standing_to_response(s, include_manual) for s in g.standings],
            )
            for g in grades
        ],
    )


async def class_week_summary(
    db: AsyncSession,
    class_id: str,
    week: AcademicWeek,
) -> Tuple[ClassStanding, List[Record]]:
    obj = await db.get(SchoolClass, class_id)
    if not obj:
        raise ServiceError("Class not found", status.HTTP_404_NOT_FOUND)
    records = await load_week_records(db, week, class_ids=[class_id])
    standing = tally_week(records, [obj])[0]
    return standing, records


async def finalize_week(
    db: AsyncSession,
    session: AuthSession,
    week: AcademicWeek,
) -> FinalizeResponse:
    """Lock the week's standings: one row per class, all written in one commit."""
    if await is_week_finalized(db, week.week_id):
        raise ServiceError(f"Week {week.number} ({week.week_id}) is already finalized", status.HTTP_409_CONFLICT)

    grades = await compute_week_ranking(db, week)
    if not any(g.standings for g in grades):
        raise ServiceError(
            f"Week {week.number} ({week.week_id}) has no classes to finalize", status.HTTP_400_BAD_REQUEST
        )
    locked_at = datetime.now(timezone.utc)
    count = 0
    try:
        for g in grades:
            for s in g.standings:
                db.add(
                    WeeklyRanking(
                        id=f"{week.week_id}_{s.grade}_{s.class_id}",
                        week_id=week.week_id,
                        term_year=week.term_year,
                        week=week.number,
                        grade=s.grade,
                        class_id=s.class_id,
                        merit=s.merit,
                        demerit=s.demerit,
                        total=s.total,
                        rank=s.rank,
                        locked_at=locked_at,
                    )
                )
                count += 1
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError(f"Week {week.number} ({week.week_id}) is already finalized", status.HTTP_409_CONFLICT)

    logger.info("Week %s (%s) finalized by %s: %d classes", week.number, week.week_id, session.user_id, count)
    return FinalizeResponse(**week_info(week), locked_at=locked_at, class_count=count)
