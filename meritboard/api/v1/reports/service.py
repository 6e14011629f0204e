"""
Term report: for every academic week and class, the competition total

    study + discipline + hygiene + merit - demerit

where a manual category that was never entered counts as the grade's base score
(``manual_score_default``, or the value in ``manual_score_grade_overrides``).
"""
import io
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.api.v1.classes.service import list_class_models
from meritboard.core.config import settings
from meritboard.core.models import Record, WeeklyScore
from meritboard.core.ranking import ManualScore, tally_week
from meritboard.core.weeks import academic_week_number, list_academic_weeks

from .schemas import ReportClass, ReportWeekRow, WeeklyReportResponse

REPORT_HEADERS = ["Week", "Dates"]


def base_score_for_grade(grade: int) -> int:
    return settings.manual_score_grade_overrides.get(grade, settings.manual_score_default)


async def build_weekly_report(
    db: AsyncSession,
    term_year: int,
    grade: Optional[int] = None,
) -> WeeklyReportResponse:
    classes = await list_class_models(db, grade=grade)
    weeks = list_academic_weeks(term_year)
    class_ids = [c.id for c in classes]

    records_by_week: Dict[int, List[Record]] = defaultdict(list)
    if class_ids:
        result = await db.execute(
            select(Record).where(
                Record.record_date >= weeks[0].start,
                Record.record_date <= weeks[-1].end,
                Record.class_id.in_(class_ids),
            )
        )
        for rec in result.scalars().all():
            records_by_week[academic_week_number(rec.record_date)].append(rec)

    manual: Dict[Tuple[int, str], ManualScore] = {}
    result = await db.execute(select(WeeklyScore).where(WeeklyScore.term_year == term_year))
    for row in result.scalars().all():
        manual[(row.week, row.class_id)] = ManualScore(
            study=row.study, discipline=row.discipline, hygiene=row.hygiene
        )

    rows = []
    for week in weeks:
        standings = tally_week(records_by_week.get(week.number, []), classes)
        scores = {}
        for s in standings:
            entry = manual.get((week.number, s.class_id)) or ManualScore()
            scores[s.class_id] = entry.total(default=base_score_for_grade(s.grade)) + s.total
        rows.append(
            ReportWeekRow(
                week=week.number,
                week_id=week.week_id,
                label=week.label,
                start=week.start,
                end=week.end,
                scores=scores,
            )
        )

    return WeeklyReportResponse(
        term_year=term_year,
        grade=grade,
        classes=[ReportClass(class_id=c.id, grade=c.grade, class_name=c.class_name) for c in classes],
        weeks=rows,
    )


def export_weekly_report(report: WeeklyReportResponse) -> bytes:
    """One sheet per grade: a row per week, a column per class."""
    wb = Workbook()
    wb.remove(wb.active)

    by_grade: Dict[int, List[ReportClass]] = defaultdict(list)
    for c in report.classes:
        by_grade[c.grade].append(c)

    if not by_grade:
        ws = wb.create_sheet("Report")
        ws.append(REPORT_HEADERS)

    for grade in sorted(by_grade):
        grade_classes = by_grade[grade]
        ws = wb.create_sheet(f"Grade {grade}")
        ws.append(REPORT_HEADERS + [c.class_name for c in grade_classes])
        for cell in ws[1]:
            cell.font = Font(bold=True)
        for row in report.weeks:
            ws.append(
                [f"Week {row.week}", f"{row.start:%d/%m} - {row.end:%d/%m}"]
                + [row.scores.get(c.class_id) for c in grade_classes]
            )
        ws.freeze_panes = "C2"

    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()
