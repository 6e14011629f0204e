"""
Fill in the academic week on records written before the column existed.

Dry run by default: lists what would change. Pass --apply to write every update
in one transaction. Records whose date falls outside the term's weeks are
reported and left untouched.

Usage: python -m meritboard.scripts.backfill_record_weeks [--apply]
"""
import argparse
import asyncio
from dataclasses import dataclass, field
from typing import List, Tuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from meritboard.core.config import settings
from meritboard.core.models import Record
from meritboard.core.weeks import academic_week_number
from meritboard.db.session import AsyncSessionLocal


@dataclass
class BackfillResult:
    # (record id, computed week)
    updates: List[Tuple[str, int]] = field(default_factory=list)
    skipped: List[Tuple[str, int]] = field(default_factory=list)
    applied: bool = False


async def plan_backfill(session: AsyncSession) -> BackfillResult:
    rows = await session.execute(
        select(Record.id, Record.record_date).where(Record.week.is_(None)).order_by(Record.record_date)
    )
    result = BackfillResult()
    for record_id, record_date in rows.all():
        week = academic_week_number(record_date)
        if 1 <= week <= settings.total_weeks:
            result.updates.append((record_id, week))
        else:
            result.skipped.append((record_id, week))
    return result


async def backfill_record_weeks(session: AsyncSession, apply: bool = False) -> BackfillResult:
    result = await plan_backfill(session)
    if not apply or not result.updates:
        return result
    try:
        for record_id, week in result.updates:
            await session.execute(
                update(Record).where(Record.id == record_id, Record.week.is_(None)).values(week=week)
            )
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    result.applied = True
    return result


async def run(apply: bool) -> None:
    async with AsyncSessionLocal() as session:
        result = await backfill_record_weeks(session, apply=apply)

    if not result.updates and not result.skipped:
        print("No records without a week found. Exiting.")
        return
    for record_id, week in result.updates:
        print(f"  {record_id} -> week {week}")
    for record_id, week in result.skipped:
        print(f"  SKIP: {record_id} computed week {week} is outside 1-{settings.total_weeks}")
    if result.applied:
        print(f"Done. Updated {len(result.updates)} record(s), skipped {len(result.skipped)}.")
    else:
        print(f"Dry run: {len(result.updates)} record(s) would be updated, {len(result.skipped)} skipped. Re-run with --apply to write.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Backfill academic week numbers on records.")
    parser.add_argument("--apply", action="store_true", help="write the updates (default is a dry run)")
    args = parser.parse_args()
    asyncio.run(run(args.apply))


if __name__ == "__main__":
    main()
